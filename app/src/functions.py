from typing import List, Dict, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from app.src import schemas
from app.src.db import Language
from app.src.exceptions import APIException


def makeExceptionResponses(exceptions: List[APIException]) -> Dict[int, dict]:
    """
    Describe the errors an endpoint can raise in its OpenAPI document.

    Exceptions sharing a status code are listed as separate examples of one
    response, each named after its `X-Error` header so clients can match the
    example to the header they receive.

    Args:
        exceptions (List[APIException]): Instances of the errors the endpoint raises.

    Returns:
        Dict[int, dict]: `responses` argument for a FastAPI route decorator.

    Example:
        >>> makeExceptionResponses([exceptions.InvalidRange(Zone.created_on)])
        {406: {"model": ErrorResponse, "description": "InvalidRange", ...}}
    """
    responses = {}
    for exception in exceptions:
        errorName = (exception.headers or {}).get("X-Error", type(exception).__name__)
        response = responses.setdefault(
            exception.status_code,
            {
                "model": schemas.ErrorResponse,
                "description": errorName,
                "content": {"application/json": {"examples": {}}},
            },
        )
        if errorName not in response["description"].split(" | "):
            response["description"] += f" | {errorName}"
        examples = response["content"]["application/json"]["examples"]
        exampleKey = errorName if errorName not in examples else f"{errorName}_{len(examples)}"
        examples[exampleKey] = {
            "summary": exception.detail,
            "value": {"detail": exception.detail},
        }
    return responses


def enumStr(enumClass) -> str:
    """
    Convert an Enum class into a comma-separated string of its members.

    Each enum member is formatted as "<NAME>: <VALUE>".

    Example:
        >>> from enum import IntEnum
        >>> class Color(IntEnum):
        ...     RED = 1
        ...     GREEN = 2
        >>> enumStr(Color)
        'RED: 1, GREEN: 2'
    """
    return ", ".join(f"{x.name}: {x.value}" for x in enumClass)


def visible(model) -> Tuple[ColumnElement, ...]:
    """
    Build the criteria selecting rows that riders are allowed to see.

    A row is visible when it is not soft deleted and is flagged active.
    The tuple can be splatted into `Query.filter()` or into a relationship
    `.and_()` loader criteria.

    Args:
        model: Any ORM class carrying `deleted_on` and `is_active` columns.

    Example:
        >>> session.query(Zone).filter(*visible(Zone))
        >>> selectinload(BusStop.zone.and_(*visible(Zone)))
    """
    return (model.deleted_on.is_(None), model.is_active.is_(True))


def filterByName(query: Query, nameColumn, text: str) -> Query:
    """
    Restrict a query to rows whose localized name contains `text` in any language.

    Args:
        query (Query): Query over the entity being searched.
        nameColumn: Foreign key column of the entity pointing at `language.id`
            (ex:- `BusStop.name_id`).
        text (str): Case-insensitive fragment to look for.

    Returns:
        Query: The joined and filtered query.
    """
    pattern = f"%{text}%"
    return query.join(Language, nameColumn == Language.id).filter(
        or_(
            Language.en.ilike(pattern),
            Language.ar.ilike(pattern),
            Language.ckb.ilike(pattern),
        )
    )


def snapshotIsolationLevel(dialectName: str) -> str:
    """
    Pick the weakest isolation level under which every statement of a
    transaction reads from the same snapshot.

    PostgreSQL runs each statement of a READ COMMITTED transaction against a
    fresh snapshot, so multi-query reads need REPEATABLE READ there. SQLite
    only offers SERIALIZABLE (its default) for this guarantee.

    Args:
        dialectName (str): `Dialect.name` of the bound engine.

    Returns:
        str: Value for the `isolation_level` execution option.
    """
    if dialectName == "postgresql":
        return "REPEATABLE READ"
    return "SERIALIZABLE"
