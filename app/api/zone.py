from datetime import datetime
from enum import IntEnum
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm.session import Session
from pydantic import BaseModel, ConfigDict, Field

from app.src.db import Zone, sessionMaker
from app.src import exceptions, validators
from app.src.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.src.enums import OrderIn
from app.src.functions import enumStr, filterByName, makeExceptionResponses, visible
from app.src.schemas import LanguageSchema
from app.src.urls import URL_ZONE

route_public = APIRouter()


## Output Schema
class ZoneSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: LanguageSchema
    description: Optional[LanguageSchema]
    color: Optional[str]
    is_active: bool
    updated_on: Optional[datetime]
    created_on: datetime


## Query Parameters
class OrderBy(IntEnum):
    id = 1
    updated_on = 2
    created_on = 3


class QueryParams(BaseModel):
    name: str | None = Field(Query(default=None))
    # id based
    id: str | None = Field(Query(default=None))
    id_list: List[str] | None = Field(Query(default=None))
    # created_on based
    created_on_ge: datetime | None = Field(Query(default=None))
    created_on_le: datetime | None = Field(Query(default=None))
    # Ordering
    order_by: OrderBy = Field(
        Query(default=OrderBy.created_on, description=enumStr(OrderBy))
    )
    order_in: OrderIn = Field(Query(default=OrderIn.DESC, description=enumStr(OrderIn)))
    # Pagination
    offset: int = Field(Query(default=0, ge=0))
    limit: int = Field(Query(default=DEFAULT_PAGE_LIMIT, gt=0, le=MAX_PAGE_LIMIT))


## Function
def searchZone(session: Session, qParam: QueryParams) -> List[Zone]:
    validators.rangeBounds(qParam.created_on_ge, qParam.created_on_le, Zone.created_on)

    query = session.query(Zone).filter(*visible(Zone))

    # Filters
    if qParam.name is not None:
        query = filterByName(query, Zone.name_id, qParam.name)
    # id based
    if qParam.id is not None:
        query = query.filter(Zone.id == qParam.id)
    if qParam.id_list is not None:
        query = query.filter(Zone.id.in_(qParam.id_list))
    # created_on based
    if qParam.created_on_ge is not None:
        query = query.filter(Zone.created_on >= qParam.created_on_ge)
    if qParam.created_on_le is not None:
        query = query.filter(Zone.created_on <= qParam.created_on_le)

    # Ordering
    orderingAttribute = getattr(Zone, OrderBy(qParam.order_by).name)
    if qParam.order_in == OrderIn.ASC:
        query = query.order_by(orderingAttribute.asc(), Zone.id.asc())
    else:
        query = query.order_by(orderingAttribute.desc(), Zone.id.desc())

    # Pagination
    query = query.offset(qParam.offset).limit(qParam.limit)
    return query.all()


## API endpoints [Public]
@route_public.get(
    URL_ZONE,
    tags=["Zone"],
    response_model=List[ZoneSchema],
    responses=makeExceptionResponses([exceptions.InvalidRange(Zone.created_on)]),
    description="""
    Fetch the zones shown on the public map.
    Only active, non deleted zones are listed.
    No authentication required.
    """,
)
async def fetch_zone(qParam: QueryParams = Depends()):
    session = sessionMaker()
    try:
        return searchZone(session, qParam)
    except Exception as e:
        exceptions.handle(e)
    finally:
        session.close()
