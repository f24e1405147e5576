from datetime import datetime
from enum import IntEnum
from typing import List, Optional, Tuple
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm.session import Session
from pydantic import BaseModel, ConfigDict, Field

from app.src.db import BusLane, sessionMaker
from app.src import exceptions, validators
from app.src.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.src.enums import OrderIn
from app.src.functions import enumStr, filterByName, makeExceptionResponses, visible
from app.src.projectors import parsePath
from app.src.schemas import LanguageSchema
from app.src.urls import URL_BUS_LANE

route_public = APIRouter()


## Output Schema
class BusLaneSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: LanguageSchema
    description: Optional[LanguageSchema]
    service_id: Optional[str]
    color: str
    weight: Optional[int]
    opacity: Optional[float]
    path: List[Tuple[int | float, int | float]]
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
    # service_id based
    service_id: str | None = Field(Query(default=None))
    service_id_list: List[str] | None = Field(Query(default=None))
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
def searchBusLane(session: Session, qParam: QueryParams) -> List[BusLane]:
    validators.rangeBounds(
        qParam.created_on_ge, qParam.created_on_le, BusLane.created_on
    )

    query = session.query(BusLane).filter(*visible(BusLane))

    # Filters
    if qParam.name is not None:
        query = filterByName(query, BusLane.name_id, qParam.name)
    # id based
    if qParam.id is not None:
        query = query.filter(BusLane.id == qParam.id)
    if qParam.id_list is not None:
        query = query.filter(BusLane.id.in_(qParam.id_list))
    # service_id based
    if qParam.service_id is not None:
        query = query.filter(BusLane.service_id == qParam.service_id)
    if qParam.service_id_list is not None:
        query = query.filter(BusLane.service_id.in_(qParam.service_id_list))
    # created_on based
    if qParam.created_on_ge is not None:
        query = query.filter(BusLane.created_on >= qParam.created_on_ge)
    if qParam.created_on_le is not None:
        query = query.filter(BusLane.created_on <= qParam.created_on_le)

    # Ordering
    orderingAttribute = getattr(BusLane, OrderBy(qParam.order_by).name)
    if qParam.order_in == OrderIn.ASC:
        query = query.order_by(orderingAttribute.asc(), BusLane.id.asc())
    else:
        query = query.order_by(orderingAttribute.desc(), BusLane.id.desc())

    # Pagination
    query = query.offset(qParam.offset).limit(qParam.limit)
    busLanes = query.all()

    # Post-processing
    for busLane in busLanes:
        busLane.path = parsePath(busLane.path)
    return busLanes


## API endpoints [Public]
@route_public.get(
    URL_BUS_LANE,
    tags=["Bus Lane"],
    response_model=List[BusLaneSchema],
    responses=makeExceptionResponses([exceptions.InvalidRange(BusLane.created_on)]),
    description="""
    Fetch the bus lanes shown on the public map.
    Only active, non deleted lanes are listed. Malformed points of a stored
    path are dropped from the response.
    No authentication required.
    """,
)
async def fetch_bus_lane(qParam: QueryParams = Depends()):
    session = sessionMaker()
    try:
        return searchBusLane(session, qParam)
    except Exception as e:
        exceptions.handle(e)
    finally:
        session.close()
