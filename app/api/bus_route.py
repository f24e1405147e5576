from datetime import datetime
from enum import IntEnum
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.session import Session
from pydantic import BaseModel, ConfigDict, Field

from app.src.db import BusLane, BusRoute, BusStop, sessionMaker
from app.src import exceptions, validators
from app.src.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.src.enums import OrderIn, RouteDirection
from app.src.functions import enumStr, filterByName, makeExceptionResponses, visible
from app.src.schemas import LanguageSchema
from app.src.urls import URL_BUS_ROUTE

route_public = APIRouter()


## Output Schema
class BusRouteSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: LanguageSchema
    description: Optional[LanguageSchema]
    service_id: Optional[str]
    route_number: Optional[str]
    direction: int
    color: Optional[str]
    lane_ids: List[str]
    stop_ids: List[str]
    is_active: bool
    updated_on: Optional[datetime]
    created_on: datetime


## Query Parameters
class OrderBy(IntEnum):
    id = 1
    route_number = 2
    updated_on = 3
    created_on = 4


class QueryParams(BaseModel):
    name: str | None = Field(Query(default=None))
    route_number: str | None = Field(Query(default=None))
    direction: RouteDirection | None = Field(
        Query(default=None, description=enumStr(RouteDirection))
    )
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
def searchBusRoute(session: Session, qParam: QueryParams) -> List[BusRoute]:
    validators.rangeBounds(
        qParam.created_on_ge, qParam.created_on_le, BusRoute.created_on
    )

    query = (
        session.query(BusRoute)
        .filter(*visible(BusRoute))
        .options(
            selectinload(BusRoute.lanes.and_(*visible(BusLane))),
            selectinload(BusRoute.stops.and_(*visible(BusStop))),
        )
    )

    # Filters
    if qParam.name is not None:
        query = filterByName(query, BusRoute.name_id, qParam.name)
    if qParam.route_number is not None:
        query = query.filter(BusRoute.route_number.ilike(f"%{qParam.route_number}%"))
    if qParam.direction is not None:
        query = query.filter(BusRoute.direction == qParam.direction)
    # id based
    if qParam.id is not None:
        query = query.filter(BusRoute.id == qParam.id)
    if qParam.id_list is not None:
        query = query.filter(BusRoute.id.in_(qParam.id_list))
    # service_id based
    if qParam.service_id is not None:
        query = query.filter(BusRoute.service_id == qParam.service_id)
    if qParam.service_id_list is not None:
        query = query.filter(BusRoute.service_id.in_(qParam.service_id_list))
    # created_on based
    if qParam.created_on_ge is not None:
        query = query.filter(BusRoute.created_on >= qParam.created_on_ge)
    if qParam.created_on_le is not None:
        query = query.filter(BusRoute.created_on <= qParam.created_on_le)

    # Ordering
    orderingAttribute = getattr(BusRoute, OrderBy(qParam.order_by).name)
    if qParam.order_in == OrderIn.ASC:
        query = query.order_by(orderingAttribute.asc(), BusRoute.id.asc())
    else:
        query = query.order_by(orderingAttribute.desc(), BusRoute.id.desc())

    # Pagination
    query = query.offset(qParam.offset).limit(qParam.limit)
    busRoutes = query.all()

    # Post-processing
    for busRoute in busRoutes:
        busRoute.lane_ids = [lane.id for lane in busRoute.lanes]
        busRoute.stop_ids = [stop.id for stop in busRoute.stops]
    return busRoutes


## API endpoints [Public]
@route_public.get(
    URL_BUS_ROUTE,
    tags=["Bus Route"],
    response_model=List[BusRouteSchema],
    responses=makeExceptionResponses([exceptions.InvalidRange(BusRoute.created_on)]),
    description="""
    Fetch the bus routes shown on the public map.
    Only active, non deleted routes are listed, each with the ids of the
    visible lanes and stops it runs through.
    No authentication required.
    """,
)
async def fetch_bus_route(qParam: QueryParams = Depends()):
    session = sessionMaker()
    try:
        return searchBusRoute(session, qParam)
    except Exception as e:
        exceptions.handle(e)
    finally:
        session.close()
