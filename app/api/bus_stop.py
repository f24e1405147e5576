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
from app.src.enums import OrderIn
from app.src.functions import enumStr, filterByName, makeExceptionResponses, visible
from app.src.schemas import LanguageSchema
from app.src.urls import URL_BUS_STOP

route_public = APIRouter()


## Output Schema
class BusStopSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: LanguageSchema
    description: Optional[LanguageSchema]
    latitude: float
    longitude: float
    zone_id: Optional[str]
    icon_id: Optional[str]
    has_shelter: bool
    has_bench: bool
    has_lighting: bool
    is_accessible: bool
    has_real_time_info: bool
    lane_ids: List[str]
    route_ids: List[str]
    is_active: bool
    updated_on: Optional[datetime]
    created_on: datetime


## Query Parameters
class OrderBy(IntEnum):
    id = 1
    latitude = 2
    longitude = 3
    updated_on = 4
    created_on = 5


class QueryParams(BaseModel):
    name: str | None = Field(Query(default=None))
    # id based
    id: str | None = Field(Query(default=None))
    id_list: List[str] | None = Field(Query(default=None))
    # zone_id based
    zone_id: str | None = Field(Query(default=None))
    zone_id_list: List[str] | None = Field(Query(default=None))
    # Amenities
    has_shelter: bool | None = Field(Query(default=None))
    has_real_time_info: bool | None = Field(Query(default=None))
    is_accessible: bool | None = Field(Query(default=None))
    # Bounding box
    latitude_ge: float | None = Field(Query(default=None, ge=-90, le=90))
    latitude_le: float | None = Field(Query(default=None, ge=-90, le=90))
    longitude_ge: float | None = Field(Query(default=None, ge=-180, le=180))
    longitude_le: float | None = Field(Query(default=None, ge=-180, le=180))
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
def searchBusStop(session: Session, qParam: QueryParams) -> List[BusStop]:
    validators.rangeBounds(qParam.latitude_ge, qParam.latitude_le, BusStop.latitude)
    validators.rangeBounds(qParam.longitude_ge, qParam.longitude_le, BusStop.longitude)
    validators.rangeBounds(
        qParam.created_on_ge, qParam.created_on_le, BusStop.created_on
    )

    query = (
        session.query(BusStop)
        .filter(*visible(BusStop))
        .options(
            selectinload(BusStop.lanes.and_(*visible(BusLane))),
            selectinload(BusStop.routes.and_(*visible(BusRoute))),
        )
    )

    # Filters
    if qParam.name is not None:
        query = filterByName(query, BusStop.name_id, qParam.name)
    # id based
    if qParam.id is not None:
        query = query.filter(BusStop.id == qParam.id)
    if qParam.id_list is not None:
        query = query.filter(BusStop.id.in_(qParam.id_list))
    # zone_id based
    if qParam.zone_id is not None:
        query = query.filter(BusStop.zone_id == qParam.zone_id)
    if qParam.zone_id_list is not None:
        query = query.filter(BusStop.zone_id.in_(qParam.zone_id_list))
    # Amenities
    if qParam.has_shelter is not None:
        query = query.filter(BusStop.has_shelter == qParam.has_shelter)
    if qParam.has_real_time_info is not None:
        query = query.filter(BusStop.has_real_time_info == qParam.has_real_time_info)
    if qParam.is_accessible is not None:
        query = query.filter(BusStop.is_accessible == qParam.is_accessible)
    # Bounding box
    if qParam.latitude_ge is not None:
        query = query.filter(BusStop.latitude >= qParam.latitude_ge)
    if qParam.latitude_le is not None:
        query = query.filter(BusStop.latitude <= qParam.latitude_le)
    if qParam.longitude_ge is not None:
        query = query.filter(BusStop.longitude >= qParam.longitude_ge)
    if qParam.longitude_le is not None:
        query = query.filter(BusStop.longitude <= qParam.longitude_le)
    # created_on based
    if qParam.created_on_ge is not None:
        query = query.filter(BusStop.created_on >= qParam.created_on_ge)
    if qParam.created_on_le is not None:
        query = query.filter(BusStop.created_on <= qParam.created_on_le)

    # Ordering
    orderingAttribute = getattr(BusStop, OrderBy(qParam.order_by).name)
    if qParam.order_in == OrderIn.ASC:
        query = query.order_by(orderingAttribute.asc(), BusStop.id.asc())
    else:
        query = query.order_by(orderingAttribute.desc(), BusStop.id.desc())

    # Pagination
    query = query.offset(qParam.offset).limit(qParam.limit)
    busStops = query.all()

    # Post-processing
    for busStop in busStops:
        busStop.lane_ids = [lane.id for lane in busStop.lanes]
        busStop.route_ids = [route.id for route in busStop.routes]
    return busStops


## API endpoints [Public]
@route_public.get(
    URL_BUS_STOP,
    tags=["Bus Stop"],
    response_model=List[BusStopSchema],
    responses=makeExceptionResponses(
        [
            exceptions.InvalidRange(BusStop.latitude),
            exceptions.InvalidRange(BusStop.longitude),
            exceptions.InvalidRange(BusStop.created_on),
        ]
    ),
    description="""
    Fetch the bus stops shown on the public map.
    Only active, non deleted stops are listed. The latitude and longitude
    bounds select the stops inside a bounding box.
    No authentication required.
    """,
)
async def fetch_bus_stop(qParam: QueryParams = Depends()):
    session = sessionMaker()
    try:
        return searchBusStop(session, qParam)
    except Exception as e:
        exceptions.handle(e)
    finally:
        session.close()
