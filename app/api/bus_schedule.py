from datetime import date, datetime, time
from enum import IntEnum
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.session import Session
from pydantic import BaseModel, ConfigDict, Field

from app.src.db import BusRoute, BusSchedule, BusStop, sessionMaker
from app.src import exceptions, validators
from app.src.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.src.enums import Day, OrderIn
from app.src.functions import enumStr, makeExceptionResponses, visible
from app.src.schemas import LanguageSchema
from app.src.urls import URL_BUS_SCHEDULE

route_public = APIRouter()


## Output Schema
class ScheduleRouteSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: LanguageSchema
    route_number: Optional[str]


class ScheduleStopSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: LanguageSchema


class BusScheduleSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    route_id: str
    stop_id: str
    route: ScheduleRouteSchema
    stop: ScheduleStopSchema
    departure_time: time
    day_of_week: int
    specific_date: Optional[date]
    notes: Optional[str]
    is_active: bool
    updated_on: Optional[datetime]
    created_on: datetime


## Query Parameters
class OrderBy(IntEnum):
    id = 1
    departure_time = 2
    updated_on = 3
    created_on = 4


class QueryParams(BaseModel):
    day_of_week: Day | None = Field(Query(default=None, description=enumStr(Day)))
    day_of_week_list: List[Day] | None = Field(
        Query(default=None, description=enumStr(Day))
    )
    specific_date: date | None = Field(Query(default=None))
    # departure_time based
    departure_time_ge: time | None = Field(Query(default=None))
    departure_time_le: time | None = Field(Query(default=None))
    # id based
    id: str | None = Field(Query(default=None))
    id_list: List[str] | None = Field(Query(default=None))
    # route_id based
    route_id: str | None = Field(Query(default=None))
    route_id_list: List[str] | None = Field(Query(default=None))
    # stop_id based
    stop_id: str | None = Field(Query(default=None))
    stop_id_list: List[str] | None = Field(Query(default=None))
    # created_on based
    created_on_ge: datetime | None = Field(Query(default=None))
    created_on_le: datetime | None = Field(Query(default=None))
    # Ordering
    order_by: OrderBy = Field(
        Query(default=OrderBy.departure_time, description=enumStr(OrderBy))
    )
    order_in: OrderIn = Field(Query(default=OrderIn.ASC, description=enumStr(OrderIn)))
    # Pagination
    offset: int = Field(Query(default=0, ge=0))
    limit: int = Field(Query(default=DEFAULT_PAGE_LIMIT, gt=0, le=MAX_PAGE_LIMIT))


## Function
def searchBusSchedule(session: Session, qParam: QueryParams) -> List[BusSchedule]:
    validators.rangeBounds(
        qParam.departure_time_ge, qParam.departure_time_le, BusSchedule.departure_time
    )
    validators.rangeBounds(
        qParam.created_on_ge, qParam.created_on_le, BusSchedule.created_on
    )

    # Departures of hidden routes or from hidden stops are hidden as well
    query = (
        session.query(BusSchedule)
        .join(BusRoute, BusSchedule.route_id == BusRoute.id)
        .join(BusStop, BusSchedule.stop_id == BusStop.id)
        .filter(*visible(BusSchedule), *visible(BusRoute), *visible(BusStop))
        .options(selectinload(BusSchedule.route), selectinload(BusSchedule.stop))
    )

    # Filters
    if qParam.day_of_week is not None:
        query = query.filter(BusSchedule.day_of_week == qParam.day_of_week)
    if qParam.day_of_week_list is not None:
        query = query.filter(BusSchedule.day_of_week.in_(qParam.day_of_week_list))
    if qParam.specific_date is not None:
        query = query.filter(BusSchedule.specific_date == qParam.specific_date)
    # departure_time based
    if qParam.departure_time_ge is not None:
        query = query.filter(BusSchedule.departure_time >= qParam.departure_time_ge)
    if qParam.departure_time_le is not None:
        query = query.filter(BusSchedule.departure_time <= qParam.departure_time_le)
    # id based
    if qParam.id is not None:
        query = query.filter(BusSchedule.id == qParam.id)
    if qParam.id_list is not None:
        query = query.filter(BusSchedule.id.in_(qParam.id_list))
    # route_id based
    if qParam.route_id is not None:
        query = query.filter(BusSchedule.route_id == qParam.route_id)
    if qParam.route_id_list is not None:
        query = query.filter(BusSchedule.route_id.in_(qParam.route_id_list))
    # stop_id based
    if qParam.stop_id is not None:
        query = query.filter(BusSchedule.stop_id == qParam.stop_id)
    if qParam.stop_id_list is not None:
        query = query.filter(BusSchedule.stop_id.in_(qParam.stop_id_list))
    # created_on based
    if qParam.created_on_ge is not None:
        query = query.filter(BusSchedule.created_on >= qParam.created_on_ge)
    if qParam.created_on_le is not None:
        query = query.filter(BusSchedule.created_on <= qParam.created_on_le)

    # Ordering
    orderingAttribute = getattr(BusSchedule, OrderBy(qParam.order_by).name)
    if qParam.order_in == OrderIn.ASC:
        query = query.order_by(orderingAttribute.asc(), BusSchedule.id.asc())
    else:
        query = query.order_by(orderingAttribute.desc(), BusSchedule.id.desc())

    # Pagination
    query = query.offset(qParam.offset).limit(qParam.limit)
    return query.all()


## API endpoints [Public]
@route_public.get(
    URL_BUS_SCHEDULE,
    tags=["Bus Schedule"],
    response_model=List[BusScheduleSchema],
    responses=makeExceptionResponses(
        [
            exceptions.InvalidRange(BusSchedule.departure_time),
            exceptions.InvalidRange(BusSchedule.created_on),
        ]
    ),
    description="""
    Fetch the timetable of the public network, earliest departure first.
    Each entry carries the name of its route and stop. Entries of hidden
    routes or stops are not listed.
    No authentication required.
    """,
)
async def fetch_bus_schedule(qParam: QueryParams = Depends()):
    session = sessionMaker()
    try:
        return searchBusSchedule(session, qParam)
    except Exception as e:
        exceptions.handle(e)
    finally:
        session.close()
