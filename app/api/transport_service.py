from datetime import datetime
from enum import IntEnum
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm.session import Session
from pydantic import BaseModel, ConfigDict, Field

from app.src.db import TransportService, sessionMaker
from app.src import exceptions, validators
from app.src.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.src.enums import OrderIn, TransportServiceType
from app.src.functions import enumStr, filterByName, makeExceptionResponses, visible
from app.src.schemas import LanguageSchema
from app.src.urls import URL_TRANSPORT_SERVICE

route_public = APIRouter()


## Output Schema
class TransportServiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: LanguageSchema
    description: Optional[LanguageSchema]
    type: int
    color: str
    icon_id: Optional[str]
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
    type: TransportServiceType | None = Field(
        Query(default=None, description=enumStr(TransportServiceType))
    )
    type_list: List[TransportServiceType] | None = Field(
        Query(default=None, description=enumStr(TransportServiceType))
    )
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
def searchTransportService(
    session: Session, qParam: QueryParams
) -> List[TransportService]:
    validators.rangeBounds(
        qParam.created_on_ge, qParam.created_on_le, TransportService.created_on
    )

    query = session.query(TransportService).filter(*visible(TransportService))

    # Filters
    if qParam.name is not None:
        query = filterByName(query, TransportService.name_id, qParam.name)
    if qParam.type is not None:
        query = query.filter(TransportService.type == qParam.type)
    if qParam.type_list is not None:
        query = query.filter(TransportService.type.in_(qParam.type_list))
    # id based
    if qParam.id is not None:
        query = query.filter(TransportService.id == qParam.id)
    if qParam.id_list is not None:
        query = query.filter(TransportService.id.in_(qParam.id_list))
    # created_on based
    if qParam.created_on_ge is not None:
        query = query.filter(TransportService.created_on >= qParam.created_on_ge)
    if qParam.created_on_le is not None:
        query = query.filter(TransportService.created_on <= qParam.created_on_le)

    # Ordering
    orderingAttribute = getattr(TransportService, OrderBy(qParam.order_by).name)
    if qParam.order_in == OrderIn.ASC:
        query = query.order_by(orderingAttribute.asc(), TransportService.id.asc())
    else:
        query = query.order_by(orderingAttribute.desc(), TransportService.id.desc())

    # Pagination
    query = query.offset(qParam.offset).limit(qParam.limit)
    return query.all()


## API endpoints [Public]
@route_public.get(
    URL_TRANSPORT_SERVICE,
    tags=["Transport Service"],
    response_model=List[TransportServiceSchema],
    responses=makeExceptionResponses(
        [exceptions.InvalidRange(TransportService.created_on)]
    ),
    description="""
    Fetch the transport services shown on the public map.
    Only active, non deleted services are listed.
    No authentication required.
    """,
)
async def fetch_transport_service(qParam: QueryParams = Depends()):
    session = sessionMaker()
    try:
        return searchTransportService(session, qParam)
    except Exception as e:
        exceptions.handle(e)
    finally:
        session.close()
