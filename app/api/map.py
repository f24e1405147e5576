from typing import List, Optional, Tuple
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.session import Session

from app.src.db import (
    BusLane,
    BusRoute,
    BusStop,
    MapIcon,
    TransportService,
    Zone,
    sessionMaker,
)
from app.src import exceptions, projectors
from app.src.constants import MAP_DATA_ERROR
from app.src.functions import snapshotIsolationLevel, visible
from app.src.urls import URL_MAP

route_public = APIRouter()


## Output Schema
class LanguageContent(BaseModel):
    en: Optional[str] = None
    ar: Optional[str] = None
    ckb: Optional[str] = None


class MapIconData(BaseModel):
    id: str
    fileUrl: str
    iconSize: Optional[int] = None
    iconAnchorX: Optional[int] = None
    iconAnchorY: Optional[int] = None
    popupAnchorX: Optional[int] = None
    popupAnchorY: Optional[int] = None


class MapAsset(BaseModel):
    id: str
    url: str
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None


class MapTransportService(BaseModel):
    id: str
    type: str
    color: Optional[str] = None
    isActive: Optional[bool] = None
    name: Optional[LanguageContent] = None
    icon: Optional[MapIconData] = None


class MapZone(BaseModel):
    id: str
    name: Optional[LanguageContent] = None
    color: Optional[str] = None
    isActive: Optional[bool] = None


class MapLaneSummary(BaseModel):
    id: str
    name: Optional[LanguageContent] = None
    color: Optional[str] = None
    serviceId: Optional[str] = None
    service: Optional[MapTransportService] = None


class MapLane(MapLaneSummary):
    path: List[Tuple[int | float, int | float]] = []
    weight: Optional[int] = None
    opacity: Optional[float] = None
    isActive: Optional[bool] = None


class MapRouteSummary(BaseModel):
    id: str
    name: Optional[LanguageContent] = None
    routeNumber: Optional[str] = None
    direction: Optional[str] = None
    color: Optional[str] = None
    serviceId: Optional[str] = None
    service: Optional[MapTransportService] = None


class MapRoute(MapRouteSummary):
    laneIds: List[str] = []
    stopIds: List[str] = []
    isActive: Optional[bool] = None


class MapStopAmenities(BaseModel):
    hasShelter: Optional[bool] = None
    hasBench: Optional[bool] = None
    hasLighting: Optional[bool] = None
    isAccessible: Optional[bool] = None
    hasRealTimeInfo: Optional[bool] = None


class MapStop(BaseModel):
    id: str
    latitude: float
    longitude: float
    name: Optional[LanguageContent] = None
    description: Optional[LanguageContent] = None
    images: List[MapAsset] = []
    icon: Optional[MapIconData] = None
    zone: Optional[MapZone] = None
    services: List[MapTransportService] = []
    serviceIds: List[str] = []
    lanes: List[MapLaneSummary] = []
    routes: List[MapRouteSummary] = []
    amenities: Optional[MapStopAmenities] = None
    isActive: bool = True


class MapDataPayload(BaseModel):
    services: List[MapTransportService]
    stops: List[MapStop]
    lanes: List[MapLane]
    routes: List[MapRoute]
    zones: List[MapZone]


class MapResponse(BaseModel):
    success: bool
    data: MapDataPayload


class MapErrorResponse(BaseModel):
    success: bool
    error: str


## Function
def fetchMapRecords(session: Session) -> Tuple[list, list, list, list, list]:
    """
    Read every collection the public map needs.

    Each collection, and each relation nested inside it, is limited to rows
    that are active and not soft deleted. A nested relation that fails its own
    filter is loaded as None (or left out of its list) even when the parent
    row is visible.

    Args:
        session (Session): Session with an open transaction whose connection
            runs at a snapshot isolation level (see `snapshotIsolationLevel`),
            so that all five reads observe the same committed state.

    Returns:
        Tuple: (services, stops, lanes, routes, zones), each ordered by
        creation time ascending.
    """
    iconLoader = TransportService.icon.and_(*visible(MapIcon))

    services = (
        session.query(TransportService)
        .filter(*visible(TransportService))
        .options(selectinload(iconLoader))
        .order_by(TransportService.created_on.asc(), TransportService.id.asc())
        .all()
    )
    stops = (
        session.query(BusStop)
        .filter(*visible(BusStop))
        .options(
            selectinload(BusStop.images),
            selectinload(BusStop.icon.and_(*visible(MapIcon))),
            selectinload(BusStop.zone.and_(*visible(Zone))),
            selectinload(BusStop.lanes.and_(*visible(BusLane)))
            .selectinload(BusLane.service.and_(*visible(TransportService)))
            .selectinload(iconLoader),
            selectinload(BusStop.routes.and_(*visible(BusRoute)))
            .selectinload(BusRoute.service.and_(*visible(TransportService)))
            .selectinload(iconLoader),
        )
        .order_by(BusStop.created_on.asc(), BusStop.id.asc())
        .all()
    )
    lanes = (
        session.query(BusLane)
        .filter(*visible(BusLane))
        .options(
            selectinload(BusLane.service.and_(*visible(TransportService)))
            .selectinload(iconLoader),
        )
        .order_by(BusLane.created_on.asc(), BusLane.id.asc())
        .all()
    )
    routes = (
        session.query(BusRoute)
        .filter(*visible(BusRoute))
        .options(
            selectinload(BusRoute.service.and_(*visible(TransportService)))
            .selectinload(iconLoader),
            selectinload(BusRoute.lanes.and_(*visible(BusLane))),
            selectinload(BusRoute.stops.and_(*visible(BusStop))),
        )
        .order_by(BusRoute.created_on.asc(), BusRoute.id.asc())
        .all()
    )
    zones = (
        session.query(Zone)
        .filter(*visible(Zone))
        .order_by(Zone.created_on.asc(), Zone.id.asc())
        .all()
    )
    return services, stops, lanes, routes, zones


## API endpoints [Public]
@route_public.get(
    URL_MAP,
    tags=["Map"],
    response_model=MapResponse,
    response_model_exclude_unset=True,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MapErrorResponse}},
    description="""
    Fetch everything the public map renders in one payload: services, stops,
    lanes, routes and zones.
    All collections are read inside one transaction, either the whole payload
    is returned or the request fails with a generic error.
    No authentication required.
    """,
)
async def fetch_map_data():
    session = sessionMaker()
    try:
        with session.begin():
            isolationLevel = snapshotIsolationLevel(session.get_bind().dialect.name)
            session.connection(execution_options={"isolation_level": isolationLevel})
            services, stops, lanes, routes, zones = fetchMapRecords(session)

        payload = projectors.toMapDataPayload(services, stops, lanes, routes, zones)
        return {"success": True, "data": payload}
    except Exception as e:
        exceptions.logException(e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": MAP_DATA_ERROR},
        )
    finally:
        session.close()
