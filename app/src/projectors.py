"""
View-model projectors for the public map.

Each projector turns one ORM record, with its relations already loaded, into
a plain dictionary ready for JSON transport. Projectors never touch the
database and never raise on missing relations: an absent relation projects
to `None` and its key is left out of the parent dictionary.

Optional keys are omitted instead of being sent as `null`, except for the
three slots of a localized record which are always present.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.src.db import (
    BusLane,
    BusRoute,
    BusStop,
    File,
    Language,
    MapIcon,
    TransportService,
    Zone,
)
from app.src.enums import RouteDirection, TransportServiceType


CoordinateTuple = Tuple[float, float]


def compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the keys whose value is `None` (one level deep only)."""
    return {key: value for key, value in data.items() if value is not None}


def enumName(enumClass, value) -> Optional[str]:
    if value is None:
        return None
    return enumClass(value).name


def isNumber(value: Any) -> bool:
    # bool is a subclass of int, but true/false is not a coordinate
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Leaf projectors
# ---------------------------------------------------------------------------
def toLanguageContent(language: Optional[Language]) -> Optional[Dict[str, Any]]:
    """
    Project a localized record into a `{en, ar, ckb}` mapping.

    Args:
        language (Language | None): The localized record, or None.

    Returns:
        dict | None: None when the record itself is missing. Otherwise all three
        slots are present and a missing slot is None (never an empty string).
    """
    if language is None:
        return None
    return {
        "en": getattr(language, "en", None),
        "ar": getattr(language, "ar", None),
        "ckb": getattr(language, "ckb", None),
    }


def toMapIconData(icon: Optional[MapIcon]) -> Optional[Dict[str, Any]]:
    """
    Project a map icon into a flat marker descriptor.

    An icon whose file is missing cannot be drawn and is treated exactly like a
    missing icon.

    Args:
        icon (MapIcon | None): Icon with its `file` relation loaded.

    Returns:
        dict | None: `{id, fileUrl, iconSize?, iconAnchorX?, iconAnchorY?,
        popupAnchorX?, popupAnchorY?}` or None.
    """
    if icon is None:
        return None
    file = getattr(icon, "file", None)
    if file is None or not file.url:
        return None

    return compact(
        {
            "id": icon.id,
            "fileUrl": file.url,
            "iconSize": icon.icon_size,
            "iconAnchorX": icon.icon_anchor_x,
            "iconAnchorY": icon.icon_anchor_y,
            "popupAnchorX": icon.popup_anchor_x,
            "popupAnchorY": icon.popup_anchor_y,
        }
    )


def parsePath(path: Any) -> List[CoordinateTuple]:
    """
    Decode a stored lane geometry into coordinate tuples.

    Only entries that are two-element sequences of numbers are kept; any other
    entry is skipped without error so that a partially corrupted lane still
    renders. Relative order is preserved.

    Args:
        path (Any): Raw value of the JSON `path` column.

    Returns:
        List[CoordinateTuple]: Decoded points, empty when `path` is not a list.

    Example:
        >>> parsePath([[1, 2], "bad", [3, 4], [5]])
        [(1, 2), (3, 4)]
    """
    if not isinstance(path, (list, tuple)):
        return []

    result = []
    for point in path:
        if (
            isinstance(point, (list, tuple))
            and len(point) == 2
            and isNumber(point[0])
            and isNumber(point[1])
        ):
            result.append((point[0], point[1]))
    return result


def toMapAsset(image: File) -> Dict[str, Any]:
    return compact(
        {
            "id": image.id,
            "url": image.url,
            "name": image.name,
            "type": image.type,
            "size": image.size,
        }
    )


# ---------------------------------------------------------------------------
# Entity projectors
# ---------------------------------------------------------------------------
def toMapTransportService(
    service: Optional[TransportService],
) -> Optional[Dict[str, Any]]:
    """
    Project a transport service for embedding in lanes, routes and stops.

    Returns:
        dict | None: `{id, type, color, isActive, name?, icon?}` or None when
        the service is missing (including when a relation filter removed it).
    """
    if service is None:
        return None

    return compact(
        {
            "id": service.id,
            "type": enumName(TransportServiceType, service.type),
            "color": service.color,
            "isActive": service.is_active,
            "name": toLanguageContent(service.name),
            "icon": toMapIconData(service.icon),
        }
    )


def toMapLaneSummary(lane: BusLane) -> Dict[str, Any]:
    return compact(
        {
            "id": lane.id,
            "name": toLanguageContent(lane.name),
            "color": lane.color,
            "serviceId": lane.service_id,
            "service": toMapTransportService(lane.service),
        }
    )


def toMapRouteSummary(route: BusRoute) -> Dict[str, Any]:
    """
    Project a route into its compact form.

    The route's own color wins; when it has none the color of its service
    (as projected) is used.
    """
    service = toMapTransportService(route.service)
    color = getattr(route, "color", None)
    if color is None and service is not None:
        color = service.get("color")

    return compact(
        {
            "id": route.id,
            "name": toLanguageContent(route.name),
            "routeNumber": route.route_number,
            "direction": enumName(RouteDirection, route.direction),
            "color": color,
            "serviceId": route.service_id,
            "service": service,
        }
    )


def toMapLane(lane: BusLane) -> Dict[str, Any]:
    mapLane = toMapLaneSummary(lane)
    mapLane.update(
        compact(
            {
                "path": parsePath(lane.path),
                "weight": lane.weight,
                "opacity": lane.opacity,
                "isActive": lane.is_active,
            }
        )
    )
    return mapLane


def toMapRoute(route: BusRoute) -> Dict[str, Any]:
    mapRoute = toMapRouteSummary(route)
    mapRoute.update(
        compact(
            {
                "laneIds": [lane.id for lane in (route.lanes or [])],
                "stopIds": [stop.id for stop in (route.stops or [])],
                "isActive": route.is_active,
            }
        )
    )
    return mapRoute


def toMapZone(zone: Optional[Zone]) -> Optional[Dict[str, Any]]:
    if zone is None:
        return None
    return compact(
        {
            "id": zone.id,
            "name": toLanguageContent(zone.name),
            "color": zone.color,
            "isActive": zone.is_active,
        }
    )


def toMapStop(stop: BusStop, defaultActive: bool = True) -> Dict[str, Any]:
    """
    Project a bus stop with its lanes, routes, zone, icon and images.

    The services reachable from the stop are collected from its lanes first and
    then from its routes, keyed by service id. A service reached more than once
    keeps its first position and appears once.

    Args:
        stop (BusStop): Stop with every relation loaded.
        defaultActive (bool): Visibility used when the record carries no
            `is_active` value. A stop without an explicit flag is presumed
            visible.

    Returns:
        dict: `{id, latitude, longitude, name?, description?, images, icon?,
        zone?, services, serviceIds, lanes, routes, amenities, isActive}`.
    """
    laneSummaries = [toMapLaneSummary(lane) for lane in (stop.lanes or [])]
    routeSummaries = [toMapRouteSummary(route) for route in (stop.routes or [])]

    serviceMap = {}
    for summary in laneSummaries + routeSummaries:
        service = summary.get("service")
        if service is not None:
            serviceMap[service["id"]] = service

    amenities = {
        "hasShelter": stop.has_shelter,
        "hasBench": stop.has_bench,
        "hasLighting": stop.has_lighting,
        "isAccessible": stop.is_accessible,
        "hasRealTimeInfo": stop.has_real_time_info,
    }

    isActive = getattr(stop, "is_active", None)
    if isActive is None:
        isActive = defaultActive

    return compact(
        {
            "id": stop.id,
            "latitude": stop.latitude,
            "longitude": stop.longitude,
            "name": toLanguageContent(stop.name),
            "description": toLanguageContent(stop.description),
            "images": [toMapAsset(image) for image in (stop.images or [])],
            "icon": toMapIconData(stop.icon),
            "zone": toMapZone(stop.zone),
            "services": list(serviceMap.values()),
            "serviceIds": list(serviceMap.keys()),
            "lanes": laneSummaries,
            "routes": routeSummaries,
            "amenities": amenities,
            "isActive": isActive,
        }
    )


def toMapDataPayload(
    services: List[TransportService],
    stops: List[BusStop],
    lanes: List[BusLane],
    routes: List[BusRoute],
    zones: List[Zone],
) -> Dict[str, List[Dict[str, Any]]]:
    """Run every fetched collection through its projector."""
    mapServices = [toMapTransportService(service) for service in services]
    return {
        "services": [service for service in mapServices if service is not None],
        "stops": [toMapStop(stop) for stop in stops],
        "lanes": [toMapLane(lane) for lane in lanes],
        "routes": [toMapRoute(route) for route in routes],
        "zones": [toMapZone(zone) for zone in zones],
    }
