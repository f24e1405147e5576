from fastapi import FastAPI
from app.api import (
    map,
    transport_service,
    bus_lane,
    bus_route,
    bus_stop,
    bus_schedule,
    map_icon,
    zone,
)


# ------------------------------------------------------
# Create the FastAPI app serving the public map
# ------------------------------------------------------
app_public = FastAPI(title="Public APP")


# ------------------------------------------------------
# Public routers
# ------------------------------------------------------
app_public.include_router(map.route_public)
app_public.include_router(transport_service.route_public)
app_public.include_router(bus_lane.route_public)
app_public.include_router(bus_route.route_public)
app_public.include_router(bus_stop.route_public)
app_public.include_router(zone.route_public)
app_public.include_router(map_icon.route_public)
app_public.include_router(bus_schedule.route_public)
