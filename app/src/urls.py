"""
API Endpoint URL Constants

This module defines the URL paths used throughout the application
for accessing the public map resources.

These URLs are relative to the mount point of the public app (`/api`).
"""

# -------------------------------
# Map aggregation
# -------------------------------
URL_MAP = "/map"

# -------------------------------
# Network entities
# -------------------------------
URL_TRANSPORT_SERVICE = "/transport_service"
URL_BUS_LANE = "/bus_lane"
URL_BUS_ROUTE = "/bus_route"
URL_BUS_STOP = "/bus_stop"
URL_ZONE = "/zone"
URL_MAP_ICON = "/map_icon"

# -------------------------------
# Timetable
# -------------------------------
URL_BUS_SCHEDULE = "/bus_schedule"
