"""
Application configuration and constants for the Transit Map Server.

This module centralizes environment-based configuration, listing limits,
default styling values and fixed response messages.

Configuration values can be overridden via environment variables.
"""

from os import environ


# ---------------------------------------------------------------------------
# Application metadata
# ---------------------------------------------------------------------------
API_TITLE = "Transit Map Server"
API_VERSION = "1.0.0"


# ---------------------------------------------------------------------------
# PostgreSQL configuration
# ---------------------------------------------------------------------------
PSQL_DB_DRIVER = environ.get("PSQL_DB_DRIVER", "postgresql")
PSQL_DB_USERNAME = environ.get("PSQL_DB_USERNAME", "postgres")
PSQL_DB_PORT = environ.get("PSQL_DB_PORT", "5432")
PSQL_DB_PASSWORD = environ.get("PSQL_DB_PASSWORD", "password")
PSQL_DB_HOST = environ.get("PSQL_DB_HOST", "localhost")
PSQL_DB_NAME = environ.get("PSQL_DB_NAME", "postgres")


# ---------------------------------------------------------------------------
# Listing (pagination) limits
# ---------------------------------------------------------------------------
DEFAULT_PAGE_LIMIT = 20  # Rows returned when no limit is given
MAX_PAGE_LIMIT = 100  # Upper bound accepted for the limit parameter


# ---------------------------------------------------------------------------
# Default styling values (hex colors, line styling)
# ---------------------------------------------------------------------------
DEFAULT_SERVICE_COLOR = "#0066CC"
DEFAULT_LANE_COLOR = "#0066CC"
DEFAULT_ZONE_COLOR = "#FF6B6B"
DEFAULT_LANE_WEIGHT = 5  # Line thickness in pixels
DEFAULT_LANE_OPACITY = 0.8  # 0.0 (transparent) to 1.0 (opaque)


# ---------------------------------------------------------------------------
# Map icon defaults (pixels)
# ---------------------------------------------------------------------------
DEFAULT_ICON_SIZE = 32
DEFAULT_ICON_ANCHOR_X = 16
DEFAULT_ICON_ANCHOR_Y = 32
DEFAULT_POPUP_ANCHOR_X = 0
DEFAULT_POPUP_ANCHOR_Y = -32


# ---------------------------------------------------------------------------
# Fixed response messages
# ---------------------------------------------------------------------------
MAP_DATA_ERROR = "Failed to load map data"
