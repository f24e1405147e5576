from uuid import uuid4
from sqlalchemy import (
    JSON,
    TEXT,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Time,
    UniqueConstraint,
    create_engine,
    func,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.dialects.postgresql import JSONB

from app.src.constants import (
    DEFAULT_ICON_ANCHOR_X,
    DEFAULT_ICON_ANCHOR_Y,
    DEFAULT_ICON_SIZE,
    DEFAULT_LANE_COLOR,
    DEFAULT_LANE_OPACITY,
    DEFAULT_LANE_WEIGHT,
    DEFAULT_POPUP_ANCHOR_X,
    DEFAULT_POPUP_ANCHOR_Y,
    DEFAULT_SERVICE_COLOR,
    DEFAULT_ZONE_COLOR,
    PSQL_DB_DRIVER,
    PSQL_DB_HOST,
    PSQL_DB_PASSWORD,
    PSQL_DB_NAME,
    PSQL_DB_PORT,
    PSQL_DB_USERNAME,
)
from app.src.enums import Day, RouteDirection, TransportServiceType


# Global DBMS variables
dbURL = f"{PSQL_DB_DRIVER}://{PSQL_DB_USERNAME}:{PSQL_DB_PASSWORD}@{PSQL_DB_HOST}:{PSQL_DB_PORT}/{PSQL_DB_NAME}"
engine = create_engine(url=dbURL, echo=False)
sessionMaker = sessionmaker(bind=engine, expire_on_commit=False)
ORMbase = declarative_base()


def newID() -> str:
    return str(uuid4())


# ----------------------------------- Shared DB Models ----------------------------------------#
class Language(ORMbase):
    """
    Stores one piece of user-facing text in every supported language.

    Entities never hold display text directly; they reference a row in this
    table for each localized field (name, description).

    Columns:
        id (String(36)):
            Primary key. UUID text.

        en (TEXT):
            English text. Required, it is the fallback language.

        ar (TEXT):
            Arabic text. Optional.

        ckb (TEXT):
            Central Kurdish (Sorani) text. Optional.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the record was created.
    """

    __tablename__ = "language"

    id = Column(String(36), primary_key=True, default=newID)
    en = Column(TEXT, nullable=False)
    ar = Column(TEXT)
    ckb = Column(TEXT)
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())


class File(ORMbase):
    """
    Represents an uploaded file (icon image or stop photo) held in external storage.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        url (TEXT):
            Public URL of the stored object. Required.

        name (String(256)):
            Original file name as uploaded. Optional.

        type (String(128)):
            MIME type of the file. Optional.

        size (Integer):
            Size of the file in bytes. Optional.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the file was uploaded.
    """

    __tablename__ = "file"

    id = Column(String(36), primary_key=True, default=newID)
    url = Column(TEXT, nullable=False)
    name = Column(String(256))
    type = Column(String(128))
    size = Column(Integer)
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())


class MapIcon(ORMbase):
    """
    Represents a marker icon drawn on the public map for services and stops.

    Anchor values are pixel offsets relative to the top-left corner of the image
    and follow the marker conventions of common web map libraries.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        name_id (String(36)):
            Foreign key to `language.id`. Localized label shown in icon pickers. Required.

        description_id (String(36)):
            Foreign key to `language.id`. Localized description. Optional.

        file_id (String(36)):
            Foreign key to `file.id`. The image of the icon.
            Set to NULL if the file is removed, an icon without a file is not drawable.

        icon_size (Integer):
            Rendered width and height of the icon in pixels.

        icon_anchor_x (Integer), icon_anchor_y (Integer):
            Pixel of the image that sits on the marker coordinate.

        popup_anchor_x (Integer), popup_anchor_y (Integer):
            Offset of the popup tip relative to the icon anchor.

        is_active (Boolean):
            Whether the icon may be used on the public map.

        deleted_on (DateTime):
            Soft delete marker. NULL while the record is alive.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the icon was created.
    """

    __tablename__ = "map_icon"

    id = Column(String(36), primary_key=True, default=newID)
    name_id = Column(String(36), ForeignKey("language.id"), nullable=False)
    description_id = Column(String(36), ForeignKey("language.id"))
    file_id = Column(String(36), ForeignKey("file.id", ondelete="SET NULL"))
    icon_size = Column(Integer, default=DEFAULT_ICON_SIZE)
    icon_anchor_x = Column(Integer, default=DEFAULT_ICON_ANCHOR_X)
    icon_anchor_y = Column(Integer, default=DEFAULT_ICON_ANCHOR_Y)
    popup_anchor_x = Column(Integer, default=DEFAULT_POPUP_ANCHOR_X)
    popup_anchor_y = Column(Integer, default=DEFAULT_POPUP_ANCHOR_Y)
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_on = Column(DateTime(timezone=True))
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())
    # Relations
    name = relationship(Language, foreign_keys=[name_id], lazy="selectin")
    description = relationship(Language, foreign_keys=[description_id], lazy="selectin")
    file = relationship(File, lazy="selectin")


# ----------------------------------- Network DB Models ---------------------------------------#
class TransportService(ORMbase):
    """
    Represents a transport service (bus line operator, minibus network, etc.)
    that owns lanes and routes on the map.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        name_id (String(36)):
            Foreign key to `language.id`. Localized display name. Required.

        description_id (String(36)):
            Foreign key to `language.id`. Localized description. Optional.

        type (Integer):
            Enum value of `TransportServiceType`. Defaults to `BUS`.

        color (String(16)):
            Hex color used when drawing the service and its routes.

        icon_id (String(36)):
            Foreign key to `map_icon.id`. Marker icon of the service. Optional.

        is_active (Boolean):
            Whether the service is shown to riders.

        deleted_on (DateTime):
            Soft delete marker. NULL while the record is alive.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the service was created.
    """

    __tablename__ = "transport_service"

    id = Column(String(36), primary_key=True, default=newID)
    name_id = Column(String(36), ForeignKey("language.id"), nullable=False)
    description_id = Column(String(36), ForeignKey("language.id"))
    type = Column(Integer, nullable=False, default=TransportServiceType.BUS)
    color = Column(String(16), nullable=False, default=DEFAULT_SERVICE_COLOR)
    icon_id = Column(String(36), ForeignKey("map_icon.id", ondelete="SET NULL"))
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_on = Column(DateTime(timezone=True))
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())
    # Relations
    name = relationship(Language, foreign_keys=[name_id], lazy="selectin")
    description = relationship(Language, foreign_keys=[description_id], lazy="selectin")
    icon = relationship(MapIcon)
    lanes = relationship("BusLane", back_populates="service")
    routes = relationship("BusRoute", back_populates="service")


class Zone(ORMbase):
    """
    Represents a named fare or coverage zone that groups bus stops.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        name_id (String(36)):
            Foreign key to `language.id`. Localized display name. Required.

        description_id (String(36)):
            Foreign key to `language.id`. Localized description. Optional.

        color (String(16)):
            Hex color of the zone on the map.

        is_active (Boolean):
            Whether the zone is shown to riders.

        deleted_on (DateTime):
            Soft delete marker. NULL while the record is alive.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the zone was created.
    """

    __tablename__ = "zone"

    id = Column(String(36), primary_key=True, default=newID)
    name_id = Column(String(36), ForeignKey("language.id"), nullable=False)
    description_id = Column(String(36), ForeignKey("language.id"))
    color = Column(String(16), default=DEFAULT_ZONE_COLOR)
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_on = Column(DateTime(timezone=True))
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())
    # Relations
    name = relationship(Language, foreign_keys=[name_id], lazy="selectin")
    description = relationship(Language, foreign_keys=[description_id], lazy="selectin")


class StopInLane(ORMbase):
    """
    Association between a bus lane and the bus stops placed along it.

    Table Constraints:
        UniqueConstraint(lane_id, stop_id):
            A stop is attached to a lane at most once.
    """

    __tablename__ = "stop_in_lane"
    __table_args__ = (UniqueConstraint("lane_id", "stop_id"),)

    id = Column(Integer, primary_key=True)
    lane_id = Column(
        String(36), ForeignKey("bus_lane.id", ondelete="CASCADE"), nullable=False
    )
    stop_id = Column(
        String(36), ForeignKey("bus_stop.id", ondelete="CASCADE"), nullable=False
    )


class StopInRoute(ORMbase):
    """
    Association between a bus route and the bus stops it serves.

    Table Constraints:
        UniqueConstraint(route_id, stop_id):
            A stop is attached to a route at most once.
    """

    __tablename__ = "stop_in_route"
    __table_args__ = (UniqueConstraint("route_id", "stop_id"),)

    id = Column(Integer, primary_key=True)
    route_id = Column(
        String(36), ForeignKey("bus_route.id", ondelete="CASCADE"), nullable=False
    )
    stop_id = Column(
        String(36), ForeignKey("bus_stop.id", ondelete="CASCADE"), nullable=False
    )


class LaneInRoute(ORMbase):
    """
    Association between a bus route and the lanes it runs over.

    Table Constraints:
        UniqueConstraint(route_id, lane_id):
            A lane is attached to a route at most once.
    """

    __tablename__ = "lane_in_route"
    __table_args__ = (UniqueConstraint("route_id", "lane_id"),)

    id = Column(Integer, primary_key=True)
    route_id = Column(
        String(36), ForeignKey("bus_route.id", ondelete="CASCADE"), nullable=False
    )
    lane_id = Column(
        String(36), ForeignKey("bus_lane.id", ondelete="CASCADE"), nullable=False
    )


class StopImage(ORMbase):
    """
    Association between a bus stop and its photos.

    Table Constraints:
        UniqueConstraint(stop_id, file_id):
            A file is attached to a stop at most once.
    """

    __tablename__ = "stop_image"
    __table_args__ = (UniqueConstraint("stop_id", "file_id"),)

    id = Column(Integer, primary_key=True)
    stop_id = Column(
        String(36), ForeignKey("bus_stop.id", ondelete="CASCADE"), nullable=False
    )
    file_id = Column(
        String(36), ForeignKey("file.id", ondelete="CASCADE"), nullable=False
    )


class BusLane(ORMbase):
    """
    Represents a physical path (polyline) a transport service follows on the map.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        name_id (String(36)):
            Foreign key to `language.id`. Localized display name. Required.

        description_id (String(36)):
            Foreign key to `language.id`. Localized description. Optional.

        service_id (String(36)):
            Foreign key to `transport_service.id`. Owning service. Optional.
            Set to NULL if the service is removed.

        color (String(16)):
            Hex color of the drawn line.

        weight (Integer):
            Line thickness in pixels.

        opacity (Float):
            Line opacity between 0.0 and 1.0.

        path (JSON):
            Ordered list of `[longitude, latitude]` pairs. Stored loosely typed
            (JSONB on PostgreSQL), readers must validate every entry.

        is_active (Boolean):
            Whether the lane is shown to riders.

        deleted_on (DateTime):
            Soft delete marker. NULL while the record is alive.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the lane was created.
    """

    __tablename__ = "bus_lane"

    id = Column(String(36), primary_key=True, default=newID)
    name_id = Column(String(36), ForeignKey("language.id"), nullable=False)
    description_id = Column(String(36), ForeignKey("language.id"))
    service_id = Column(
        String(36), ForeignKey("transport_service.id", ondelete="SET NULL"), index=True
    )
    color = Column(String(16), nullable=False, default=DEFAULT_LANE_COLOR)
    weight = Column(Integer, default=DEFAULT_LANE_WEIGHT)
    opacity = Column(Float, default=DEFAULT_LANE_OPACITY)
    path = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_on = Column(DateTime(timezone=True))
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())
    # Relations
    name = relationship(Language, foreign_keys=[name_id], lazy="selectin")
    description = relationship(Language, foreign_keys=[description_id], lazy="selectin")
    service = relationship(TransportService, back_populates="lanes")
    stops = relationship(
        "BusStop",
        secondary="stop_in_lane",
        back_populates="lanes",
        order_by=lambda: [BusStop.created_on, BusStop.id],
    )
    routes = relationship(
        "BusRoute",
        secondary="lane_in_route",
        back_populates="lanes",
        order_by=lambda: [BusRoute.created_on, BusRoute.id],
    )


class BusRoute(ORMbase):
    """
    Represents a logical service line that runs over one or more lanes and
    serves a set of stops. A route carries no geometry of its own.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        name_id (String(36)):
            Foreign key to `language.id`. Localized display name. Required.

        description_id (String(36)):
            Foreign key to `language.id`. Localized description. Optional.

        service_id (String(36)):
            Foreign key to `transport_service.id`. Owning service. Optional.

        route_number (String(50)):
            Public route number shown to riders (ex:- "12A"). Optional.

        direction (Integer):
            Enum value of `RouteDirection`. Defaults to `BIDIRECTIONAL`.

        color (String(16)):
            Hex color of the route. Optional, the service color applies when NULL.

        is_active (Boolean):
            Whether the route is shown to riders.

        deleted_on (DateTime):
            Soft delete marker. NULL while the record is alive.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the route was created.
    """

    __tablename__ = "bus_route"

    id = Column(String(36), primary_key=True, default=newID)
    name_id = Column(String(36), ForeignKey("language.id"), nullable=False)
    description_id = Column(String(36), ForeignKey("language.id"))
    service_id = Column(
        String(36), ForeignKey("transport_service.id", ondelete="SET NULL"), index=True
    )
    route_number = Column(String(50))
    direction = Column(Integer, nullable=False, default=RouteDirection.BIDIRECTIONAL)
    color = Column(String(16))
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_on = Column(DateTime(timezone=True))
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())
    # Relations
    name = relationship(Language, foreign_keys=[name_id], lazy="selectin")
    description = relationship(Language, foreign_keys=[description_id], lazy="selectin")
    service = relationship(TransportService, back_populates="routes")
    lanes = relationship(
        BusLane,
        secondary="lane_in_route",
        back_populates="routes",
        order_by=lambda: [BusLane.created_on, BusLane.id],
    )
    stops = relationship(
        "BusStop",
        secondary="stop_in_route",
        back_populates="routes",
        order_by=lambda: [BusStop.created_on, BusStop.id],
    )


class BusStop(ORMbase):
    """
    Represents a physical bus stop drawn as a marker on the public map.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        name_id (String(36)):
            Foreign key to `language.id`. Localized display name. Required.

        description_id (String(36)):
            Foreign key to `language.id`. Localized description. Optional.

        latitude (Float), longitude (Float):
            WGS 84 coordinates of the stop. Required.

        icon_id (String(36)):
            Foreign key to `map_icon.id`. Marker icon override. Optional.

        zone_id (String(36)):
            Foreign key to `zone.id`. Zone the stop belongs to. Optional.

        has_shelter, has_bench, has_lighting, is_accessible, has_real_time_info (Boolean):
            Amenity flags shown in the stop popup.

        is_active (Boolean):
            Whether the stop is shown to riders.

        deleted_on (DateTime):
            Soft delete marker. NULL while the record is alive.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the stop was created.
    """

    __tablename__ = "bus_stop"

    id = Column(String(36), primary_key=True, default=newID)
    name_id = Column(String(36), ForeignKey("language.id"), nullable=False)
    description_id = Column(String(36), ForeignKey("language.id"))
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    icon_id = Column(String(36), ForeignKey("map_icon.id", ondelete="SET NULL"))
    zone_id = Column(
        String(36), ForeignKey("zone.id", ondelete="SET NULL"), index=True
    )
    has_shelter = Column(Boolean, nullable=False, default=False)
    has_bench = Column(Boolean, nullable=False, default=False)
    has_lighting = Column(Boolean, nullable=False, default=False)
    is_accessible = Column(Boolean, nullable=False, default=False)
    has_real_time_info = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_on = Column(DateTime(timezone=True))
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())
    # Relations
    name = relationship(Language, foreign_keys=[name_id], lazy="selectin")
    description = relationship(Language, foreign_keys=[description_id], lazy="selectin")
    images = relationship(
        File, secondary="stop_image", order_by=lambda: [File.created_on, File.id]
    )
    icon = relationship(MapIcon)
    zone = relationship(Zone)
    lanes = relationship(
        BusLane,
        secondary="stop_in_lane",
        back_populates="stops",
        order_by=lambda: [BusLane.created_on, BusLane.id],
    )
    routes = relationship(
        BusRoute,
        secondary="stop_in_route",
        back_populates="stops",
        order_by=lambda: [BusRoute.created_on, BusRoute.id],
    )


# ----------------------------------- Timetable DB Models -------------------------------------#
class BusSchedule(ORMbase):
    """
    Represents one timetable entry: a departure of a route from one of its stops.

    Columns:
        id (String(36)):
            Primary key. UUID text.

        route_id (String(36)):
            Foreign key to `bus_route.id`. The departing route.
            Cascades on delete, a schedule is meaningless without its route.

        stop_id (String(36)):
            Foreign key to `bus_stop.id`. The stop the departure leaves from.
            Cascades on delete.

        departure_time (Time):
            Local time of day of the departure. Required.

        day_of_week (Integer):
            Day the entry applies to, stored as `Day` enum value. Required.

        specific_date (Date):
            Restricts the entry to a single calendar date. Optional.

        notes (String(512)):
            Free text shown next to the departure. Optional.

        is_active (Boolean):
            Whether the entry is shown to riders.

        deleted_on (DateTime):
            Soft delete marker. NULL while the record is alive.

        updated_on (DateTime):
            Timestamp automatically updated whenever the record is modified.

        created_on (DateTime):
            Timestamp indicating when the entry was created.
    """

    __tablename__ = "bus_schedule"

    id = Column(String(36), primary_key=True, default=newID)
    route_id = Column(
        String(36),
        ForeignKey("bus_route.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    stop_id = Column(
        String(36),
        ForeignKey("bus_stop.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    departure_time = Column(Time, nullable=False)
    day_of_week = Column(Integer, nullable=False, default=Day.MONDAY)
    specific_date = Column(Date)
    notes = Column(String(512))
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_on = Column(DateTime(timezone=True))
    # Metadata
    updated_on = Column(DateTime(timezone=True), onupdate=func.now())
    created_on = Column(DateTime(timezone=True), nullable=False, default=func.now())
    # Relations
    route = relationship(BusRoute)
    stop = relationship(BusStop)
