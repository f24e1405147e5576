"""Shared test fixtures for the transit map server."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import (
    bus_lane,
    bus_route,
    bus_schedule,
    bus_stop,
    map as map_api,
    map_icon,
    transport_service,
    zone,
)
from app.src.db import (
    BusLane,
    BusRoute,
    BusSchedule,
    BusStop,
    File,
    Language,
    MapIcon,
    ORMbase,
    TransportService,
    Zone,
)
from app.src.enums import Day, RouteDirection, TransportServiceType

API_MODULES = (
    map_api,
    transport_service,
    bus_lane,
    bus_route,
    bus_stop,
    zone,
    map_icon,
    bus_schedule,
)
EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database shared by every connection of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ORMbase.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine, monkeypatch):
    """Point every endpoint module at the test database."""
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    for module in API_MODULES:
        monkeypatch.setattr(module, "sessionMaker", factory)
    return factory


@pytest.fixture()
def client(session_factory):
    """HTTP test client for the root app."""
    from app.main import app

    return TestClient(app)


class Seeder:
    """Adds network records to the test database with predictable creation times."""

    def __init__(self, session):
        self.session = session
        self.tick = 0

    def _stamp(self, kwargs):
        # Distinct creation times keep the listing order deterministic
        self.tick += 1
        kwargs.setdefault("created_on", EPOCH + timedelta(minutes=self.tick))
        return kwargs

    def _add(self, record):
        self.session.add(record)
        self.session.flush()
        return record

    def icon(self, id, url="/static/icons/bus.png", **kwargs):
        file = File(url=url, name=url.rsplit("/", 1)[-1]) if url else None
        return self._add(
            MapIcon(id=id, name=Language(en=id), file=file, **self._stamp(kwargs))
        )

    def service(self, id, color="#0066CC", type=TransportServiceType.BUS, name=None, **kwargs):
        name = name or Language(en=id)
        return self._add(
            TransportService(id=id, name=name, color=color, type=type, **self._stamp(kwargs))
        )

    def zone(self, id, name=None, **kwargs):
        return self._add(Zone(id=id, name=name or Language(en=id), **self._stamp(kwargs)))

    def lane(self, id, service=None, path=None, stops=(), **kwargs):
        return self._add(
            BusLane(
                id=id,
                name=Language(en=id),
                service_id=service.id if service is not None else None,
                path=path if path is not None else [],
                stops=list(stops),
                **self._stamp(kwargs),
            )
        )

    def route(self, id, service=None, lanes=(), stops=(), **kwargs):
        kwargs.setdefault("direction", RouteDirection.BIDIRECTIONAL)
        return self._add(
            BusRoute(
                id=id,
                name=Language(en=id),
                service_id=service.id if service is not None else None,
                lanes=list(lanes),
                stops=list(stops),
                **self._stamp(kwargs),
            )
        )

    def stop(self, id, latitude=36.19, longitude=44.01, zone=None, **kwargs):
        return self._add(
            BusStop(
                id=id,
                name=Language(en=id),
                latitude=latitude,
                longitude=longitude,
                zone_id=zone.id if zone is not None else None,
                **self._stamp(kwargs),
            )
        )

    def schedule(self, id, route, stop, departure_time, day_of_week=Day.MONDAY, **kwargs):
        return self._add(
            BusSchedule(
                id=id,
                route_id=route.id,
                stop_id=stop.id,
                departure_time=departure_time,
                day_of_week=day_of_week,
                **self._stamp(kwargs),
            )
        )

    def commit(self):
        self.session.commit()


@pytest.fixture()
def seed(session_factory):
    session = session_factory()
    yield Seeder(session)
    session.close()
