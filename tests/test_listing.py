"""Tests for the per-entity public listing endpoints."""

from __future__ import annotations

from datetime import time

from app.src.db import Language
from app.src.enums import Day, OrderIn, RouteDirection, TransportServiceType


def ids(response):
    assert response.status_code == 200
    return [item["id"] for item in response.json()]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "version": "1.0.0"}


def test_transport_service_listing_hides_invisible_rows(client, seed):
    seed.service("svc1")
    seed.service("svc2", is_active=False)
    seed.commit()

    assert ids(client.get("/api/transport_service")) == ["svc1"]


def test_transport_service_filters(client, seed):
    seed.service("svc1", name=Language(en="City Bus", ar="حافلة المدينة"))
    seed.service("svc2", type=TransportServiceType.MINIBUS)
    seed.service("svc3", type=TransportServiceType.TAXI)
    seed.commit()

    assert ids(client.get("/api/transport_service", params={"type": 2})) == ["svc2"]
    assert ids(
        client.get(
            "/api/transport_service",
            params={"type_list": [2, 3], "order_in": OrderIn.ASC.value},
        )
    ) == ["svc2", "svc3"]
    assert ids(client.get("/api/transport_service", params={"name": "city"})) == ["svc1"]
    assert ids(client.get("/api/transport_service", params={"name": "المدينة"})) == [
        "svc1"
    ]


def test_transport_service_schema(client, seed):
    seed.service("svc1", color="#fff", name=Language(en="City Bus"))
    seed.commit()

    service = client.get("/api/transport_service").json()[0]
    assert service["type"] == TransportServiceType.BUS
    assert service["color"] == "#fff"
    assert service["name"] == {"en": "City Bus", "ar": None, "ckb": None}
    assert service["description"] is None
    assert service["is_active"] is True


def test_default_order_is_newest_first_and_paginated(client, seed):
    for index in range(5):
        seed.zone(f"z{index}")
    seed.commit()

    assert ids(client.get("/api/zone")) == ["z4", "z3", "z2", "z1", "z0"]
    assert ids(
        client.get("/api/zone", params={"order_in": OrderIn.ASC.value, "offset": 1, "limit": 2})
    ) == ["z1", "z2"]


def test_limit_is_bounded(client):
    assert client.get("/api/zone", params={"limit": 0}).status_code == 422
    assert client.get("/api/zone", params={"limit": 101}).status_code == 422


def test_inverted_created_on_range_is_rejected(client):
    response = client.get(
        "/api/zone",
        params={
            "created_on_ge": "2024-02-01T00:00:00Z",
            "created_on_le": "2024-01-01T00:00:00Z",
        },
    )

    assert response.status_code == 406
    assert response.headers["X-Error"] == "InvalidRange"
    assert response.json() == {
        "detail": "The lower bound of created_on exceeds its upper bound"
    }


def test_bus_lane_listing(client, seed):
    svc1 = seed.service("svc1")
    svc2 = seed.service("svc2")
    seed.lane("l1", service=svc1, path=[[1, 2], "bad", [3, 4], [5]])
    seed.lane("l2", service=svc2)
    seed.lane("l3", service=svc1, is_active=False)
    seed.commit()

    response = client.get(
        "/api/bus_lane", params={"service_id": "svc1", "order_in": OrderIn.ASC.value}
    )

    assert ids(response) == ["l1"]
    lane = response.json()[0]
    assert lane["path"] == [[1, 2], [3, 4]]
    assert lane["color"] == "#0066CC"
    assert lane["weight"] == 5
    assert lane["opacity"] == 0.8
    assert ids(
        client.get(
            "/api/bus_lane",
            params={"service_id_list": ["svc1", "svc2"], "order_in": OrderIn.ASC.value},
        )
    ) == ["l1", "l2"]


def test_bus_route_listing(client, seed):
    svc = seed.service("svc1")
    s1 = seed.stop("s1")
    s2 = seed.stop("s2", is_active=False)
    l1 = seed.lane("l1", service=svc)
    seed.route(
        "r1",
        service=svc,
        route_number="1A",
        direction=RouteDirection.FORWARD,
        lanes=[l1],
        stops=[s1, s2],
    )
    seed.route("r2", service=svc, route_number="2B")
    seed.commit()

    response = client.get("/api/bus_route", params={"route_number": "1a"})

    assert ids(response) == ["r1"]
    route = response.json()[0]
    assert route["direction"] == RouteDirection.FORWARD
    assert route["lane_ids"] == ["l1"]
    assert route["stop_ids"] == ["s1"]
    assert ids(
        client.get("/api/bus_route", params={"direction": RouteDirection.BIDIRECTIONAL.value})
    ) == ["r2"]
    assert ids(
        client.get(
            "/api/bus_route",
            params={"order_by": 2, "order_in": OrderIn.DESC.value},
        )
    ) == ["r2", "r1"]


def test_bus_stop_listing(client, seed):
    downtown = seed.zone("z1")
    s1 = seed.stop("s1", latitude=36.19, longitude=44.01, zone=downtown, has_shelter=True)
    seed.stop("s2", latitude=36.14, longitude=44.02, is_accessible=True)
    seed.stop("s3", latitude=10.0, longitude=10.0)
    seed.lane("l1", stops=[s1])
    seed.route("r1", stops=[s1])
    seed.commit()

    bbox = {
        "latitude_ge": 36.0,
        "latitude_le": 37.0,
        "longitude_ge": 44.0,
        "longitude_le": 45.0,
        "order_in": OrderIn.ASC.value,
    }
    assert ids(client.get("/api/bus_stop", params=bbox)) == ["s1", "s2"]
    assert ids(client.get("/api/bus_stop", params={"zone_id": "z1"})) == ["s1"]
    assert ids(client.get("/api/bus_stop", params={"is_accessible": True})) == ["s2"]

    response = client.get("/api/bus_stop", params={"has_shelter": True})
    stop = response.json()[0]
    assert ids(response) == ["s1"]
    assert stop["lane_ids"] == ["l1"]
    assert stop["route_ids"] == ["r1"]
    assert stop["zone_id"] == "z1"


def test_bus_stop_inverted_bounding_box_is_rejected(client):
    response = client.get(
        "/api/bus_stop", params={"latitude_ge": 40.0, "latitude_le": 30.0}
    )

    assert response.status_code == 406
    assert response.headers["X-Error"] == "InvalidRange"
    assert "latitude" in response.json()["detail"]


def test_bus_lane_listing_keeps_integer_coordinates(client, seed):
    seed.lane("l1", path=[[1, 2], [3.5, 4]])
    seed.commit()

    response = client.get("/api/bus_lane")

    assert '"path":[[1,2],[3.5,4]]' in response.text


def test_map_icon_listing(client, seed):
    seed.icon("icon1", url="/static/icons/bus.png")
    seed.icon("icon2", url=None)
    seed.icon("icon3", is_active=False)
    seed.commit()

    response = client.get("/api/map_icon", params={"order_in": OrderIn.ASC.value})

    assert ids(response) == ["icon1", "icon2"]
    icon = response.json()[0]
    assert icon["name"] == {"en": "icon1", "ar": None, "ckb": None}
    assert icon["file"]["url"] == "/static/icons/bus.png"
    assert icon["icon_size"] == 32
    assert response.json()[1]["file"] is None
    assert ids(client.get("/api/map_icon", params={"has_file": "false"})) == ["icon2"]
    assert ids(client.get("/api/map_icon", params={"name": "ICON1"})) == ["icon1"]


def test_bus_schedule_listing(client, seed):
    svc = seed.service("svc1")
    s1 = seed.stop("s1")
    s2 = seed.stop("s2")
    hiddenStop = seed.stop("s3", is_active=False)
    r1 = seed.route("r1", service=svc, route_number="1A", stops=[s1, s2])
    seed.schedule("d3", r1, s1, time(17, 0))
    seed.schedule("d1", r1, s1, time(7, 0))
    seed.schedule("d2", r1, s2, time(12, 30), day_of_week=Day.FRIDAY)
    seed.schedule("d4", r1, s1, time(9, 0), is_active=False)
    seed.schedule("d5", r1, hiddenStop, time(8, 0))
    seed.commit()

    response = client.get("/api/bus_schedule")

    # Earliest departure first by default
    assert ids(response) == ["d1", "d2", "d3"]
    schedule = response.json()[0]
    assert schedule["departure_time"] == "07:00:00"
    assert schedule["day_of_week"] == Day.MONDAY
    assert schedule["route"] == {
        "id": "r1",
        "name": {"en": "r1", "ar": None, "ckb": None},
        "route_number": "1A",
    }
    assert schedule["stop"]["name"]["en"] == "s1"

    assert ids(client.get("/api/bus_schedule", params={"stop_id": "s2"})) == ["d2"]
    assert ids(
        client.get("/api/bus_schedule", params={"day_of_week": Day.FRIDAY.value})
    ) == ["d2"]
    assert ids(
        client.get(
            "/api/bus_schedule",
            params={"departure_time_ge": "10:00:00", "departure_time_le": "18:00:00"},
        )
    ) == ["d2", "d3"]


def test_bus_schedule_inverted_time_range_is_rejected(client):
    response = client.get(
        "/api/bus_schedule",
        params={"departure_time_ge": "18:00:00", "departure_time_le": "06:00:00"},
    )

    assert response.status_code == 406
    assert response.headers["X-Error"] == "InvalidRange"
    assert "departure_time" in response.json()["detail"]
