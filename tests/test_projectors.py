"""Tests for the map view-model projectors."""

from __future__ import annotations

from types import SimpleNamespace

from app.src import projectors


def make_language(en="Name", ar=None, ckb=None):
    return SimpleNamespace(en=en, ar=ar, ckb=ckb)


def make_service(id, color="#0066CC", type=1, icon=None):
    return SimpleNamespace(
        id=id, type=type, color=color, is_active=True, name=make_language(id), icon=icon
    )


def make_lane(id, service=None, path=None):
    return SimpleNamespace(
        id=id,
        name=make_language(id),
        color="#0066CC",
        service_id=service.id if service else None,
        service=service,
        path=path,
        weight=5,
        opacity=0.8,
        is_active=True,
    )


def make_route(id, service=None, color=None, lanes=(), stops=()):
    return SimpleNamespace(
        id=id,
        name=make_language(id),
        route_number="1",
        direction=1,
        color=color,
        service_id=service.id if service else None,
        service=service,
        lanes=list(lanes),
        stops=list(stops),
        is_active=True,
    )


def make_stop(lanes=(), routes=(), **overrides):
    fields = dict(
        id="s1",
        latitude=36.19,
        longitude=44.01,
        name=make_language("Stop"),
        description=None,
        images=[],
        icon=None,
        zone=None,
        lanes=list(lanes),
        routes=list(routes),
        has_shelter=True,
        has_bench=False,
        has_lighting=False,
        is_accessible=True,
        has_real_time_info=False,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_parse_path_keeps_only_numeric_pairs():
    assert projectors.parsePath([[1, 2], "bad", [3, 4], [5]]) == [(1, 2), (3, 4)]
    assert projectors.parsePath([[1.5, "2"], [None, 1], [0, 0]]) == [(0, 0)]


def test_parse_path_rejects_booleans():
    assert projectors.parsePath([[True, False], [1, 2]]) == [(1, 2)]


def test_parse_path_non_list_input():
    assert projectors.parsePath(None) == []
    assert projectors.parsePath("[[1, 2]]") == []
    assert projectors.parsePath({"lat": 1, "lng": 2}) == []


def test_language_content():
    assert projectors.toLanguageContent(None) is None
    assert projectors.toLanguageContent(make_language("X")) == {
        "en": "X",
        "ar": None,
        "ckb": None,
    }


def test_icon_without_file_is_dropped():
    icon = SimpleNamespace(id="i1", file=None)
    assert projectors.toMapIconData(icon) is None
    assert projectors.toMapIconData(None) is None


def test_icon_with_file():
    icon = SimpleNamespace(
        id="i1",
        file=SimpleNamespace(url="/icons/bus.png"),
        icon_size=24,
        icon_anchor_x=12,
        icon_anchor_y=None,
        popup_anchor_x=None,
        popup_anchor_y=None,
    )
    assert projectors.toMapIconData(icon) == {
        "id": "i1",
        "fileUrl": "/icons/bus.png",
        "iconSize": 24,
        "iconAnchorX": 12,
    }


def test_service_type_is_exposed_by_name():
    service = projectors.toMapTransportService(make_service("svc1", type=4))
    assert service["type"] == "TRAIN"
    assert "icon" not in service
    assert projectors.toMapTransportService(None) is None


def test_route_color_falls_back_to_service():
    service = make_service("svc1", color="#111111")
    assert projectors.toMapRouteSummary(make_route("r1", service))["color"] == "#111111"
    assert (
        projectors.toMapRouteSummary(make_route("r1", service, color="#222222"))["color"]
        == "#222222"
    )
    assert "color" not in projectors.toMapRouteSummary(make_route("r1"))


def test_route_collects_member_ids():
    route = projectors.toMapRoute(
        make_route(
            "r1",
            lanes=[SimpleNamespace(id="l1"), SimpleNamespace(id="l2")],
            stops=[SimpleNamespace(id="s1")],
        )
    )
    assert route["laneIds"] == ["l1", "l2"]
    assert route["stopIds"] == ["s1"]
    assert route["direction"] == "BIDIRECTIONAL"


def test_lane_decodes_path():
    lane = projectors.toMapLane(make_lane("l1", path=[[1, 2], [3]]))
    assert lane["path"] == [(1, 2)]
    assert "serviceId" not in lane
    assert "service" not in lane


def test_stop_deduplicates_services():
    s1 = make_service("S1")
    s2 = make_service("S2")
    stop = projectors.toMapStop(
        make_stop(
            lanes=[make_lane("l1", s1), make_lane("l2", s1)],
            routes=[make_route("r1", s2), make_route("r2", s1)],
        )
    )
    assert stop["serviceIds"] == ["S1", "S2"]
    assert [service["id"] for service in stop["services"]] == ["S1", "S2"]
    assert len(stop["lanes"]) == 2
    assert len(stop["routes"]) == 2


def test_stop_without_active_flag_is_visible():
    stop = projectors.toMapStop(make_stop())
    assert stop["isActive"] is True
    assert projectors.toMapStop(make_stop(), defaultActive=False)["isActive"] is False
    assert projectors.toMapStop(make_stop(is_active=False))["isActive"] is False


def test_stop_amenities_and_optional_keys():
    stop = projectors.toMapStop(make_stop())
    assert stop["amenities"] == {
        "hasShelter": True,
        "hasBench": False,
        "hasLighting": False,
        "isAccessible": True,
        "hasRealTimeInfo": False,
    }
    assert "description" not in stop
    assert "zone" not in stop
    assert "icon" not in stop
    assert stop["services"] == []


def test_payload_skips_missing_services():
    payload = projectors.toMapDataPayload([None, make_service("svc1")], [], [], [], [])
    assert [service["id"] for service in payload["services"]] == ["svc1"]
    assert payload["zones"] == []
