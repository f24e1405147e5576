"""Tests for the database setup commands."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect

from app import setup
from app.src.enums import Day


@pytest.fixture()
def setup_db(engine, session_factory, monkeypatch):
    monkeypatch.setattr(setup, "engine", engine)
    monkeypatch.setattr(setup, "sessionMaker", session_factory)
    return engine


def test_create_and_remove_tables(setup_db):
    setup.removeTables()
    assert inspect(setup_db).get_table_names() == []

    setup.createTables()
    assert "bus_stop" in inspect(setup_db).get_table_names()


def test_init_seeds_demo_network(setup_db, client):
    setup.initDB()

    data = client.get("/api/map").json()["data"]

    assert len(data["services"]) == 1
    assert len(data["zones"]) == 2
    assert len(data["lanes"]) == 2
    assert len(data["routes"]) == 1
    assert len(data["stops"]) == 3

    service = data["services"][0]
    assert service["type"] == "BUS"
    assert service["icon"]["fileUrl"] == "/static/icons/bus.png"

    stops = {stop["name"]["en"]: stop for stop in data["stops"]}
    central = stops["Central Station"]
    assert central["serviceIds"] == [service["id"]]
    assert len(central["lanes"]) == 2
    assert central["zone"]["name"]["en"] == "Downtown"
    assert central["images"][0]["url"] == "/static/images/central_station.jpg"
    assert central["amenities"]["hasRealTimeInfo"] is True

    route = data["routes"][0]
    assert route["routeNumber"] == "1A"
    assert len(route["laneIds"]) == 2
    assert len(route["stopIds"]) == 3


def test_demo_lanes_start_at_central_station(setup_db, client):
    setup.initDB()

    data = client.get("/api/map").json()["data"]

    central = next(stop for stop in data["stops"] if stop["name"]["en"] == "Central Station")
    # Lane points are longitude first
    for lane in data["lanes"]:
        assert lane["path"][0] == [central["longitude"], central["latitude"]]


def test_demo_timetable(setup_db, client):
    setup.initDB()

    response = client.get("/api/bus_schedule", params={"day_of_week": Day.MONDAY.value})

    assert response.status_code == 200
    schedules = response.json()
    assert len(schedules) == 6
    assert [s["departure_time"] for s in schedules][::2] == ["07:00:00", "12:00:00", "17:00:00"]
    assert {s["route"]["route_number"] for s in schedules} == {"1A"}
    assert client.get("/api/map_icon").json()[0]["name"]["en"] == "Bus"
