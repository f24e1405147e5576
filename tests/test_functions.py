"""Tests for the shared query and documentation helpers."""

from __future__ import annotations

from app.src import exceptions
from app.src.db import BusStop
from app.src.functions import makeExceptionResponses, snapshotIsolationLevel


def test_snapshot_isolation_level_per_dialect():
    assert snapshotIsolationLevel("postgresql") == "REPEATABLE READ"
    assert snapshotIsolationLevel("sqlite") == "SERIALIZABLE"


def test_exception_responses_group_by_status_code():
    responses = makeExceptionResponses(
        [
            exceptions.InvalidRange(BusStop.latitude),
            exceptions.InvalidRange(BusStop.longitude),
            exceptions.PydanticError(detail="bad input"),
        ]
    )

    assert set(responses) == {406, 422}
    assert responses[406]["description"] == "InvalidRange"
    examples = responses[406]["content"]["application/json"]["examples"]
    assert len(examples) == 2
    assert examples["InvalidRange"]["value"] == {
        "detail": "The lower bound of latitude exceeds its upper bound"
    }
    assert "longitude" in examples["InvalidRange_1"]["summary"]
    assert responses[422]["description"] == "PydanticError"


def test_exception_responses_are_published(client):
    schema = client.get("/api/openapi.json").json()

    responses = schema["paths"]["/bus_stop"]["get"]["responses"]
    assert "406" in responses
    assert len(responses["406"]["content"]["application/json"]["examples"]) == 3
