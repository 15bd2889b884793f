from __future__ import annotations

import json

import pytest

from balloonwind.ingestion.snapshots import parse_payload, parse_snapshot
from balloonwind.models.point import PointShape
from balloonwind.models.snapshot import RawSnapshot


def test_keyed_points_use_explicit_id() -> None:
    body = json.dumps([{"id": "A", "lat": 10, "lon": 20, "alt": 1.5}])

    result = parse_snapshot(RawSnapshot(hour_offset=3, body=body))

    assert result.corrupt is False
    assert len(result.records) == 1
    record = result.records[0]
    assert record.entity_id == "A"
    assert (record.lat, record.lon, record.alt) == (10.0, 20.0, 1.5)
    assert record.hour_offset == 3
    assert record.shape == PointShape.KEYED


def test_positional_triples_use_array_index_as_id() -> None:
    body = "[[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]"

    result = parse_payload(body, 0)

    assert [r.entity_id for r in result.records] == ["0", "1"]
    assert result.records[1].lat == 4.0
    assert result.records[1].alt == 6.0
    assert all(r.shape == PointShape.POSITIONAL for r in result.records)


def test_keyed_point_without_id_falls_back_to_index() -> None:
    result = parse_payload([{"lat": 1, "lon": 1}, {"id": "", "lat": 2, "lon": 2}], 5)

    assert [r.entity_id for r in result.records] == ["0", "1"]
    assert result.records[0].alt is None


def test_keyed_point_accepts_long_field_names() -> None:
    result = parse_payload([{"id": 7, "latitude": "12.5", "longitude": "-3", "altitude": 14000}], 1)

    record = result.records[0]
    assert record.entity_id == "7"
    assert record.lat == 12.5
    assert record.lon == -3.0
    assert record.alt == 14000.0


@pytest.mark.parametrize("lat", [91, -90.5, "abc", None, float("nan"), float("inf")])
def test_invalid_latitude_is_dropped(lat: object) -> None:
    result = parse_payload([[lat, 10, 1], [45, 10, 1]], 0)

    assert result.corrupt is False
    assert len(result.records) == 1
    assert result.records[0].entity_id == "1"
    assert result.dropped_count == 1


def test_integer_too_large_for_float_drops_only_that_point() -> None:
    body = "[[" + "1" * 400 + ", 0, 1], [10, 10, 1]]"

    result = parse_payload(body, 0)

    assert result.corrupt is False
    assert [r.entity_id for r in result.records] == ["1"]
    assert result.dropped_count == 1


def test_integer_too_large_for_float_altitude_is_treated_as_missing() -> None:
    body = '[{"id": "A", "lat": 10, "lon": 10, "alt": ' + "9" * 400 + "}]"

    result = parse_payload(body, 0)

    assert len(result.records) == 1
    assert result.records[0].alt is None


def test_latitude_boundaries_are_accepted() -> None:
    result = parse_payload([[90, 0, 1], [-90, 0, 1]], 0)

    assert len(result.records) == 2


def test_longitude_range_is_not_checked() -> None:
    result = parse_payload([[10, 400, 1]], 0)

    assert result.records[0].lon == 400.0


def test_non_point_elements_are_dropped() -> None:
    result = parse_payload([42, "x", None, [10, 20, 1]], 0)

    assert [r.entity_id for r in result.records] == ["3"]


@pytest.mark.parametrize(
    "body",
    [None, "", "not json", "{\"lat\": 1}", "null", "42", b"\xff\xfe", {"points": []}],
)
def test_unusable_payload_is_corrupt(body: object) -> None:
    result = parse_payload(body, 4)

    assert result.corrupt is True
    assert result.records == ()
    assert result.hour_offset == 4


def test_failed_fetch_is_corrupt() -> None:
    result = parse_snapshot(RawSnapshot(hour_offset=2, ok=False, error="HTTP 500"))

    assert result.corrupt is True
    assert result.reason == "HTTP 500"
    assert result.records == ()


def test_empty_array_is_not_corrupt() -> None:
    result = parse_payload("[]", 0)

    assert result.corrupt is False
    assert result.records == ()


def test_parsing_is_idempotent() -> None:
    body = json.dumps([[10, 20, 3], {"id": "B", "lat": 95, "lon": 1}, {"id": "C", "lat": -5, "lon": 1}])

    first = parse_payload(body, 6)
    second = parse_payload(body, 6)

    assert first == second
