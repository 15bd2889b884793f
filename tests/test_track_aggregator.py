from __future__ import annotations

import json

import pytest

from balloonwind.exceptions import BalloonWindError
from balloonwind.ingestion.snapshots import parse_payload
from balloonwind.models.snapshot import RawSnapshot, SnapshotParseResult
from balloonwind.tracks.aggregator import TrackAggregator, aggregate_snapshots


def _window(payloads: dict[int, object], hours: int = 24) -> list[RawSnapshot]:
    snapshots: list[RawSnapshot] = []
    for hour in range(hours):
        if hour in payloads:
            snapshots.append(RawSnapshot(hour_offset=hour, body=json.dumps(payloads[hour])))
        else:
            snapshots.append(RawSnapshot(hour_offset=hour, body="[]"))
    return snapshots


def test_points_are_grouped_by_entity_and_sorted_by_recency() -> None:
    aggregator = TrackAggregator()
    # Ingest out of order on purpose.
    aggregator.ingest(parse_payload([{"id": "A", "lat": 3, "lon": 0}], 5))
    aggregator.ingest(parse_payload([{"id": "A", "lat": 1, "lon": 0}, {"id": "B", "lat": 9, "lon": 9}], 0))
    aggregator.ingest(parse_payload([{"id": "A", "lat": 2, "lon": 0}], 2))

    track_set = aggregator.build()

    track = track_set.tracks["A"]
    assert [p.hour_offset for p in track.points] == [0, 2, 5]
    assert track.latest.lat == 1
    assert track.previous is not None and track.previous.lat == 2
    assert len(track_set.tracks["B"]) == 1
    assert track_set.valid_point_count == 4


def test_corrupt_hours_are_counted() -> None:
    snapshots = _window({0: [[10, 10, 1]]})
    snapshots[7] = RawSnapshot(hour_offset=7, ok=False, error="HTTP 500")
    snapshots[9] = RawSnapshot(hour_offset=9, body="{garbage")

    track_set = aggregate_snapshots(snapshots)

    assert track_set.corrupt_file_count == 2
    assert track_set.corrupt_hours == (7, 9)
    assert track_set.hours_ingested == 24
    assert track_set.valid_point_count == 1


def test_active_tracks_require_a_recent_point() -> None:
    track_set = aggregate_snapshots(
        _window(
            {
                3: [{"id": "recent", "lat": 0, "lon": 0}],
                4: [{"id": "stale", "lat": 0, "lon": 0}, {"id": "recent", "lat": 0, "lon": 1}],
            }
        )
    )

    active = track_set.active(3)

    assert set(active) == {"recent"}
    # Inactive tracks stay in the full map.
    assert set(track_set.tracks) == {"recent", "stale"}


def test_aggregation_never_drops_a_valid_point() -> None:
    payloads = {
        hour: [{"id": f"E{i}", "lat": hour + i / 10, "lon": -hour, "alt": 12} for i in range(3)] for hour in range(0, 24, 3)
    }
    snapshots = _window(payloads)

    track_set = aggregate_snapshots(snapshots)

    for hour, points in payloads.items():
        for point in points:
            track = track_set.tracks[point["id"]]
            assert any(
                p.hour_offset == hour and p.lat == point["lat"] and p.lon == point["lon"] for p in track.points
            )
    assert track_set.valid_point_count == sum(len(points) for points in payloads.values())


def test_aggregator_rejects_input_after_build() -> None:
    aggregator = TrackAggregator()
    aggregator.build()

    with pytest.raises(BalloonWindError):
        aggregator.ingest(SnapshotParseResult(hour_offset=0))
