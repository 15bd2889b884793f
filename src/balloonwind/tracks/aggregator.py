"""Track aggregation.

This is the only component allowed to group point records into tracks.
Aggregation completes before any analysis starts; the resulting
:class:`TrackSet` is immutable and only read afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from balloonwind.exceptions import BalloonWindError
from balloonwind.ingestion.snapshots import parse_snapshot
from balloonwind.models.point import PointRecord
from balloonwind.models.snapshot import RawSnapshot, SnapshotParseResult
from balloonwind.models.track import Track, TrackSet

_logger = logging.getLogger(__name__)


class TrackAggregator:
    """Groups validated points by entity across all hours of one pass.

    Usage::

        aggregator = TrackAggregator()
        for result in parse_results:
            aggregator.ingest(result)
        track_set = aggregator.build()

    After :meth:`build` the aggregator is frozen and rejects further input.
    """

    def __init__(self) -> None:
        self._points: dict[str, list[PointRecord]] = {}
        self._corrupt_hours: list[int] = []
        self._valid_point_count = 0
        self._hours_ingested = 0
        self._frozen = False

    def ingest(self, result: SnapshotParseResult) -> None:
        """Add one hour's parse result."""
        if self._frozen:
            raise BalloonWindError("TrackAggregator already built; start a new pass")

        self._hours_ingested += 1
        if result.corrupt:
            self._corrupt_hours.append(result.hour_offset)
            return

        for record in result.records:
            self._points.setdefault(record.entity_id, []).append(record)
        self._valid_point_count += len(result.records)

    def build(self) -> TrackSet:
        """Sort every track by recency and freeze the aggregator."""
        self._frozen = True
        tracks = {entity_id: Track(entity_id=entity_id, points=tuple(points)) for entity_id, points in self._points.items()}
        _logger.debug(
            "Aggregated %d track(s) from %d point(s); %d corrupt hour(s)",
            len(tracks),
            self._valid_point_count,
            len(self._corrupt_hours),
        )
        return TrackSet(
            tracks=tracks,
            corrupt_hours=tuple(sorted(self._corrupt_hours)),
            valid_point_count=self._valid_point_count,
            hours_ingested=self._hours_ingested,
        )


def aggregate_snapshots(snapshots: Iterable[RawSnapshot]) -> TrackSet:
    """Parse every raw snapshot and aggregate the results into a :class:`TrackSet`."""
    aggregator = TrackAggregator()
    for raw in snapshots:
        aggregator.ingest(parse_snapshot(raw))
    return aggregator.build()
