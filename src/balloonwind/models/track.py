"""Per-entity tracks and the aggregated track set of one pass."""

from __future__ import annotations

from pydantic import Field, field_validator

from balloonwind.models._base import BalloonWindModel
from balloonwind.models.point import PointRecord


class Track(BalloonWindModel):
    """Ordered observations of one entity, most recent first.

    ``points`` is sorted ascending by ``hour_offset`` so index ``0`` is the
    latest observation and index ``1`` the one before it.
    """

    entity_id: str
    points: tuple[PointRecord, ...] = Field(min_length=1)

    @field_validator("points")
    @classmethod
    def _sort_by_recency(cls, value: tuple[PointRecord, ...]) -> tuple[PointRecord, ...]:
        return tuple(sorted(value, key=lambda point: point.hour_offset))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def latest(self) -> PointRecord:
        return self.points[0]

    @property
    def previous(self) -> PointRecord | None:
        """Second most recent observation, ``None`` for single-point tracks."""
        return self.points[1] if len(self.points) > 1 else None

    def is_active(self, max_offset: int) -> bool:
        """Return ``True`` when the entity was seen at *max_offset* hours ago or later."""
        return self.latest.hour_offset <= max_offset


class TrackSet(BalloonWindModel):
    """Result of one aggregation pass.

    Parameters
    ----------
    tracks : dict[str, Track]
        Every entity seen in the window, active or not.
    corrupt_hours : tuple[int, ...]
        Hour offsets whose snapshot failed to fetch or parse.
    valid_point_count : int
        Total number of accepted point records.
    hours_ingested : int
        Number of hourly parse results consumed (corrupt ones included).
    """

    tracks: dict[str, Track] = Field(default_factory=dict)
    corrupt_hours: tuple[int, ...] = ()
    valid_point_count: int = 0
    hours_ingested: int = 0

    @property
    def corrupt_file_count(self) -> int:
        return len(self.corrupt_hours)

    def active(self, max_offset: int) -> dict[str, Track]:
        """Tracks with at least one point at ``hour_offset <= max_offset``."""
        return {entity_id: track for entity_id, track in self.tracks.items() if track.is_active(max_offset)}


class VelocityEstimate(BalloonWindModel):
    """Ground speed between the two most recent points of a track."""

    speed_kmh: float
    distance_km: float
    elapsed_hours: float
