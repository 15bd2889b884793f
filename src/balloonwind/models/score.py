"""Score results, fleet summary and the per-pass analysis bundle."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from balloonwind._constants import FAIR_MATCH_MAX_DIFF_KMH, GOOD_MATCH_MAX_DIFF_KMH
from balloonwind.ingestion.normalize import round_half_up
from balloonwind.models._base import BalloonWindModel
from balloonwind.models.track import Track, TrackSet, VelocityEstimate
from balloonwind.models.wind import PressureLevel, WindLookup


class MatchQuality(StrEnum):
    GOOD = "good"
    FAIR = "fair"
    DEVIATION = "deviation"

    @classmethod
    def from_difference(cls, difference_kmh: float) -> MatchQuality:
        """Bucket an absolute speed difference (km/h)."""
        if difference_kmh < GOOD_MATCH_MAX_DIFF_KMH:
            return cls.GOOD
        if difference_kmh < FAIR_MATCH_MAX_DIFF_KMH:
            return cls.FAIR
        return cls.DEVIATION


class ScoreResult(BalloonWindModel):
    """Agreement between observed balloon speed and modeled wind speed.

    Parameters
    ----------
    entity_id : str
        Scored entity.
    balloon_speed_kmh : float
        Estimated ground speed of the balloon.
    wind_speed_kmh : float
        Modeled wind speed at the selected pressure level.
    score : int
        Match score in ``[0, 100]``.
    wind_direction_deg : float or None
        Modeled wind direction, when the model returned one.
    pressure_level : PressureLevel or None
        Layer the wind was taken from.
    altitude_m : float or None
        Normalized altitude of the latest point.
    """

    entity_id: str
    balloon_speed_kmh: float
    wind_speed_kmh: float
    score: int = Field(ge=0, le=100)
    wind_direction_deg: float | None = None
    pressure_level: PressureLevel | None = None
    altitude_m: float | None = None

    @property
    def speed_difference_kmh(self) -> float:
        return abs(self.balloon_speed_kmh - self.wind_speed_kmh)

    @property
    def quality(self) -> MatchQuality:
        return MatchQuality.from_difference(self.speed_difference_kmh)


class FleetSummary(BalloonWindModel):
    """Fleet statistics derived from one pass."""

    active_count: int
    corrupt_file_count: int
    average_score: int
    hours_requested: int = 0
    valid_point_count: int = 0
    scored_count: int = 0
    track_count: int = 0

    @property
    def corrupt_percent(self) -> int:
        if self.hours_requested <= 0:
            return 0
        return round_half_up(100 * self.corrupt_file_count / self.hours_requested)


class AnalysisResult(BalloonWindModel):
    """Everything one analysis pass exposes to the presentation layer."""

    tracks: TrackSet
    scores: dict[str, ScoreResult] = Field(default_factory=dict)
    velocities: dict[str, VelocityEstimate] = Field(default_factory=dict)
    wind_lookups: dict[str, WindLookup] = Field(default_factory=dict)
    summary: FleetSummary

    def active_tracks(self, max_offset: int) -> dict[str, Track]:
        return self.tracks.active(max_offset)
