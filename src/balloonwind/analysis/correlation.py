"""Correlation scoring between balloon ground speed and modeled wind.

``analyze`` is pure: it takes a finished :class:`TrackSet` plus the wind
lookups gathered for it and produces a fresh :class:`AnalysisResult`. Running
it twice on the same inputs yields identical results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from balloonwind._api.wind import build_wind_query
from balloonwind._constants import ACTIVE_MAX_OFFSET, MIN_ELAPSED_HOURS, SCORE_MAX, SCORE_MIN, SCORE_PENALTY_PER_KMH
from balloonwind.analysis.velocity import estimate_velocity
from balloonwind.ingestion.normalize import round_half_up
from balloonwind.models.score import AnalysisResult, FleetSummary, ScoreResult
from balloonwind.models.track import TrackSet, VelocityEstimate
from balloonwind.models.wind import WindLookup, WindQuery

_logger = logging.getLogger(__name__)


def match_score(balloon_speed_kmh: float, wind_speed_kmh: float) -> int:
    """``clamp(round(100 - 2 * |balloon - wind|), 0, 100)``."""
    raw = SCORE_MAX - SCORE_PENALTY_PER_KMH * abs(balloon_speed_kmh - wind_speed_kmh)
    return max(SCORE_MIN, min(SCORE_MAX, round_half_up(raw)))


def average_score(scores: Iterable[int]) -> int:
    """Rounded arithmetic mean; ``0`` when there are no scores."""
    values = list(scores)
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def estimate_fleet_velocities(
    track_set: TrackSet,
    *,
    active_max_offset: int = ACTIVE_MAX_OFFSET,
    min_elapsed_hours: float = MIN_ELAPSED_HOURS,
) -> dict[str, VelocityEstimate]:
    """Velocity estimates for active tracks that have at least two points."""
    velocities: dict[str, VelocityEstimate] = {}
    for entity_id, track in track_set.active(active_max_offset).items():
        estimate = estimate_velocity(track, min_elapsed_hours=min_elapsed_hours)
        if estimate is not None:
            velocities[entity_id] = estimate
    return velocities


def plan_wind_queries(
    track_set: TrackSet,
    *,
    active_max_offset: int = ACTIVE_MAX_OFFSET,
    min_elapsed_hours: float = MIN_ELAPSED_HOURS,
) -> dict[str, WindQuery]:
    """One wind query per scoreable entity, at its latest position.

    Entities without a velocity estimate can never be scored, so they get no
    query.
    """
    velocities = estimate_fleet_velocities(
        track_set,
        active_max_offset=active_max_offset,
        min_elapsed_hours=min_elapsed_hours,
    )
    queries: dict[str, WindQuery] = {}
    for entity_id in velocities:
        latest = track_set.tracks[entity_id].latest
        queries[entity_id] = build_wind_query(latest.lat, latest.lon, latest.alt)
    return queries


def score_entity(entity_id: str, velocity: VelocityEstimate | None, lookup: WindLookup | None) -> ScoreResult | None:
    """Score one entity, or ``None`` when either input is missing."""
    if velocity is None or lookup is None or not lookup.ok or lookup.sample is None:
        return None
    sample = lookup.sample
    return ScoreResult(
        entity_id=entity_id,
        balloon_speed_kmh=velocity.speed_kmh,
        wind_speed_kmh=sample.speed_kmh,
        score=match_score(velocity.speed_kmh, sample.speed_kmh),
        wind_direction_deg=sample.direction_deg,
        pressure_level=lookup.query.level,
        altitude_m=lookup.query.altitude_m,
    )


def analyze(
    track_set: TrackSet,
    wind_lookups: Mapping[str, WindLookup],
    *,
    active_max_offset: int = ACTIVE_MAX_OFFSET,
    min_elapsed_hours: float = MIN_ELAPSED_HOURS,
    hours_requested: int | None = None,
) -> AnalysisResult:
    """Score every active entity and summarize the fleet.

    Entities lacking a velocity estimate or a wind sample are left out of
    ``scores`` and of the fleet average; they stay in ``tracks``.
    """
    active = track_set.active(active_max_offset)
    velocities = estimate_fleet_velocities(
        track_set,
        active_max_offset=active_max_offset,
        min_elapsed_hours=min_elapsed_hours,
    )

    scores: dict[str, ScoreResult] = {}
    for entity_id in active:
        result = score_entity(entity_id, velocities.get(entity_id), wind_lookups.get(entity_id))
        if result is not None:
            scores[entity_id] = result

    summary = FleetSummary(
        active_count=len(active),
        corrupt_file_count=track_set.corrupt_file_count,
        average_score=average_score(scored.score for scored in scores.values()),
        hours_requested=hours_requested if hours_requested is not None else track_set.hours_ingested,
        valid_point_count=track_set.valid_point_count,
        scored_count=len(scores),
        track_count=len(track_set.tracks),
    )
    _logger.debug(
        "Scored %d of %d active entities; average score %d",
        summary.scored_count,
        summary.active_count,
        summary.average_score,
    )

    return AnalysisResult(
        tracks=track_set,
        scores=scores,
        velocities=velocities,
        wind_lookups={entity_id: lookup for entity_id, lookup in wind_lookups.items() if entity_id in active},
        summary=summary,
    )
