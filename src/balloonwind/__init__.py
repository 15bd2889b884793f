"""balloonwind - Balloon trajectory reconstruction and wind-model correlation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("balloonwind")
except PackageNotFoundError:
    __version__ = "0+local"
from balloonwind._api.wind import (
    build_wind_query,
    normalize_altitude_m,
    parse_wind_response,
    select_pressure_level,
)
from balloonwind.analysis import (
    analyze,
    average_score,
    estimate_fleet_velocities,
    estimate_velocity,
    haversine_km,
    match_score,
    plan_wind_queries,
    score_entity,
)
from balloonwind.client import BalloonWindClient
from balloonwind.config import BalloonWindConfig
from balloonwind.exceptions import (
    BalloonWindConfigError,
    BalloonWindError,
    BalloonWindPayloadError,
    BalloonWindTransportError,
)
from balloonwind.ingestion.snapshots import parse_payload, parse_snapshot
from balloonwind.models import (
    AnalysisResult,
    FleetSummary,
    LookupStatus,
    MatchQuality,
    PointRecord,
    PointShape,
    PressureLevel,
    RawSnapshot,
    ScoreResult,
    SnapshotParseResult,
    Track,
    TrackSet,
    VelocityEstimate,
    WindLookup,
    WindQuery,
    WindSample,
)
from balloonwind.tracks import TrackAggregator, aggregate_snapshots

__all__ = [
    "__version__",
    "AnalysisResult",
    "BalloonWindClient",
    "BalloonWindConfig",
    "BalloonWindConfigError",
    "BalloonWindError",
    "BalloonWindPayloadError",
    "BalloonWindTransportError",
    "FleetSummary",
    "LookupStatus",
    "MatchQuality",
    "PointRecord",
    "PointShape",
    "PressureLevel",
    "RawSnapshot",
    "ScoreResult",
    "SnapshotParseResult",
    "Track",
    "TrackAggregator",
    "TrackSet",
    "VelocityEstimate",
    "WindLookup",
    "WindQuery",
    "WindSample",
    "aggregate_snapshots",
    "analyze",
    "average_score",
    "build_wind_query",
    "estimate_fleet_velocities",
    "estimate_velocity",
    "haversine_km",
    "match_score",
    "normalize_altitude_m",
    "parse_payload",
    "parse_snapshot",
    "parse_wind_response",
    "plan_wind_queries",
    "score_entity",
    "select_pressure_level",
]
