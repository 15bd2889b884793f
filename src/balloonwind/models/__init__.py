"""Data models for snapshots, tracks, wind lookups and scores."""

from balloonwind.models._base import BalloonWindModel
from balloonwind.models.point import KeyedPointPayload, PointRecord, PointShape, PositionalPointPayload
from balloonwind.models.score import AnalysisResult, FleetSummary, MatchQuality, ScoreResult
from balloonwind.models.snapshot import RawSnapshot, SnapshotParseResult
from balloonwind.models.track import Track, TrackSet, VelocityEstimate
from balloonwind.models.wind import LookupStatus, PressureLevel, WindLookup, WindQuery, WindSample

__all__ = [
    "AnalysisResult",
    "BalloonWindModel",
    "FleetSummary",
    "KeyedPointPayload",
    "LookupStatus",
    "MatchQuality",
    "PointRecord",
    "PointShape",
    "PositionalPointPayload",
    "PressureLevel",
    "RawSnapshot",
    "ScoreResult",
    "SnapshotParseResult",
    "Track",
    "TrackSet",
    "VelocityEstimate",
    "WindLookup",
    "WindQuery",
    "WindSample",
]
