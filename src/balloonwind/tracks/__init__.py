"""Per-entity track reconstruction."""

from balloonwind.tracks.aggregator import TrackAggregator, aggregate_snapshots

__all__ = ["TrackAggregator", "aggregate_snapshots"]
