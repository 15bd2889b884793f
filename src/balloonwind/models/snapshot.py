"""Raw snapshot input contract and per-hour parse results."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from balloonwind.models._base import BalloonWindModel
from balloonwind.models.point import PointRecord


class RawSnapshot(BalloonWindModel):
    """One fetch result for a given hour offset, as handed to the parser.

    ``body`` is either the response text (``str`` / ``bytes``) or an already
    decoded structure. ``ok`` is ``False`` when the fetch itself failed
    (network error, non-2xx, timeout); ``error`` then describes why.
    """

    hour_offset: int = Field(ge=0)
    ok: bool = True
    body: Any = None
    error: str | None = None


class SnapshotParseResult(BalloonWindModel):
    """Validated records of one hour, or a corrupt marker.

    A corrupt result always has zero records. ``dropped_count`` counts
    elements of an otherwise valid snapshot that failed point validation.
    """

    hour_offset: int
    records: tuple[PointRecord, ...] = ()
    corrupt: bool = False
    reason: str | None = None
    dropped_count: int = 0
