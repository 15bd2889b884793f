"""Snapshot parsing.

Turns one hourly payload into validated :class:`PointRecord` objects.
Parsing is total: any input yields a :class:`SnapshotParseResult`, either with
records or flagged corrupt. Corruption is tallied by the aggregator, it is
never raised to the caller.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from balloonwind._constants import MAX_ABS_LATITUDE
from balloonwind.exceptions import BalloonWindPayloadError
from balloonwind.models.point import KeyedPointPayload, PointRecord, PointShape, PositionalPointPayload
from balloonwind.models.snapshot import RawSnapshot, SnapshotParseResult

_logger = logging.getLogger(__name__)


def _decode_body(body: Any) -> Sequence[Any]:
    """Return the array of point elements or raise :class:`BalloonWindPayloadError`."""
    if body is None:
        raise BalloonWindPayloadError("empty payload")

    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BalloonWindPayloadError("payload is not valid UTF-8") from exc

    if isinstance(body, str):
        try:
            body = json.loads(body)
        except (ValueError, RecursionError) as exc:
            raise BalloonWindPayloadError(f"payload is not JSON: {body[:64]!r}") from exc

    if not isinstance(body, (list, tuple)):
        raise BalloonWindPayloadError(f"expected an array of points, got {type(body).__name__}")
    return body


def _decode_point(element: Any, index: int, hour_offset: int) -> PointRecord | None:
    """Decode one array element; ``None`` when it is not a valid point."""
    try:
        if isinstance(element, dict):
            keyed = KeyedPointPayload.model_validate(element)
            entity_id = keyed.id if keyed.id is not None else str(index)
            lat, lon, alt = keyed.lat, keyed.lon, keyed.alt
            shape = PointShape.KEYED
        elif isinstance(element, (list, tuple)):
            positional = PositionalPointPayload.from_sequence(element)
            entity_id = str(index)
            lat, lon, alt = positional.lat, positional.lon, positional.alt
            shape = PointShape.POSITIONAL
        else:
            return None
    except ValidationError:
        return None

    # Longitude is only required to be numeric, its range is not checked.
    if lat is None or lon is None or abs(lat) > MAX_ABS_LATITUDE:
        return None

    return PointRecord(
        entity_id=entity_id,
        lat=lat,
        lon=lon,
        alt=alt,
        hour_offset=hour_offset,
        shape=shape,
    )


def parse_payload(body: Any, hour_offset: int) -> SnapshotParseResult:
    """Parse a successfully fetched payload for *hour_offset*.

    *body* may be response text, bytes, or an already decoded structure.
    """
    try:
        elements = _decode_body(body)
    except BalloonWindPayloadError as exc:
        _logger.warning("Snapshot hour %02d is corrupt: %s", hour_offset, exc)
        return SnapshotParseResult(hour_offset=hour_offset, corrupt=True, reason=str(exc))

    records: list[PointRecord] = []
    for index, element in enumerate(elements):
        record = _decode_point(element, index, hour_offset)
        if record is not None:
            records.append(record)

    dropped = len(elements) - len(records)
    if dropped:
        _logger.debug("Snapshot hour %02d: dropped %d invalid point(s)", hour_offset, dropped)

    return SnapshotParseResult(
        hour_offset=hour_offset,
        records=tuple(records),
        dropped_count=dropped,
    )


def parse_snapshot(raw: RawSnapshot) -> SnapshotParseResult:
    """Parse one fetch result, treating a failed fetch as a corrupt hour."""
    if not raw.ok:
        reason = raw.error or "fetch failed"
        _logger.warning("Snapshot hour %02d is corrupt: %s", raw.hour_offset, reason)
        return SnapshotParseResult(hour_offset=raw.hour_offset, corrupt=True, reason=reason)
    return parse_payload(raw.body, raw.hour_offset)
