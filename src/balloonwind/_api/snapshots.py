"""Hourly snapshot fetching.

Endpoints:
  - {snapshot_base_url}00.json .. {snapshot_base_url}23.json
"""

from __future__ import annotations

import asyncio
import logging

from balloonwind._constants import snapshot_url
from balloonwind._transport import Transport
from balloonwind.config import BalloonWindConfig
from balloonwind.exceptions import BalloonWindTransportError
from balloonwind.models.snapshot import RawSnapshot

_logger = logging.getLogger(__name__)


async def fetch_snapshot(transport: Transport, config: BalloonWindConfig, hour_offset: int) -> RawSnapshot:
    """Fetch one hour. Transport failures yield ``RawSnapshot(ok=False)``."""
    url = snapshot_url(config.snapshot_base_url, hour_offset)
    try:
        text = await transport.get_text(url)
    except BalloonWindTransportError as exc:
        _logger.debug("Snapshot hour %02d fetch failed: %s", hour_offset, exc)
        return RawSnapshot(hour_offset=hour_offset, ok=False, error=str(exc))
    return RawSnapshot(hour_offset=hour_offset, body=text)


async def fetch_snapshots(transport: Transport, config: BalloonWindConfig) -> list[RawSnapshot]:
    """Fetch every hour of the window concurrently, in hour-offset order.

    Waits for all fetches to settle. A failing hour never affects the others.
    """
    hours = range(config.hours_history)
    results = await asyncio.gather(
        *(fetch_snapshot(transport, config, hour) for hour in hours),
        return_exceptions=True,
    )

    snapshots: list[RawSnapshot] = []
    for hour, result in zip(hours, results, strict=True):
        if isinstance(result, RawSnapshot):
            snapshots.append(result)
            continue
        if not isinstance(result, Exception):
            raise result
        _logger.warning("Snapshot hour %02d fetch raised unexpectedly", hour, exc_info=result)
        snapshots.append(RawSnapshot(hour_offset=hour, ok=False, error=repr(result)))
    return snapshots
