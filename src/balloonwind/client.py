"""High-level async client that runs analysis passes over the constellation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from balloonwind._api.snapshots import fetch_snapshots
from balloonwind._api.wind import fetch_wind_lookup
from balloonwind._cache import WindLookupCache
from balloonwind._transport import HttpTransport
from balloonwind.analysis.correlation import analyze, plan_wind_queries
from balloonwind.config import BalloonWindConfig
from balloonwind.exceptions import BalloonWindError
from balloonwind.models.score import AnalysisResult
from balloonwind.models.snapshot import RawSnapshot
from balloonwind.models.wind import LookupStatus, WindLookup, WindQuery
from balloonwind.tracks.aggregator import aggregate_snapshots

_logger = logging.getLogger(__name__)


class BalloonWindClient:
    """Async client for the snapshot feed and the wind model.

    Usage::

        async with BalloonWindClient(config) as client:
            result = await client.run_analysis_pass()
            print(result.summary.average_score)

    Every pass starts from fresh state; nothing is carried between passes.
    """

    def __init__(
        self,
        config: BalloonWindConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or BalloonWindConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None

    @property
    def config(self) -> BalloonWindConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BalloonWindClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise BalloonWindError("Client not initialized. Use 'async with BalloonWindClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    async def fetch_snapshots(self) -> list[RawSnapshot]:
        """Fetch all hourly snapshots concurrently; failed hours come back with ``ok=False``."""
        return await fetch_snapshots(self._require_transport(), self._config)

    async def fetch_wind(self, entity_id: str, query: WindQuery) -> WindLookup:
        """Single wind lookup; failures are reported in the returned status."""
        return await fetch_wind_lookup(self._require_transport(), self._config, entity_id, query)

    async def fetch_wind_samples(self, queries: Mapping[str, WindQuery]) -> dict[str, WindLookup]:
        """Run wind lookups for many entities concurrently.

        Each lookup is isolated: one entity's failure leaves the others intact.
        """
        transport = self._require_transport()
        cache = WindLookupCache() if self._config.wind_cache_enabled else None
        limit = self._config.wind_concurrency
        semaphore = asyncio.Semaphore(limit) if limit > 0 else None

        async def _fetch(entity_id: str, query: WindQuery) -> WindLookup:
            if semaphore is None:
                return await fetch_wind_lookup(transport, self._config, entity_id, query)
            async with semaphore:
                return await fetch_wind_lookup(transport, self._config, entity_id, query)

        async def _lookup(entity_id: str, query: WindQuery) -> WindLookup:
            if cache is None:
                return await _fetch(entity_id, query)
            return await cache.lookup(entity_id, query, lambda: _fetch(entity_id, query))

        entity_ids = list(queries)
        results = await asyncio.gather(
            *(_lookup(entity_id, queries[entity_id]) for entity_id in entity_ids),
            return_exceptions=True,
        )

        lookups: dict[str, WindLookup] = {}
        for entity_id, result in zip(entity_ids, results, strict=True):
            if isinstance(result, WindLookup):
                lookups[entity_id] = result
                continue
            if not isinstance(result, Exception):
                raise result
            _logger.warning("Wind lookup for %s raised unexpectedly", entity_id, exc_info=result)
            lookups[entity_id] = WindLookup(
                entity_id=entity_id,
                query=queries[entity_id],
                status=LookupStatus.TRANSPORT_ERROR,
                error=repr(result),
            )

        if cache is not None and cache.hits:
            _logger.debug("Wind cache served %d of %d lookups", cache.hits, len(entity_ids))
        return lookups

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def run_analysis_pass(self) -> AnalysisResult:
        """Fetch, aggregate, look up wind and score the fleet.

        Aggregation finishes before any wind lookup starts; the resulting
        track set is read-only from then on.
        """
        snapshots = await self.fetch_snapshots()
        track_set = aggregate_snapshots(snapshots)

        queries = plan_wind_queries(
            track_set,
            active_max_offset=self._config.active_max_offset,
            min_elapsed_hours=self._config.min_elapsed_hours,
        )
        lookups = await self.fetch_wind_samples(queries)

        return analyze(
            track_set,
            lookups,
            active_max_offset=self._config.active_max_offset,
            min_elapsed_hours=self._config.min_elapsed_hours,
            hours_requested=self._config.hours_history,
        )
