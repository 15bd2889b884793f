from __future__ import annotations

import asyncio

import pytest

from balloonwind._api.wind import build_wind_query
from balloonwind._cache import WindLookupCache
from balloonwind.models.wind import LookupStatus, WindLookup, WindSample


@pytest.mark.asyncio
async def test_concurrent_lookups_share_one_fetch() -> None:
    cache = WindLookupCache()
    calls = 0
    query = build_wind_query(10, 10, 12)

    async def fetch() -> WindLookup:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0)
        return WindLookup(entity_id="A", query=query, status=LookupStatus.OK, sample=WindSample(speed_kmh=42))

    first, second = await asyncio.gather(cache.lookup("A", query, fetch), cache.lookup("B", query, fetch))

    assert calls == 1
    assert cache.hits == 1
    assert len(cache) == 1
    assert first.entity_id == "A"
    assert second.entity_id == "B"
    assert second.sample == first.sample


@pytest.mark.asyncio
async def test_shared_lookup_carries_callers_query() -> None:
    cache = WindLookupCache()
    low = build_wind_query(5, 5, 6)
    high = build_wind_query(5, 5, 9)

    async def fetch() -> WindLookup:
        return WindLookup(entity_id="A", query=low, status=LookupStatus.OK, sample=WindSample(speed_kmh=60))

    first = await cache.lookup("A", low, fetch)
    second = await cache.lookup("B", high, fetch)

    assert cache.hits == 1
    assert first.query.altitude_m == 6000.0
    assert second.query == high
    assert second.query.altitude_m == 9000.0


@pytest.mark.asyncio
async def test_different_levels_are_separate_entries() -> None:
    cache = WindLookupCache()

    async def fetch_for(entity_id: str, altitude: float) -> WindLookup:
        query = build_wind_query(10, 10, altitude)
        return await cache.lookup(
            entity_id,
            query,
            lambda: _ok(entity_id, altitude),
        )

    async def _ok(entity_id: str, altitude: float) -> WindLookup:
        return WindLookup(
            entity_id=entity_id,
            query=build_wind_query(10, 10, altitude),
            status=LookupStatus.OK,
            sample=WindSample(speed_kmh=altitude),
        )

    surface = await fetch_for("A", 1)
    jet = await fetch_for("B", 12)

    assert len(cache) == 2
    assert cache.hits == 0
    assert surface.sample is not None and surface.sample.speed_kmh == 1
    assert jet.sample is not None and jet.sample.speed_kmh == 12
