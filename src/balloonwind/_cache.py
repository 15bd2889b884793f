"""Per-pass wind lookup cache.

Entities sharing a ``(lat, lon, level)`` triple reuse one in-flight request.
A cache lives for a single analysis pass, so entries can never be stale
relative to the pass that created them.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from balloonwind.models.wind import PressureLevel, WindLookup, WindQuery

CacheKey = tuple[float, float, PressureLevel]


class WindLookupCache:
    """Deduplicate wind lookups by query key."""

    def __init__(self) -> None:
        self._tasks: dict[CacheKey, asyncio.Task[WindLookup]] = {}
        self.hits = 0

    def __len__(self) -> int:
        return len(self._tasks)

    async def lookup(
        self,
        entity_id: str,
        query: WindQuery,
        fetch: Callable[[], Awaitable[WindLookup]],
    ) -> WindLookup:
        """Return the lookup for *query*, running *fetch* only on a miss.

        The shared result is re-labelled with *entity_id* and *query*, so
        each caller keeps its own altitude.
        """
        key = query.cache_key
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(fetch())
            self._tasks[key] = task
        else:
            self.hits += 1

        # shield: one caller being cancelled must not cancel the shared fetch
        lookup = await asyncio.shield(task)
        if lookup.entity_id == entity_id and lookup.query == query:
            return lookup
        return lookup.model_copy(update={"entity_id": entity_id, "query": query})
