"""Client configuration for balloonwind."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from typing import Any

from balloonwind._constants import (
    ACTIVE_MAX_OFFSET,
    HOURS_HISTORY,
    MIN_ELAPSED_HOURS,
    SNAPSHOT_BASE_URL,
    WIND_BASE_URL,
)
from balloonwind.exceptions import BalloonWindConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(name: str, value: str, convert: Callable[[str], Any]) -> Any:
    try:
        return convert(value.strip())
    except ValueError as exc:
        raise BalloonWindConfigError(f"{name} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class BalloonWindConfig:
    """Client configuration.

    Parameters
    ----------
    snapshot_base_url : str
        Base URL of the hourly constellation snapshots. Hour ``h`` is
        fetched from ``{snapshot_base_url}{h:02d}.json``.
    wind_base_url : str
        Forecast endpoint queried for modeled wind at a pressure level.
    hours_history : int
        Number of hourly snapshots in the backward-looking window.
    active_max_offset : int
        A track is active when it has a point at this hour offset or newer.
    min_elapsed_hours : float
        Floor applied to the elapsed time between the two most recent points
        of a track when estimating speed.
    request_timeout : float
        Total timeout in seconds for a single HTTP request. A timed-out
        request degrades like any other transport failure.
    wind_cache_enabled : bool
        Deduplicate wind lookups per ``(lat, lon, level)`` inside one pass.
    wind_concurrency : int
        Maximum number of wind requests in flight. ``0`` disables the limit.
    """

    snapshot_base_url: str = SNAPSHOT_BASE_URL
    wind_base_url: str = WIND_BASE_URL
    hours_history: int = HOURS_HISTORY
    active_max_offset: int = ACTIVE_MAX_OFFSET
    min_elapsed_hours: float = MIN_ELAPSED_HOURS
    request_timeout: float = 10.0
    wind_cache_enabled: bool = True
    wind_concurrency: int = 16

    @classmethod
    def from_env(cls, **overrides: Any) -> BalloonWindConfig:
        """Create configuration from environment variables.

        Reads the optional ``BALLOONWIND_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        BalloonWindConfig
            Populated configuration.

        Raises
        ------
        BalloonWindConfigError
            When a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "BALLOONWIND_SNAPSHOT_BASE_URL": "snapshot_base_url",
            "BALLOONWIND_WIND_BASE_URL": "wind_base_url",
        }
        _ENV_NUMBER_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "BALLOONWIND_HOURS_HISTORY": ("hours_history", int),
            "BALLOONWIND_ACTIVE_MAX_OFFSET": ("active_max_offset", int),
            "BALLOONWIND_MIN_ELAPSED_HOURS": ("min_elapsed_hours", float),
            "BALLOONWIND_REQUEST_TIMEOUT": ("request_timeout", float),
            "BALLOONWIND_WIND_CONCURRENCY": ("wind_concurrency", int),
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, (field_name, convert) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, convert)

        if "wind_cache_enabled" not in overrides:
            config_kwargs["wind_cache_enabled"] = _env_bool(env.get("BALLOONWIND_WIND_CACHE_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
