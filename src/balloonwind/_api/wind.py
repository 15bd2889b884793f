"""Wind model adapter.

Selects the pressure level for a balloon's altitude, builds the forecast
query, and turns the response into a :class:`WindSample`. Transport and
payload failures are absorbed here and reported as a :class:`WindLookup`
without a sample.

Endpoint:
  - {wind_base_url}?latitude=..&longitude=..&hourly=wind_speed_<level>,wind_direction_<level>
"""

from __future__ import annotations

import logging
from typing import Any

from balloonwind._constants import (
    JET_STREAM_ALTITUDE_M,
    KILOMETRE_ALTITUDE_LIMIT,
    MID_TROPOSPHERE_ALTITUDE_M,
)
from balloonwind._transport import Transport
from balloonwind.config import BalloonWindConfig
from balloonwind.exceptions import BalloonWindPayloadError, BalloonWindTransportError
from balloonwind.ingestion.normalize import finite_float
from balloonwind.models.wind import LookupStatus, PressureLevel, WindLookup, WindQuery, WindSample

_logger = logging.getLogger(__name__)


def normalize_altitude_m(altitude: float | None) -> float | None:
    """Return *altitude* in metres.

    Values with magnitude below 100 are taken to be kilometres.
    """
    if altitude is None:
        return None
    if abs(altitude) < KILOMETRE_ALTITUDE_LIMIT:
        return altitude * 1000.0
    return altitude


def select_pressure_level(altitude_m: float | None) -> PressureLevel:
    """Map a normalized altitude (metres) to a pressure level.

    Thresholds are strict: exactly 11000 m is 500 hPa, exactly 5000 m is
    surface. Unknown altitude falls back to surface.
    """
    if altitude_m is None:
        return PressureLevel.SURFACE
    if altitude_m > JET_STREAM_ALTITUDE_M:
        return PressureLevel.HPA_200
    if altitude_m > MID_TROPOSPHERE_ALTITUDE_M:
        return PressureLevel.HPA_500
    return PressureLevel.SURFACE


def build_wind_query(latitude: float, longitude: float, altitude: float | None) -> WindQuery:
    """Build the wind query for a position and a raw (unnormalized) altitude."""
    altitude_m = normalize_altitude_m(altitude)
    return WindQuery(
        latitude=latitude,
        longitude=longitude,
        altitude_m=altitude_m,
        level=select_pressure_level(altitude_m),
    )


def _first_value(payload: dict[str, Any], variable: str) -> Any:
    """First element of the series named *variable* (``hourly`` block first)."""
    for container in (payload.get("hourly"), payload):
        if not isinstance(container, dict) or variable not in container:
            continue
        series = container[variable]
        if isinstance(series, list):
            return series[0] if series else None
        return series
    return None


def parse_wind_response(payload: Any, level: PressureLevel) -> WindSample:
    """Extract the current wind at *level* from a forecast response.

    Raises
    ------
    BalloonWindPayloadError
        When the speed series is missing, empty or not a non-negative number.
    """
    if not isinstance(payload, dict):
        raise BalloonWindPayloadError(f"expected a JSON object, got {type(payload).__name__}")

    speed = finite_float(_first_value(payload, level.speed_variable))
    if speed is None or speed < 0:
        raise BalloonWindPayloadError(f"no usable {level.speed_variable} value")

    direction = finite_float(_first_value(payload, level.direction_variable))
    return WindSample(speed_kmh=speed, direction_deg=direction)


async def fetch_wind_lookup(
    transport: Transport,
    config: BalloonWindConfig,
    entity_id: str,
    query: WindQuery,
) -> WindLookup:
    """Query the wind model for one entity. Never raises for expected failures."""
    try:
        payload = await transport.get_json(config.wind_base_url, query.params())
    except BalloonWindTransportError as exc:
        _logger.warning("Wind lookup for %s failed: %s", entity_id, exc)
        return WindLookup(entity_id=entity_id, query=query, status=LookupStatus.TRANSPORT_ERROR, error=str(exc))

    try:
        sample = parse_wind_response(payload, query.level)
    except BalloonWindPayloadError as exc:
        _logger.warning("Wind lookup for %s returned a malformed payload: %s", entity_id, exc)
        return WindLookup(entity_id=entity_id, query=query, status=LookupStatus.MALFORMED, error=str(exc))

    return WindLookup(entity_id=entity_id, query=query, status=LookupStatus.OK, sample=sample)
