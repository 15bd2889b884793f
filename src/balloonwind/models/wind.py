"""Wind model queries, samples and lookup results."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from balloonwind.models._base import BalloonWindModel


class PressureLevel(StrEnum):
    """Atmospheric layer used to pick the modeled wind variable."""

    SURFACE = "10m"
    HPA_500 = "500hPa"
    HPA_200 = "200hPa"

    @property
    def speed_variable(self) -> str:
        return f"wind_speed_{self.value}"

    @property
    def direction_variable(self) -> str:
        return f"wind_direction_{self.value}"

    @property
    def label(self) -> str:
        if self is PressureLevel.SURFACE:
            return "10 m"
        return self.value.replace("hPa", " hPa")


class WindQuery(BalloonWindModel):
    """One wind-model request for a position at a pressure level.

    ``altitude_m`` is the normalized altitude the level was selected from, or
    ``None`` when the point carried no altitude.
    """

    latitude: float
    longitude: float
    altitude_m: float | None = None
    level: PressureLevel

    @property
    def cache_key(self) -> tuple[float, float, PressureLevel]:
        return (self.latitude, self.longitude, self.level)

    def params(self) -> dict[str, Any]:
        """Query-string parameters for the forecast endpoint."""
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "hourly": f"{self.level.speed_variable},{self.level.direction_variable}",
            "wind_speed_unit": "kmh",
            "forecast_days": 1,
            "timezone": "UTC",
        }


class WindSample(BalloonWindModel):
    """Modeled wind at the queried instant. Never a time series."""

    speed_kmh: float
    direction_deg: float | None = None


class LookupStatus(StrEnum):
    OK = "ok"
    TRANSPORT_ERROR = "transport_error"
    MALFORMED = "malformed"


class WindLookup(BalloonWindModel):
    """Outcome of a wind lookup for one entity.

    ``sample`` is set if and only if ``status`` is :attr:`LookupStatus.OK`.
    """

    entity_id: str
    query: WindQuery
    status: LookupStatus
    sample: WindSample | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK and self.sample is not None
