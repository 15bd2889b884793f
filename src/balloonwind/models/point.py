"""Point records and the two wire shapes they are decoded from.

Snapshots carry points either as positional triples ``[lat, lon, alt]`` or
as keyed objects ``{"id": ..., "lat": ..., "lon": ..., "alt": ...}``. Both are
decoded once at the parser boundary into a canonical :class:`PointRecord`.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from balloonwind.ingestion.normalize import finite_float, safe_str
from balloonwind.models._base import BalloonWindModel


class PointShape(StrEnum):
    POSITIONAL = "positional"
    KEYED = "keyed"


class PointRecord(BalloonWindModel):
    """A validated position of one entity in one hourly snapshot.

    Parameters
    ----------
    entity_id : str
        Explicit ``id`` from the payload, or the element's index within the
        snapshot array when no id is present. Index-based ids are only a
        stable join key if the upstream array order does not change between
        hours.
    lat : float
        Latitude in degrees, finite and within ``[-90, 90]``.
    lon : float
        Longitude in degrees. Not range-checked.
    alt : float or None
        Altitude as sent (kilometres or metres, see
        :func:`balloonwind._api.wind.normalize_altitude_m`).
    hour_offset : int
        Age of the snapshot in hours, ``0`` is the most recent.
    shape : PointShape
        Wire shape the record was decoded from.
    """

    entity_id: str
    lat: float
    lon: float
    alt: float | None = None
    hour_offset: int
    shape: PointShape = PointShape.KEYED


class KeyedPointPayload(BalloonWindModel):
    """Keyed-object wire shape. Every field is optional at this stage."""

    id: str | None = None
    lat: float | None = Field(default=None, validation_alias=AliasChoices("lat", "latitude"))
    lon: float | None = Field(default=None, validation_alias=AliasChoices("lon", "lng", "longitude"))
    alt: float | None = Field(default=None, validation_alias=AliasChoices("alt", "altitude"))

    @field_validator("lat", "lon", "alt", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return finite_float(value)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str | None:
        return safe_str(value)


class PositionalPointPayload(BalloonWindModel):
    """Positional ``[lat, lon, alt]`` wire shape; ``alt`` may be missing."""

    lat: float | None = None
    lon: float | None = None
    alt: float | None = None

    @field_validator("lat", "lon", "alt", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return finite_float(value)

    @classmethod
    def from_sequence(cls, values: Sequence[Any]) -> PositionalPointPayload:
        names = ("lat", "lon", "alt")
        return cls.model_validate(dict(zip(names, values, strict=False)))
