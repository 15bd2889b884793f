"""Base model for balloonwind payloads and results.

Every model inherits from :class:`BalloonWindModel` which provides:

* frozen instances, so results handed to the presentation layer are
  read-only and re-analysis always produces fresh objects.
* ``populate_by_name`` so wire aliases (``latitude``, ``lng``, ...) and
  field names both work.
* A ``model_validator(mode="before")`` that drops placeholder values
  (``None``, ``""``, ``"--"``, NaN) so the field default is used.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

# Placeholder strings upstream feeds use for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan", "null"})


class BalloonWindModel(BaseModel):
    """Base for balloonwind models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_placeholder_values(cls, values: Any) -> Any:
        """Strip placeholder values so field defaults apply."""
        if not isinstance(values, dict):
            return values
        return BalloonWindModel._clean_dict(values)
