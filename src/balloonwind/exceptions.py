"""Custom exception hierarchy for balloonwind.

Transport and payload errors are raised inside the fetch/parse layer only.
The snapshot parser and the wind adapter convert them into explicit
"corrupt" / "no sample" markers, so callers of the analysis pass never
see them for expected data-quality failures.
"""

from __future__ import annotations


class BalloonWindError(Exception):
    """Base exception for all balloonwind errors."""


class BalloonWindConfigError(BalloonWindError):
    """Invalid or missing configuration."""


class BalloonWindTransportError(BalloonWindError):
    """HTTP-level failure (network, non-2xx, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class BalloonWindPayloadError(BalloonWindError):
    """Payload decoded but does not have the expected structure."""
