"""HTTP transport for snapshot and wind-model requests."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from balloonwind._constants import USER_AGENT
from balloonwind.config import BalloonWindConfig
from balloonwind.exceptions import BalloonWindTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the fetch modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, url: str, params: Mapping[str, Any] | None = None) -> str: ...

    async def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> Any: ...


class HttpTransport:
    """aiohttp-backed transport. Every failure surfaces as :class:`BalloonWindTransportError`."""

    def __init__(
        self,
        config: BalloonWindConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_text(self, url: str, params: Mapping[str, Any] | None = None) -> str:
        """GET *url* and return the body text of a 2xx response."""
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s params=%s", url, dict(params) if params else {})

        try:
            async with self._http.get(url, params=params, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise BalloonWindTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except BalloonWindTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise BalloonWindTransportError(f"Request to {url} failed: {exc}", url=url) from exc
        except TimeoutError as exc:
            raise BalloonWindTransportError(f"Request to {url} timed out", url=url) from exc
        except UnicodeDecodeError as exc:
            raise BalloonWindTransportError(f"Undecodable body from {url}", url=url) from exc

        return text

    async def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET *url* and decode the body as JSON."""
        text = await self.get_text(url, params)
        try:
            return json.loads(text)
        except ValueError as exc:
            raise BalloonWindTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc
