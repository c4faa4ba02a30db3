"""HTTP transport that classifies every failure into a typed error."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Protocol

import aiohttp

from aqdash.config import DashboardConfig
from aqdash.exceptions import (
    AqDashBadStatusError,
    AqDashBadUrlError,
    AqDashNetworkError,
    AqDashTimeoutError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    One call issues exactly one request. Implementations return the raw,
    undecoded response bytes or raise an
    :class:`aqdash.exceptions.AqDashTransportError` subclass.
    """

    async def get_body(self, path: str, params: Mapping[str, str] | None = None) -> bytes:
        ...


class HttpTransport:
    """aiohttp-backed transport for the sensor service."""

    def __init__(
        self,
        config: DashboardConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}{path}"

    async def get_body(self, path: str, params: Mapping[str, str] | None = None) -> bytes:
        """GET *path* and return the raw body of a 2xx response.

        The body is not decoded here; character encoding problems surface
        from the decoder, after the status check.

        Raises
        ------
        AqDashBadUrlError
            The URL is malformed.
        AqDashTimeoutError
            No complete response within ``request_timeout``.
        AqDashNetworkError
            Connection refused, reset, DNS failure or a truncated body.
        AqDashBadStatusError
            Any non-2xx status.
        """
        url = self._url(path)
        _logger.debug("GET %s params=%s", url, dict(params or {}))

        try:
            async with self._http.get(url, params=params, timeout=self._timeout) as resp:
                body = await resp.read()
                status = resp.status
        except aiohttp.InvalidURL as exc:
            raise AqDashBadUrlError(f"Invalid URL {url}: {exc}", url=url) from exc
        except asyncio.TimeoutError as exc:
            raise AqDashTimeoutError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise AqDashNetworkError(f"Request to {url} failed: {exc}", url=url) from exc

        if not 200 <= status < 300:
            raise AqDashBadStatusError(
                f"HTTP {status} from {url}: {body[:200].decode('utf-8', errors='replace')}",
                status_code=status,
                url=url,
            )
        return body
