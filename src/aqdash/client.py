"""High-level async client for the air-quality sensor service."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from aqdash._api.sensor_data import fetch_readings
from aqdash._api.status import fetch_status
from aqdash._transport import HttpTransport, Transport
from aqdash.config import DashboardConfig
from aqdash.exceptions import AqDashError
from aqdash.models.reading import ReadingSeries
from aqdash.models.status import DeviceStatus
from aqdash.models.window import WindowDuration

_logger = logging.getLogger(__name__)


class AirQualityClient:
    """Async client for the sensor service API.

    Usage::

        async with AirQualityClient(config) as client:
            readings = await client.get_readings(WindowDuration.DAY)
            status = await client.get_status()
    """

    def __init__(
        self,
        config: DashboardConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport

    @property
    def config(self) -> DashboardConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AirQualityClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        _logger.debug("Client opened for %s", self._config.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None
        _logger.debug("Client closed for %s", self._config.base_url)

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise AqDashError("Client not initialized. Use 'async with AirQualityClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_readings(self, window: WindowDuration) -> ReadingSeries:
        """Fetch the reading series aggregated over *window*."""
        return await fetch_readings(self._require_transport(), window)

    async def get_status(self) -> DeviceStatus:
        """Fetch the device's self-reported health."""
        return await fetch_status(self._require_transport())
