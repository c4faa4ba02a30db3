"""Readings endpoint.

Endpoint:
  - GET /api/sensor_data?window={all|hour|day|week}
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter

from aqdash._api._common import decode_payload
from aqdash._transport import Transport
from aqdash.models.reading import Reading, ReadingSeries
from aqdash.models.window import WindowDuration

_logger = logging.getLogger(__name__)

ENDPOINT = "/api/sensor_data"

_SERIES_ADAPTER: TypeAdapter[ReadingSeries] = TypeAdapter(tuple[Reading, ...])


def decode_readings(body: str | bytes) -> ReadingSeries:
    """Decode a JSON array of ``{t, epa, pm25, pm10}`` objects."""
    return decode_payload(endpoint=ENDPOINT, body=body, adapter=_SERIES_ADAPTER)


async def fetch_readings(transport: Transport, window: WindowDuration) -> ReadingSeries:
    """Fetch the full reading series for *window*.

    Raises
    ------
    AqDashTransportError
        If the request fails.
    AqDashDecodeError
        If the body is not a valid reading array.
    """
    body = await transport.get_body(ENDPOINT, {"window": window.value})
    series = decode_readings(body)
    _logger.debug("Fetched %d readings for window=%s", len(series), window)
    return series
