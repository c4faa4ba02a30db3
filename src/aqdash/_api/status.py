"""Device status endpoint.

Endpoint:
  - GET /api/status
"""

from __future__ import annotations

from pydantic import TypeAdapter

from aqdash._api._common import decode_payload
from aqdash._transport import Transport
from aqdash.models.status import DeviceStatus

ENDPOINT = "/api/status"

_STATUS_ADAPTER: TypeAdapter[DeviceStatus] = TypeAdapter(DeviceStatus)


def decode_status(body: str | bytes) -> DeviceStatus:
    """Decode a ``{reader_status, reader_exception}`` object.

    Unknown ``reader_status`` strings fail decoding.
    """
    return decode_payload(endpoint=ENDPOINT, body=body, adapter=_STATUS_ADAPTER)


async def fetch_status(transport: Transport) -> DeviceStatus:
    """Fetch the current device status."""
    body = await transport.get_body(ENDPOINT)
    return decode_status(body)
