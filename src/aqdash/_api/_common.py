"""Shared helpers for sensor service endpoint modules.

It is internal to aqdash and may change at any time.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from aqdash.exceptions import AqDashDecodeError

T = TypeVar("T")


def decode_payload(*, endpoint: str, body: str | bytes, adapter: TypeAdapter[T]) -> T:
    """Parse and validate a JSON response body.

    Invalid UTF-8, malformed JSON and schema mismatches all surface as
    :class:`AqDashDecodeError` carrying pydantic's diagnostic text.
    """
    try:
        return adapter.validate_json(body)
    except (ValidationError, UnicodeDecodeError) as exc:
        raise AqDashDecodeError(str(exc), endpoint=endpoint) from exc
