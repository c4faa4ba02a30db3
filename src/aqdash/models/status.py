"""Device health model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, Field

from aqdash.models._base import AqBaseModel


class ReaderState(StrEnum):
    """Self-reported state of the remote sensor reader.

    Values are the wire strings of ``reader_status``. Unlike lenient
    telemetry enums there is no fallback member: an unrecognized string is
    a decode failure.
    """

    IDLE = "IDLE"
    READING = "READING"
    FAILING = "ERRORING"


class DeviceStatus(AqBaseModel):
    """Remote device health.

    ``last_exception`` is only populated while the device is failing or has
    recently failed.
    """

    state: ReaderState = Field(validation_alias=AliasChoices("reader_status", "state"))
    last_exception: str | None = Field(
        default=None,
        validation_alias=AliasChoices("reader_exception", "last_exception"),
    )


IDLE_STATUS = DeviceStatus(state=ReaderState.IDLE)
"""Status assumed before the first status fetch settles."""
