"""Fetch failure records and their user-facing text.

Exceptions raised by the client are folded into :class:`FetchFailure`
records at the orchestrator boundary so that events stay plain, frozen
data. :func:`failure_message` is the only place user-facing error text for
the transport and decoder is produced.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from aqdash.exceptions import (
    AqDashBadStatusError,
    AqDashBadUrlError,
    AqDashDecodeError,
    AqDashError,
    AqDashNetworkError,
    AqDashTimeoutError,
    AqDashTransportError,
)


class FailureKind(StrEnum):
    BAD_URL = "bad_url"
    TIMEOUT = "timeout"
    NETWORK = "network"
    BAD_STATUS = "bad_status"
    DECODE = "decode"
    UNKNOWN = "unknown"


class FetchFailure(BaseModel):
    """Why a single fetch attempt failed."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    url: str = ""
    status_code: int | None = None
    detail: str = ""

    @classmethod
    def from_error(cls, exc: AqDashError) -> FetchFailure:
        """Classify a client exception."""
        url = exc.url if isinstance(exc, AqDashTransportError) else ""
        if isinstance(exc, AqDashBadUrlError):
            return cls(kind=FailureKind.BAD_URL, url=url, detail=str(exc))
        if isinstance(exc, AqDashTimeoutError):
            return cls(kind=FailureKind.TIMEOUT, url=url, detail=str(exc))
        if isinstance(exc, AqDashNetworkError):
            return cls(kind=FailureKind.NETWORK, url=url, detail=str(exc))
        if isinstance(exc, AqDashBadStatusError):
            return cls(kind=FailureKind.BAD_STATUS, url=url, status_code=exc.status_code, detail=str(exc))
        if isinstance(exc, AqDashDecodeError):
            return cls(kind=FailureKind.DECODE, url=exc.endpoint, detail=exc.diagnostic)
        return cls(kind=FailureKind.UNKNOWN, url=url, detail=str(exc))


_STATUS_MESSAGES: dict[int, str] = {
    500: "The server had a problem, try again later",
    400: "Verify your information and try again",
}


def failure_message(failure: FetchFailure) -> str:
    """Map a failure to the text shown in the error banner.

    Decode failures surface the decoder's diagnostic verbatim.
    """
    if failure.kind == FailureKind.BAD_URL:
        return f"The URL {failure.url} was invalid"
    if failure.kind == FailureKind.TIMEOUT:
        return "Unable to reach the server, try again"
    if failure.kind == FailureKind.NETWORK:
        return "Unable to reach the server, check your network connection"
    if failure.kind == FailureKind.BAD_STATUS and failure.status_code is not None:
        return _STATUS_MESSAGES.get(failure.status_code, "Unknown error")
    if failure.kind == FailureKind.DECODE:
        return failure.detail
    return "Unknown error"
