"""Custom exception hierarchy for aqdash."""

from __future__ import annotations


class AqDashError(Exception):
    """Base exception for all aqdash errors."""


class AqDashConfigError(AqDashError):
    """Invalid or missing configuration."""


class AqDashTransportError(AqDashError):
    """HTTP-level failure (bad URL, timeout, network, non-2xx)."""

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class AqDashBadUrlError(AqDashTransportError):
    """The request URL could not be built or parsed."""


class AqDashTimeoutError(AqDashTransportError):
    """No response arrived within the transport timeout."""


class AqDashNetworkError(AqDashTransportError):
    """Connection to the server could not be established or was dropped."""


class AqDashBadStatusError(AqDashTransportError):
    """Server answered with a non-2xx status code."""

    def __init__(self, message: str, *, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        super().__init__(message, url=url)


class AqDashDecodeError(AqDashError):
    """Response body could not be decoded into the expected records.

    ``diagnostic`` is the decoder's own description of what went wrong and
    is shown to the user verbatim.
    """

    def __init__(self, diagnostic: str, *, endpoint: str = "") -> None:
        self.diagnostic = diagnostic
        self.endpoint = endpoint
        super().__init__(diagnostic)
