"""Data models for sensor service responses."""

from aqdash.models._base import AqBaseModel
from aqdash.models.reading import ZERO_READING, Reading, ReadingSeries, latest_of
from aqdash.models.status import IDLE_STATUS, DeviceStatus, ReaderState
from aqdash.models.window import WindowDuration

__all__ = [
    "AqBaseModel",
    "DeviceStatus",
    "IDLE_STATUS",
    "Reading",
    "ReadingSeries",
    "ReaderState",
    "WindowDuration",
    "ZERO_READING",
    "latest_of",
]
