"""Aggregation window selectable for the readings feed."""

from __future__ import annotations

from enum import StrEnum


class WindowDuration(StrEnum):
    """Server-side aggregation window.

    The value is the ``window`` query parameter sent to
    ``/api/sensor_data``. Declaration order is display order; there is no
    other ordering between members.
    """

    ALL = "all"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
