"""Particulate-matter reading model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from aqdash.models._base import AqBaseModel


class Reading(AqBaseModel):
    """One sample reported by the sensor service.

    Parameters
    ----------
    time : float
        Sample timestamp as reported by the server (wire key ``t``).
    epa : float
        EPA air quality index.
    pm25 : float
        PM2.5 concentration.
    pm10 : float
        PM10 concentration.
    """

    time: float = Field(validation_alias=AliasChoices("t", "time"))
    epa: float
    pm25: float
    pm10: float


ReadingSeries = tuple[Reading, ...]
"""Readings in server-reported chronological order. May be empty."""

ZERO_READING = Reading(time=0.0, epa=0.0, pm25=0.0, pm10=0.0)
"""Placeholder shown as the latest reading while no data is loaded."""


def latest_of(series: ReadingSeries) -> Reading:
    """Return the last reading of *series*, or :data:`ZERO_READING` if empty."""
    if not series:
        return ZERO_READING
    return series[-1]
