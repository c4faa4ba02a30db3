"""Client configuration for aqdash."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from aqdash.exceptions import AqDashConfigError
from aqdash.models.window import WindowDuration


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise AqDashConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class DashboardConfig:
    """Client and polling configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the sensor service, without a trailing ``/api``.
    readings_interval : float
        Seconds between periodic readings fetches.
    status_interval : float
        Seconds between periodic device status fetches.
    request_timeout : float
        Total seconds a single request may take before it is reported as
        a timeout.
    initial_window : WindowDuration
        Aggregation window selected at startup.
    discard_stale_readings : bool
        Drop readings responses issued before the latest window change.
        Off by default: the last response to settle wins.
    """

    base_url: str = "http://localhost:8000"
    readings_interval: float = 5.0
    status_interval: float = 5.0
    request_timeout: float = 10.0
    initial_window: WindowDuration = WindowDuration.ALL
    discard_stale_readings: bool = False

    def __post_init__(self) -> None:
        for name in ("readings_interval", "status_interval", "request_timeout"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise AqDashConfigError(f"{name} must be a positive finite number, got {value!r}")
        if not isinstance(self.initial_window, WindowDuration):
            try:
                object.__setattr__(self, "initial_window", WindowDuration(str(self.initial_window).lower()))
            except ValueError as exc:
                raise AqDashConfigError(f"Unknown window: {self.initial_window!r}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> DashboardConfig:
        """Create configuration from environment variables.

        Reads optional ``AQDASH_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        DashboardConfig
            Populated configuration.

        Raises
        ------
        AqDashConfigError
            If a variable holds an unparseable or out-of-range value.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("AQDASH_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        _ENV_FLOAT_MAP = {
            "AQDASH_READINGS_INTERVAL": "readings_interval",
            "AQDASH_STATUS_INTERVAL": "status_interval",
            "AQDASH_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        window_env = env.get("AQDASH_INITIAL_WINDOW")
        if window_env is not None and "initial_window" not in overrides:
            config_kwargs["initial_window"] = window_env

        if "discard_stale_readings" not in overrides:
            config_kwargs["discard_stale_readings"] = _env_bool(
                env.get("AQDASH_DISCARD_STALE_READINGS"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
