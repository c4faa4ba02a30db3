from __future__ import annotations

import pytest

from aqdash.config import DashboardConfig
from aqdash.exceptions import AqDashConfigError
from aqdash.models import WindowDuration

_ENV_KEYS = (
    "AQDASH_BASE_URL",
    "AQDASH_READINGS_INTERVAL",
    "AQDASH_STATUS_INTERVAL",
    "AQDASH_REQUEST_TIMEOUT",
    "AQDASH_INITIAL_WINDOW",
    "AQDASH_DISCARD_STALE_READINGS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = DashboardConfig()
    assert config.base_url == "http://localhost:8000"
    assert config.readings_interval == 5.0
    assert config.status_interval == 5.0
    assert config.initial_window == WindowDuration.ALL
    assert config.discard_stale_readings is False


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AQDASH_BASE_URL", "http://sensor.local:8080")
    monkeypatch.setenv("AQDASH_READINGS_INTERVAL", "2.5")
    monkeypatch.setenv("AQDASH_STATUS_INTERVAL", "10")
    monkeypatch.setenv("AQDASH_REQUEST_TIMEOUT", "3")
    monkeypatch.setenv("AQDASH_INITIAL_WINDOW", "Day")
    monkeypatch.setenv("AQDASH_DISCARD_STALE_READINGS", "yes")

    config = DashboardConfig.from_env()

    assert config.base_url == "http://sensor.local:8080"
    assert config.readings_interval == 2.5
    assert config.status_interval == 10.0
    assert config.request_timeout == 3.0
    assert config.initial_window == WindowDuration.DAY
    assert config.discard_stale_readings is True


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AQDASH_READINGS_INTERVAL", "2.5")
    monkeypatch.setenv("AQDASH_DISCARD_STALE_READINGS", "1")

    config = DashboardConfig.from_env(readings_interval=1.0, discard_stale_readings=False)

    assert config.readings_interval == 1.0
    assert config.discard_stale_readings is False


def test_unparseable_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AQDASH_STATUS_INTERVAL", "often")
    with pytest.raises(AqDashConfigError, match="AQDASH_STATUS_INTERVAL"):
        DashboardConfig.from_env()


def test_unknown_window(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AQDASH_INITIAL_WINDOW", "month")
    with pytest.raises(AqDashConfigError):
        DashboardConfig.from_env()


@pytest.mark.parametrize("field", ["readings_interval", "status_interval", "request_timeout"])
def test_non_positive_durations_rejected(field: str) -> None:
    with pytest.raises(AqDashConfigError):
        DashboardConfig(**{field: 0})


@pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
def test_non_finite_intervals_rejected(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("AQDASH_READINGS_INTERVAL", value)
    with pytest.raises(AqDashConfigError, match="readings_interval"):
        DashboardConfig.from_env()
