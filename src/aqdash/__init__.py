"""aqdash - Async polling client and view-model core for an air-quality dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("aqdash")
except PackageNotFoundError:
    __version__ = "0+local"
from aqdash.client import AirQualityClient
from aqdash.config import DashboardConfig
from aqdash.exceptions import (
    AqDashBadStatusError,
    AqDashBadUrlError,
    AqDashConfigError,
    AqDashDecodeError,
    AqDashError,
    AqDashNetworkError,
    AqDashTimeoutError,
    AqDashTransportError,
)
from aqdash.models import (
    ZERO_READING,
    DeviceStatus,
    Reading,
    ReadingSeries,
    ReaderState,
    WindowDuration,
)
from aqdash.orchestrator import PollingOrchestrator
from aqdash.state.events import (
    Channel,
    FetchReadings,
    FetchStatus,
    HoverChanged,
    ReadingsFetched,
    StatusFetched,
    TimerFired,
    WindowChanged,
)
from aqdash.state.failures import FailureKind, FetchFailure, failure_message
from aqdash.state.reconciler import reconcile
from aqdash.state.store import ViewModelStore
from aqdash.state.view_model import ErrorSlot, ViewModel

__all__ = [
    "__version__",
    "AirQualityClient",
    "AqDashBadStatusError",
    "AqDashBadUrlError",
    "AqDashConfigError",
    "AqDashDecodeError",
    "AqDashError",
    "AqDashNetworkError",
    "AqDashTimeoutError",
    "AqDashTransportError",
    "Channel",
    "DashboardConfig",
    "DeviceStatus",
    "ErrorSlot",
    "FailureKind",
    "FetchFailure",
    "FetchReadings",
    "FetchStatus",
    "HoverChanged",
    "PollingOrchestrator",
    "Reading",
    "ReadingSeries",
    "ReaderState",
    "ReadingsFetched",
    "StatusFetched",
    "TimerFired",
    "ViewModel",
    "ViewModelStore",
    "WindowChanged",
    "WindowDuration",
    "ZERO_READING",
    "failure_message",
    "reconcile",
]
