#!/usr/bin/env python3
"""Poll a sensor service and print the dashboard state as it changes.

Usage
-----
::

    export AQDASH_BASE_URL="http://raspberrypi.local:8000"
    python scripts/watch_dashboard.py --window day

Options::

    --base-url URL       Override AQDASH_BASE_URL
    --window WINDOW      Initial aggregation window (all/hour/day/week)
    --cycle-windows N    Switch to the next window every N seconds
    --discard-stale      Drop readings responses for windows already left
    --duration SECONDS   Stop after SECONDS (default: run until Ctrl+C)
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from aqdash import AirQualityClient, DashboardConfig, PollingOrchestrator, ViewModel, WindowDuration  # noqa: E402


def _format_time(value: float | None) -> str:
    if value is None:
        return "-"
    return datetime.fromtimestamp(value, tz=UTC).strftime("%H:%M:%S")


def _summarize(state: ViewModel) -> str:
    latest = state.latest_reading
    status = state.device_status
    parts = [
        f"[{_format_time(state.last_observed_time)}]",
        f"window={state.selected_window.value}",
        f"samples={len(state.all_readings)}",
        f"epa={latest.epa:g} pm2.5={latest.pm25:g} pm10={latest.pm10:g}",
        f"device={status.state.name}",
    ]
    if status.last_exception:
        parts.append(f"({status.last_exception})")
    if state.error_slot.active:
        parts.append(f"!! {state.error_slot.title}: {state.error_slot.message}")
    return " ".join(parts)


async def _cycle_windows(orchestrator: PollingOrchestrator, every: float) -> None:
    windows = list(WindowDuration)
    while True:
        await asyncio.sleep(every)
        current = windows.index(orchestrator.snapshot.selected_window)
        orchestrator.change_window(windows[(current + 1) % len(windows)])


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Watch the air-quality dashboard state in the terminal.",
    )
    parser.add_argument("--base-url", help="Sensor service root URL")
    parser.add_argument("--window", choices=[w.value for w in WindowDuration], help="Initial window")
    parser.add_argument("--cycle-windows", type=float, metavar="N", help="Switch window every N seconds")
    parser.add_argument("--discard-stale", action="store_true", help="Discard responses for abandoned windows")
    parser.add_argument("--duration", type=float, help="Stop after this many seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.window:
        overrides["initial_window"] = WindowDuration(args.window)
    if args.discard_stale:
        overrides["discard_stale_readings"] = True
    config = DashboardConfig.from_env(**overrides)

    async with AirQualityClient(config) as client:
        orchestrator = PollingOrchestrator(client, config)
        orchestrator.store.subscribe(lambda state: print(_summarize(state), flush=True))
        async with orchestrator:
            cycler = None
            if args.cycle_windows:
                cycler = asyncio.create_task(_cycle_windows(orchestrator, args.cycle_windows))
            try:
                if args.duration:
                    await asyncio.sleep(args.duration)
                else:
                    await asyncio.Event().wait()
            finally:
                if cycler is not None:
                    cycler.cancel()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
