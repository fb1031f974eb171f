#!/usr/bin/env python3
"""End-to-end smoke test replaying an instrumented activity lifecycle."""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Sequence

from core.config import HookSettings
from core.logging import configure_logging
from bytelego.hooks import HookKind
from bytelego.instrument import instrument
from bytelego.session import HookSession


class SmokeTestError(RuntimeError):
    """Base error for e2e smoke test failures."""


@dataclass
class SmokeResult:
    lines: List[str] = field(default_factory=list)
    clicks: int = 0
    accepted_clicks: int = 0
    suppressed_clicks: int = 0


class DemoActivity:
    """Activity with timed lifecycle methods and a debounced click handler."""

    def __init__(self, session: HookSession, work_ms: float) -> None:
        self._session = session
        self._work_s = max(0.0, work_ms) / 1000.0
        self.accepted = 0
        self.suppressed = 0
        self.on_create = instrument(session, HookKind.CREATE_TIMING)(self.on_create)
        self.on_destroy = instrument(session, HookKind.ACTIVITY_TIMING)(self.on_destroy)

    def on_create(self) -> None:
        time.sleep(self._work_s)

    def on_click(self) -> None:
        if self._session.is_fast_double_click():
            self.suppressed += 1
            return
        self.accepted += 1

    def on_destroy(self) -> None:
        time.sleep(self._work_s)


def run(args: argparse.Namespace) -> SmokeResult:
    result = SmokeResult()
    settings = HookSettings(
        debounce_interval_ms=max(0, int(args.interval_ms)),
        echo_reports=False,
    )
    session = HookSession(settings=settings, sink=result.lines.append)
    activity = DemoActivity(session, work_ms=float(args.work_ms))

    activity.on_create()
    for index in range(max(0, int(args.clicks))):
        if index:
            time.sleep(max(0.0, float(args.click_gap_ms)) / 1000.0)
        activity.on_click()
        result.clicks += 1
    activity.on_destroy()

    result.accepted_clicks = activity.accepted
    result.suppressed_clicks = activity.suppressed
    if not result.lines:
        raise SmokeTestError("No timing reports were produced")
    return result


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--clicks",
        type=int,
        default=3,
        help="Number of clicks to simulate (default: 3)",
    )
    parser.add_argument(
        "--click-gap-ms",
        type=float,
        default=100.0,
        help="Delay between simulated clicks in milliseconds (default: 100)",
    )
    parser.add_argument(
        "--interval-ms",
        type=int,
        default=HookSettings().debounce_interval_ms,
        help="Anti-shake interval in milliseconds (default: 500)",
    )
    parser.add_argument(
        "--work-ms",
        type=float,
        default=20.0,
        help="Simulated work inside each lifecycle method (default: 20)",
    )
    parser.add_argument(
        "--log-level",
        default=HookSettings.from_env().log_level,
        help="Logging level (default: BYTELEGO_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(list(argv if argv is not None else sys.argv[1:]))
    configure_logging(args.log_level)
    try:
        result = run(args)
    except SmokeTestError as exc:
        print(f"[fatal] {exc}")
        return 1
    except KeyboardInterrupt:
        print("[fatal] Interrupted")
        return 130
    for line in result.lines:
        print(f"[report] {line}")
    print(json.dumps(asdict(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
