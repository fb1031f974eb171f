"""Stateful hook session for hosts that can only pass an integer index."""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import replace
from typing import Callable, Deque, Dict, Optional, Tuple

from core.config import HOOK_SETTINGS, HookSettings
from bytelego.hooks import (
    CallSite,
    HookContext,
    HookKind,
    TimingReport,
    on_method_enter,
    on_method_exit,
)
from bytelego.utils.anti_shake import check_fast_double_click

__all__ = ["HookSession", "ReportSink", "stdout_sink"]


log = logging.getLogger(__name__)

ReportSink = Callable[[str], None]

REPORT_HISTORY = 256


def stdout_sink(line: str) -> None:
    print(line, flush=True)


class HookSession:
    """Owns a :class:`HookContext` and serialises hook updates."""

    def __init__(
        self,
        settings: Optional[HookSettings] = None,
        sink: Optional[ReportSink] = None,
    ) -> None:
        self._settings = settings or HOOK_SETTINGS
        if sink is None and self._settings.echo_reports:
            sink = stdout_sink
        self._sink = sink
        self._labels: Dict[HookKind, str] = {
            HookKind.CREATE_TIMING: self._settings.create_label,
            HookKind.ACTIVITY_TIMING: self._settings.activity_label,
        }
        self._context = HookContext()
        self._reports: Deque[TimingReport] = deque(maxlen=REPORT_HISTORY)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    @property
    def settings(self) -> HookSettings:
        return self._settings

    @property
    def context(self) -> HookContext:
        with self._lock:
            return self._context

    @property
    def reports(self) -> Tuple[TimingReport, ...]:
        with self._lock:
            return tuple(self._reports)

    # ------------------------------------------------------------------
    def on_method_enter(self, index: int, site: Optional[CallSite] = None) -> None:
        with self._lock:
            self._context = on_method_enter(
                self._context,
                index,
                interval_ms=self._settings.debounce_interval_ms,
                site=site,
            )

    def on_method_exit(
        self, index: int, site: Optional[CallSite] = None
    ) -> Optional[TimingReport]:
        with self._lock:
            report = on_method_exit(self._context, index, labels=self._labels, site=site)
            if report is None:
                return None
            self._reports.append(report)

        log.info(
            "%s (%s)",
            report.line(),
            site.describe() if site is not None else "<host>",
        )
        if self._sink is not None:
            self._sink(report.line())
        return report

    def is_fast_double_click(self) -> bool:
        """Run the anti-shake check directly and return its verdict."""

        with self._lock:
            fast, debounce = check_fast_double_click(
                self._context.debounce,
                interval_ms=self._settings.debounce_interval_ms,
            )
            self._context = replace(self._context, debounce=debounce)
        return fast

    def reset(self) -> None:
        with self._lock:
            self._context = HookContext()
            self._reports.clear()
