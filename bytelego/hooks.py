"""Method boundary hooks invoked by the instrumentation host.

The host calls :func:`on_method_enter` and :func:`on_method_exit` with the
integer index of the rule that matched the instrumented method.  Both hooks
are pure with respect to process state: the caller threads a
:class:`HookContext` through them and keeps whatever is returned.

Index ``1`` (:attr:`HookKind.ACTIVITY_TIMING`) has no entry-side capture.  Its
exit report is measured against whatever start timestamp the context carries,
which may have been recorded by an unrelated :attr:`HookKind.CREATE_TIMING`
entry.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Mapping, Optional

from core.clock import now_ms as _now_ms
from core.config import (
    DEFAULT_ACTIVITY_LABEL,
    DEFAULT_CREATE_LABEL,
    DEFAULT_DEBOUNCE_INTERVAL_MS,
)
from bytelego.utils.anti_shake import DebounceState, check_fast_double_click

__all__ = [
    "CallSite",
    "DEFAULT_LABELS",
    "HookContext",
    "HookKind",
    "TimingReport",
    "on_method_enter",
    "on_method_exit",
]


log = logging.getLogger(__name__)


class HookKind(IntEnum):
    """Behaviour selected by the host's configuration index."""

    CREATE_TIMING = 0
    ACTIVITY_TIMING = 1
    ANTI_SHAKE = 2

    @classmethod
    def resolve(cls, index: int) -> Optional["HookKind"]:
        """Map a raw host index to a kind; unknown indices map to ``None``."""

        if isinstance(index, cls):
            return index
        if isinstance(index, bool):
            raise TypeError("hook index must be an int, got bool")
        try:
            value = operator.index(index)
        except TypeError:
            raise TypeError(f"hook index must be an int, got {type(index).__name__}") from None
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_LABELS: Mapping[HookKind, str] = {
    HookKind.CREATE_TIMING: DEFAULT_CREATE_LABEL,
    HookKind.ACTIVITY_TIMING: DEFAULT_ACTIVITY_LABEL,
}


@dataclass(frozen=True)
class CallSite:
    """Instrumented method as described by the host."""

    class_name: str = ""
    method_name: str = ""
    annotation: str = ""

    def describe(self) -> str:
        if self.class_name and self.method_name:
            return f"{self.class_name}.{self.method_name}"
        return self.method_name or self.class_name or "<unknown>"


@dataclass(frozen=True)
class HookContext:
    """Timestamps carried between hook invocations."""

    start_ms: int = 0
    debounce: DebounceState = field(default_factory=DebounceState)


@dataclass(frozen=True)
class TimingReport:
    """Elapsed time measured by an exit hook."""

    kind: HookKind
    label: str
    elapsed_ms: int
    site: Optional[CallSite] = None

    def line(self) -> str:
        return f"{self.label} = {self.elapsed_ms}"


def on_method_enter(
    context: HookContext,
    index: int,
    *,
    now_ms: Optional[int] = None,
    interval_ms: int = DEFAULT_DEBOUNCE_INTERVAL_MS,
    site: Optional[CallSite] = None,
) -> HookContext:
    """Apply the entry behaviour for ``index`` and return the new context."""

    kind = HookKind.resolve(index)
    if kind is HookKind.CREATE_TIMING:
        now = _now_ms() if now_ms is None else int(now_ms)
        log.debug("timing start for %s at %d", _where(site), now)
        return replace(context, start_ms=now)
    if kind is HookKind.ANTI_SHAKE:
        fast, debounce = check_fast_double_click(
            context.debounce, now_ms=now_ms, interval_ms=interval_ms
        )
        log.debug("anti-shake check for %s: fast=%s", _where(site), fast)
        return replace(context, debounce=debounce)
    return context


def on_method_exit(
    context: HookContext,
    index: int,
    *,
    now_ms: Optional[int] = None,
    labels: Optional[Mapping[HookKind, str]] = None,
    site: Optional[CallSite] = None,
) -> Optional[TimingReport]:
    """Return the timing report for ``index``, or ``None`` when it has none."""

    kind = HookKind.resolve(index)
    if kind not in (HookKind.CREATE_TIMING, HookKind.ACTIVITY_TIMING):
        return None

    if kind is HookKind.ACTIVITY_TIMING and context.start_ms == 0:
        log.warning(
            "activity timing exit for %s without a captured start; elapsed is measured from 0",
            _where(site),
        )

    now = _now_ms() if now_ms is None else int(now_ms)
    elapsed = now - context.start_ms
    if elapsed < 0:
        log.debug("wall clock stepped back by %d ms for %s", -elapsed, _where(site))
        elapsed = 0

    label = (labels or DEFAULT_LABELS).get(kind) or DEFAULT_LABELS[kind]
    return TimingReport(kind=kind, label=label, elapsed_ms=elapsed, site=site)


def _where(site: Optional[CallSite]) -> str:
    return site.describe() if site is not None else "<host>"
