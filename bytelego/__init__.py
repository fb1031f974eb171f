"""Method timing and anti-shake hooks called at instrumented method boundaries."""

from .hooks import (
    CallSite,
    HookContext,
    HookKind,
    TimingReport,
    on_method_enter,
    on_method_exit,
)
from .instrument import instrument
from .session import HookSession
from .utils.anti_shake import AntiShake, DebounceState, check_fast_double_click

__all__ = [
    "AntiShake",
    "CallSite",
    "DebounceState",
    "HookContext",
    "HookKind",
    "HookSession",
    "TimingReport",
    "check_fast_double_click",
    "instrument",
    "on_method_enter",
    "on_method_exit",
]
