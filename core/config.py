"""Central configuration helpers for the method hooks."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from .logging import get_logger

__all__ = [
    "HookSettings",
    "DEFAULT_DEBOUNCE_INTERVAL_MS",
    "DEFAULT_CREATE_LABEL",
    "DEFAULT_ACTIVITY_LABEL",
    "HOOK_SETTINGS",
]


log = get_logger("core.config")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _coerce_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        log.warning("Invalid integer setting %r; using %d", value, default)
        return default


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    cleaned = value.strip().lower()
    if cleaned in _TRUE_VALUES:
        return True
    if cleaned in _FALSE_VALUES:
        return False
    if cleaned:
        log.warning("Invalid boolean setting %r; using %s", value, default)
    return default


def _coerce_label(value: str | None, default: str) -> str:
    if not value:
        return default
    cleaned = value.strip()
    return cleaned or default


DEFAULT_DEBOUNCE_INTERVAL_MS = 500
"""Minimum gap between two accepted clicks."""

DEFAULT_CREATE_LABEL = "create timing"
DEFAULT_ACTIVITY_LABEL = "activity method timing"


@dataclass(frozen=True)
class HookSettings:
    """Tunable parameters shared by hook sessions."""

    debounce_interval_ms: int = DEFAULT_DEBOUNCE_INTERVAL_MS
    create_label: str = DEFAULT_CREATE_LABEL
    activity_label: str = DEFAULT_ACTIVITY_LABEL
    echo_reports: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "HookSettings":
        env = os.environ if environ is None else environ
        interval = _coerce_int(
            env.get("BYTELEGO_DEBOUNCE_INTERVAL_MS"), DEFAULT_DEBOUNCE_INTERVAL_MS
        )
        return cls(
            debounce_interval_ms=max(0, interval),
            create_label=_coerce_label(env.get("BYTELEGO_CREATE_LABEL"), DEFAULT_CREATE_LABEL),
            activity_label=_coerce_label(
                env.get("BYTELEGO_ACTIVITY_LABEL"), DEFAULT_ACTIVITY_LABEL
            ),
            echo_reports=_coerce_bool(env.get("BYTELEGO_ECHO_REPORTS"), True),
            log_level=_coerce_label(env.get("BYTELEGO_LOG_LEVEL"), "INFO").upper(),
        )


HOOK_SETTINGS = HookSettings.from_env()
"""Settings resolved from the process environment at import time."""
