"""Decorator that invokes the session hooks around a function call."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from bytelego.hooks import CallSite
from bytelego.session import HookSession

__all__ = ["instrument", "site_for"]


log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def site_for(func: Callable[..., Any], annotation: str = "") -> CallSite:
    """Describe ``func`` the way the host names instrumented methods."""

    qualname = getattr(func, "__qualname__", getattr(func, "__name__", ""))
    owner, _, method = qualname.rpartition(".")
    module = getattr(func, "__module__", "") or ""
    class_name = ".".join(part for part in (module, owner) if part)
    return CallSite(class_name=class_name, method_name=method, annotation=annotation)


def instrument(
    session: HookSession,
    index: int,
    *,
    site: Optional[CallSite] = None,
) -> Callable[[F], F]:
    """Wrap a function so ``session`` sees its entry and exit.

    The exit hook runs on return and on raise.  When the entry hook fails the
    error is logged and the call is skipped, returning ``None``.  A failing
    exit hook is logged and never masks the wrapped function's own outcome.
    """

    def decorator(func: F) -> F:
        call_site = site or site_for(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                session.on_method_enter(index, call_site)
            except Exception:
                log.exception("entry hook failed for %s", call_site.describe())
                return None
            try:
                return func(*args, **kwargs)
            finally:
                try:
                    session.on_method_exit(index, call_site)
                except Exception:
                    log.exception("exit hook failed for %s", call_site.describe())

        return wrapper  # type: ignore[return-value]

    return decorator
