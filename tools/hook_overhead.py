#!/usr/bin/env python3
"""Measure the per-call overhead of an enter/exit hook pair."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List

import numpy as np

from core.clock import now_mono_ns
from core.config import HookSettings
from core.logging import configure_logging, get_logger
from bytelego.hooks import HookKind
from bytelego.session import HookSession

ITERATIONS_DEFAULT = 10_000

KIND_CHOICES: Dict[str, HookKind] = {
    "create": HookKind.CREATE_TIMING,
    "activity": HookKind.ACTIVITY_TIMING,
    "anti-shake": HookKind.ANTI_SHAKE,
}

log = get_logger("tools.hook_overhead")


class OverheadComputationError(RuntimeError):
    """Raised when the overhead cannot be computed."""


def _null_sink(_line: str) -> None:
    return None


def measure(kind: HookKind, iterations: int) -> List[int]:
    """Return the duration in nanoseconds of each enter/exit pair."""

    if iterations <= 0:
        raise OverheadComputationError("Need at least one iteration")

    session = HookSession(settings=HookSettings(echo_reports=False), sink=_null_sink)
    samples: List[int] = []
    # per-report INFO lines would flood stderr
    session_log = logging.getLogger("bytelego.session")
    previous_level = session_log.level
    session_log.setLevel(max(session_log.getEffectiveLevel(), logging.WARNING))
    try:
        for _ in range(iterations):
            start = now_mono_ns()
            session.on_method_enter(kind)
            session.on_method_exit(kind)
            samples.append(now_mono_ns() - start)
    finally:
        session_log.setLevel(previous_level)
    return samples


def compute_metrics(samples: List[int], kind: HookKind) -> Dict[str, object]:
    if not samples:
        raise OverheadComputationError("No samples were collected")

    values = np.asarray(samples, dtype=np.float64)
    p50, p95, p99 = np.percentile(values, [50.0, 95.0, 99.0])
    return {
        "kind": kind.name.lower(),
        "samples": int(values.size),
        "mean_ns": float(values.mean()),
        "median_ns": float(p50),
        "p95_ns": float(p95),
        "p99_ns": float(p99),
        "max_ns": float(values.max()),
    }


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--iterations",
        type=int,
        default=ITERATIONS_DEFAULT,
        help="Number of enter/exit pairs to time (default: 10000)",
    )
    parser.add_argument(
        "--kind",
        choices=sorted(KIND_CHOICES),
        default="create",
        help="Hook behaviour to measure (default: create)",
    )
    parser.add_argument(
        "--json",
        type=Path,
        help="Optional path to write the JSON metrics. If omitted, metrics are printed to stdout.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress the human-readable summary output",
    )
    parser.add_argument(
        "--log-level",
        default=HookSettings.from_env().log_level,
        help="Logging level (default: BYTELEGO_LOG_LEVEL or INFO)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)
    kind = KIND_CHOICES[args.kind]

    samples = measure(kind, int(args.iterations))
    metrics = compute_metrics(samples, kind)
    log.debug("collected %d samples for %s", len(samples), kind.name)

    if not args.quiet:
        print("Hook overhead")
        print(f"  Kind: {metrics['kind']}")
        print(f"  Samples: {metrics['samples']}")
        print(f"  Mean: {metrics['mean_ns']:.1f} ns")
        print(f"  Median: {metrics['median_ns']:.1f} ns")
        print(f"  p95: {metrics['p95_ns']:.1f} ns")
        print(f"  p99: {metrics['p99_ns']:.1f} ns")

    json_payload = json.dumps(metrics, indent=2)
    if args.json:
        args.json.write_text(json_payload, encoding="utf-8")
    else:
        print(json_payload)


if __name__ == "__main__":
    try:
        main()
    except OverheadComputationError as exc:
        print(f"Error: {exc}")
        raise SystemExit(1)
    except KeyboardInterrupt:
        raise SystemExit(130)
