"""Tests for the command line tools."""

import argparse
import json

import pytest

from bytelego.hooks import HookKind
from bytelego.session import HookSession
from tools import e2e_smoke, hook_overhead


def test_measure_collects_one_sample_per_iteration() -> None:
    samples = hook_overhead.measure(HookKind.CREATE_TIMING, 25)
    assert len(samples) == 25
    assert all(sample >= 0 for sample in samples)


def test_measure_rejects_empty_runs() -> None:
    with pytest.raises(hook_overhead.OverheadComputationError):
        hook_overhead.measure(HookKind.ANTI_SHAKE, 0)


def test_compute_metrics_percentiles() -> None:
    metrics = hook_overhead.compute_metrics(list(range(1, 101)), HookKind.ACTIVITY_TIMING)
    assert metrics["kind"] == "activity_timing"
    assert metrics["samples"] == 100
    assert metrics["mean_ns"] == pytest.approx(50.5)
    assert metrics["median_ns"] == pytest.approx(50.5)
    assert metrics["p95_ns"] == pytest.approx(95.05)
    assert metrics["max_ns"] == 100.0
    json.dumps(metrics)


def test_compute_metrics_requires_samples() -> None:
    with pytest.raises(hook_overhead.OverheadComputationError):
        hook_overhead.compute_metrics([], HookKind.CREATE_TIMING)


def test_smoke_run_suppresses_fast_clicks() -> None:
    args = argparse.Namespace(clicks=3, click_gap_ms=0.0, interval_ms=500, work_ms=0.0)
    result = e2e_smoke.run(args)
    assert result.clicks == 3
    assert result.accepted_clicks == 1
    assert result.suppressed_clicks == 2
    assert len(result.lines) == 2
    assert result.lines[0].startswith("create timing = ")
    assert result.lines[1].startswith("activity method timing = ")


def test_smoke_main_prints_summary(capsys: pytest.CaptureFixture[str]) -> None:
    code = e2e_smoke.main(["--clicks", "2", "--click-gap-ms", "0", "--work-ms", "0", "--interval-ms", "0"])
    assert code == 0
    out = capsys.readouterr().out
    assert "[report] create timing = " in out
    summary = json.loads(out[out.index("{"):])
    assert summary["accepted_clicks"] == 2
    assert summary["suppressed_clicks"] == 0


def test_log_level_default_follows_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    levels = []
    monkeypatch.setenv("BYTELEGO_LOG_LEVEL", "debug")
    monkeypatch.setattr(e2e_smoke, "configure_logging", levels.append)
    code = e2e_smoke.main(["--clicks", "0", "--work-ms", "0"])
    assert code == 0
    assert levels == ["DEBUG"]


def test_log_level_flag_overrides_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BYTELEGO_LOG_LEVEL", "debug")
    monkeypatch.setattr("sys.argv", ["hook_overhead", "--log-level", "ERROR"])
    assert hook_overhead.parse_args().log_level == "ERROR"
    monkeypatch.setattr("sys.argv", ["hook_overhead"])
    assert hook_overhead.parse_args().log_level == "DEBUG"


def test_smoke_main_fails_without_reports(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    class _SilentSession(HookSession):
        def on_method_exit(self, index, site=None):
            return None

    monkeypatch.setattr(e2e_smoke, "HookSession", _SilentSession)
    monkeypatch.setattr(e2e_smoke, "configure_logging", lambda _level: None)
    code = e2e_smoke.main(["--clicks", "1", "--work-ms", "0"])
    assert code == 1
    assert "[fatal] No timing reports were produced" in capsys.readouterr().out
