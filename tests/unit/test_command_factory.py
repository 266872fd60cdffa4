from __future__ import annotations

import subprocess
from dataclasses import replace
from pathlib import Path

import pytest

from borgman.commands.factory import CommandFactory
from borgman.commands.orchestrator import RunOrchestrator
from borgman.core.executor import DryRunExecutor, SubprocessExecutor
from borgman.core.run_config import RunConfig
from borgman.core.run_log import RunLog
from tests.conftest import FixedClock, MetricsRecorder, RecordingExecutor


def test_create_wires_stages_with_injected_collaborators(
    sample_config: RunConfig,
    fixed_clock: FixedClock,
) -> None:
    executor = RecordingExecutor()
    factory = CommandFactory(clock=fixed_clock, executor_factory=lambda: executor)

    orchestrator = factory.create(sample_config)

    assert isinstance(orchestrator, RunOrchestrator)
    assert orchestrator.run() == 0
    assert [call[1] for call in executor.calls] == ["create", "prune", "copy"]


def test_create_uses_subprocess_executor_by_default(
    sample_config: RunConfig,
    fixed_clock: FixedClock,
) -> None:
    orchestrator = CommandFactory(clock=fixed_clock).create(sample_config)

    assert all(isinstance(stage._executor, SubprocessExecutor) for stage in orchestrator._stages)


def test_create_builds_metrics_sink_when_address_set(
    sample_config: RunConfig,
    fixed_clock: FixedClock,
) -> None:
    observed: dict[str, str] = {}
    recorder = MetricsRecorder()

    def metrics_factory(address: str, log: RunLog) -> MetricsRecorder:
        observed["address"] = address
        return recorder

    config = replace(sample_config, metrics_addr="pushgateway:9091")
    factory = CommandFactory(
        clock=fixed_clock,
        executor_factory=RecordingExecutor,
        metrics_factory=metrics_factory,
    )

    factory.create(config).run()

    assert observed == {"address": "pushgateway:9091"}
    assert recorder.pushes == [(True, 1771203723, 2.5)]


def test_dry_run_spawns_nothing_and_skips_metrics(
    sample_config: RunConfig,
    fixed_clock: FixedClock,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def fail_run(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("subprocess.run must not be called in dry-run mode")

    def fail_metrics(address: str, log: RunLog) -> MetricsRecorder:
        raise AssertionError("metrics must not be pushed in dry-run mode")

    monkeypatch.setattr(subprocess, "run", fail_run)
    config = replace(sample_config, dry_run=True, metrics_addr="pushgateway:9091")
    orchestrator = CommandFactory(clock=fixed_clock, metrics_factory=fail_metrics).create(config)

    assert orchestrator.run() == 0
    assert all(isinstance(stage._executor, DryRunExecutor) for stage in orchestrator._stages)
    out = capsys.readouterr().out
    assert "[dry-run] borg create" in out
    assert "[dry-run] borg prune" in out
    assert "[dry-run] rclone copy" in out


def test_log_dir_names_log_file_after_timestamp(
    sample_config: RunConfig,
    fixed_clock: FixedClock,
    tmp_path: Path,
) -> None:
    config = replace(sample_config, log_dir=tmp_path / "logs")
    factory = CommandFactory(clock=fixed_clock, executor_factory=RecordingExecutor)

    factory.create(config).run()

    log_file = tmp_path / "logs" / "borgman-20260216-010203.log"
    assert log_file.is_file()
    assert "Run completed" in log_file.read_text(encoding="utf-8")
