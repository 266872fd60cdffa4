from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pytest

from borgman.core.errors import CommandFailure
from borgman.core.executor import CommandResult
from borgman.core.run_config import RunConfig


class FixedClock:
    def __init__(self) -> None:
        self._timestamp = "20260216-010203"
        self._iso = "2026-02-16T01:02:03Z"
        self._epoch = 1771203723
        self._ticks = 0

    def now_iso(self) -> str:
        return self._iso

    def timestamp(self) -> str:
        return self._timestamp

    def epoch_seconds(self) -> int:
        return self._epoch

    def monotonic(self) -> float:
        value = 100.0 + 2.5 * self._ticks
        self._ticks += 1
        return value


class RecordingExecutor:
    """Records every command; fails the subcommands listed in `failures`."""

    def __init__(
        self,
        failures: dict[str, int] | None = None,
        stderr: str = "stage stderr\n",
    ) -> None:
        self.failures = failures or {}
        self.stderr = stderr
        self.calls: list[list[str]] = []

    def execute(self, program: str, args: Iterable[str]) -> CommandResult:
        cmd = [program, *args]
        self.calls.append(cmd)
        subcommand = cmd[1] if len(cmd) > 1 else ""
        if subcommand in self.failures:
            raise CommandFailure(cmd, self.failures[subcommand], "", self.stderr)
        return CommandResult(cmd, stdout=f"{subcommand} stdout\n")


class MetricsRecorder:
    def __init__(self) -> None:
        self.pushes: list[tuple[bool, int, float]] = []

    def push_outcome(
        self,
        succeeded: bool,
        timestamp_seconds: int,
        duration_seconds: float,
    ) -> None:
        self.pushes.append((succeeded, timestamp_seconds, duration_seconds))


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def sample_config(tmp_path: Path) -> RunConfig:
    documents = tmp_path / "documents"
    documents.mkdir(parents=True, exist_ok=True)
    (documents / "note.txt").write_text("first", encoding="utf-8")
    single_file = tmp_path / "settings.conf"
    single_file.write_text("key=value\n", encoding="utf-8")

    return RunConfig(
        inputs=(str(documents), str(single_file)),
        repo_path=str(tmp_path / "borg-repo"),
        sync_dest="remote:backups/borg",
        excludes=(),
        keep_daily=1,
        keep_weekly=1,
        keep_monthly=1,
    )
