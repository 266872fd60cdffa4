from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from .executor import CommandResult


class ExecutorProtocol(Protocol):
    def execute(self, program: str, args: Iterable[str]) -> CommandResult:
        ...


class ClockProtocol(Protocol):
    def now_iso(self) -> str:
        ...

    def timestamp(self) -> str:
        ...

    def epoch_seconds(self) -> int:
        ...

    def monotonic(self) -> float:
        ...


class MetricsSinkProtocol(Protocol):
    def push_outcome(
        self,
        succeeded: bool,
        timestamp_seconds: int,
        duration_seconds: float,
    ) -> None:
        ...


class InputValidatorProtocol(Protocol):
    def validate(self, inputs: Sequence[str | Path]) -> None:
        ...
