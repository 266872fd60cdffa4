from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.executor import CommandResult
from ..core.protocols import ClockProtocol, ExecutorProtocol
from ..core.run_config import RunConfig
from ..core.run_log import RunLog


class Stage(ABC):
    """One external invocation in a backup run."""

    name: str

    def __init__(
        self,
        config: RunConfig,
        executor: ExecutorProtocol,
        log: RunLog,
        clock: ClockProtocol,
    ) -> None:
        self._config = config
        self._executor = executor
        self._log = log
        self._clock = clock

    @property
    @abstractmethod
    def program(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def build_args(self) -> list[str]:
        raise NotImplementedError

    def run(self) -> CommandResult:
        self._log.info(f"Running {self.name} at {self._clock.now_iso()}")
        result = self._executor.execute(self.program, self.build_args())
        if result.stdout:
            self._log.output(result.stdout)
        if result.stderr:
            self._log.error_output(result.stderr)
        self._log.info(f"{self.name.capitalize()} completed at {self._clock.now_iso()}")
        return result
