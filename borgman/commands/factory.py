from __future__ import annotations

from collections.abc import Callable

from ..core.clock import Clock
from ..core.executor import DryRunExecutor, SubprocessExecutor
from ..core.input_validator import InputValidator
from ..core.metrics import PushgatewayMetricsSink
from ..core.protocols import (
    ClockProtocol,
    ExecutorProtocol,
    InputValidatorProtocol,
    MetricsSinkProtocol,
)
from ..core.run_config import RunConfig
from ..core.run_log import RunLog
from .create_stage import CreateStage
from .orchestrator import RunOrchestrator
from .prune_stage import PruneStage
from .sync_stage import SyncStage


class CommandFactory:
    def __init__(
        self,
        *,
        clock: ClockProtocol | None = None,
        validator: InputValidatorProtocol | None = None,
        executor_factory: Callable[[], ExecutorProtocol] | None = None,
        metrics_factory: Callable[[str, RunLog], MetricsSinkProtocol] | None = None,
    ) -> None:
        self._clock = clock or Clock()
        self._validator = validator or InputValidator()
        self._executor_factory = executor_factory or SubprocessExecutor
        self._metrics_factory = metrics_factory or PushgatewayMetricsSink

    def create(self, config: RunConfig) -> RunOrchestrator:
        log_file = None
        if config.log_dir is not None:
            log_file = config.log_dir / f"borgman-{self._clock.timestamp()}.log"
        log = RunLog(log_file)

        executor: ExecutorProtocol
        metrics: MetricsSinkProtocol | None = None
        if config.dry_run:
            executor = DryRunExecutor(log)
        else:
            executor = self._executor_factory()
            if config.metrics_addr:
                metrics = self._metrics_factory(config.metrics_addr, log)

        stages = [
            CreateStage(config, executor, log, self._clock),
            PruneStage(config, executor, log, self._clock),
            SyncStage(config, executor, log, self._clock),
        ]
        return RunOrchestrator(config, self._validator, stages, log, self._clock, metrics)
