from __future__ import annotations

from collections.abc import Sequence

from ..core.errors import BorgmanError, format_error_chain
from ..core.protocols import ClockProtocol, InputValidatorProtocol, MetricsSinkProtocol
from ..core.run_config import RunConfig
from ..core.run_log import RunLog
from .base import Command
from .stage import Stage


class RunOrchestrator(Command):
    """Validates the inputs, then runs each stage in order.

    The first error stops the run. When a metrics sink is configured the
    outcome is pushed whether the run succeeded or not.
    """

    def __init__(
        self,
        config: RunConfig,
        validator: InputValidatorProtocol,
        stages: Sequence[Stage],
        log: RunLog,
        clock: ClockProtocol,
        metrics: MetricsSinkProtocol | None = None,
    ) -> None:
        self._config = config
        self._validator = validator
        self._stages = list(stages)
        self._log = log
        self._clock = clock
        self._metrics = metrics

    def run(self) -> int:
        started = self._clock.monotonic()
        succeeded = False
        try:
            with self._log:
                self._run_logged()
            succeeded = True
        finally:
            self._report(succeeded, self._clock.monotonic() - started)
        return 0

    def _run_logged(self) -> None:
        self._log.info(f"Starting borgman run at {self._clock.now_iso()}")
        self._log.info(f"Repo: {self._config.repo_path}")
        if self._config.dry_run:
            self._log.info("Dry run: commands are printed, not executed")

        try:
            self._validator.validate(self._config.inputs)
            for stage in self._stages:
                stage.run()
        except BorgmanError as exc:
            self._log.record(format_error_chain(exc))
            raise

        self._log.info(f"Run completed at {self._clock.now_iso()}")
        if self._log.path is not None:
            self._log.info(f"Log written: {self._log.path}")

    def _report(self, succeeded: bool, duration_seconds: float) -> None:
        if self._metrics is None:
            return
        self._metrics.push_outcome(
            succeeded,
            self._clock.epoch_seconds(),
            duration_seconds,
        )
