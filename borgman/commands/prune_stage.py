from __future__ import annotations

from ..core.executor import CommandResult
from .create_stage import ARCHIVE_PREFIX
from .stage import Stage


class PruneStage(Stage):
    name = "prune"

    @property
    def program(self) -> str:
        return self._config.borg_bin

    def run(self) -> CommandResult:
        self._log.info(
            "Policy: "
            f"daily={self._config.keep_daily} "
            f"weekly={self._config.keep_weekly} "
            f"monthly={self._config.keep_monthly}"
        )
        return super().run()

    def build_args(self) -> list[str]:
        return [
            "prune",
            "--verbose",
            "--list",
            "--glob-archives",
            f"{ARCHIVE_PREFIX}*",
            "--keep-daily",
            str(self._config.keep_daily),
            "--keep-weekly",
            str(self._config.keep_weekly),
            "--keep-monthly",
            str(self._config.keep_monthly),
            self._config.repo_path,
        ]
