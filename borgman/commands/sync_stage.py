from __future__ import annotations

from .stage import Stage


class SyncStage(Stage):
    name = "sync"

    @property
    def program(self) -> str:
        return self._config.rclone_bin

    def build_args(self) -> list[str]:
        # `sync` deletes remote files missing locally; `copy` never deletes.
        subcommand = "sync" if self._config.sync_delete else "copy"
        return [
            subcommand,
            "--verbose",
            self._config.repo_path,
            self._config.sync_dest,
        ]
