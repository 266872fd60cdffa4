from __future__ import annotations

from .stage import Stage

ARCHIVE_PREFIX = "borgman-"


def archive_name(repo_path: str) -> str:
    # borg expands {now} itself when the archive is created.
    return f"{repo_path}::{ARCHIVE_PREFIX}{{now}}"


class CreateStage(Stage):
    name = "create"

    @property
    def program(self) -> str:
        return self._config.borg_bin

    def build_args(self) -> list[str]:
        args = [
            "create",
            "--verbose",
            "--filter",
            "AME",
            "--list",
            "--stats",
            "--compression",
            "lz4",
            "--exclude-caches",
        ]
        for pattern in self._config.excludes:
            args.extend(["--exclude", pattern])
        args.append(archive_name(self._config.repo_path))
        args.extend(self._config.inputs)
        return args
