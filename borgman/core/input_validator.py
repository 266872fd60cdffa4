from __future__ import annotations

import os
import stat
from collections.abc import Sequence
from pathlib import Path

from .errors import InputError


class InputValidator:
    """Refuses to back up missing inputs or empty directories.

    An unmounted source usually shows up as an empty mount point. Archiving it
    and then pruning and syncing would replace good remote data with nothing,
    so every input is checked before any external command runs. The first bad
    input stops the check.
    """

    def validate(self, inputs: Sequence[str | Path]) -> None:
        for raw_path in inputs:
            self._check(str(raw_path))

    def _check(self, path: str) -> None:
        try:
            mode = os.stat(path).st_mode
        except OSError as exc:
            raise InputError(path, "metadata unavailable") from exc

        if not stat.S_ISDIR(mode):
            return

        try:
            with os.scandir(path) as entries:
                has_entry = next(entries, None) is not None
        except OSError as exc:
            raise InputError(path, "directory listing unavailable") from exc

        if not has_entry:
            raise InputError(path, "empty directory")
