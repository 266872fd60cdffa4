from __future__ import annotations

import sys
from pathlib import Path
from types import TracebackType
from typing import TextIO

from .errors import ConfigError


class RunLog:
    """Echoes run progress to the terminal and, optionally, to a log file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._handle: TextIO | None = None

    def __enter__(self) -> RunLog:
        if self.path is not None and self._handle is None:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._handle = self.path.open("w", encoding="utf-8")
            except OSError as exc:
                raise ConfigError(
                    "--log-dir", f"cannot open log file {self.path}: {exc.strerror or exc}"
                ) from exc
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def info(self, message: str) -> None:
        print(message)
        self.record(message + "\n")

    def warning(self, message: str) -> None:
        print(message, file=sys.stderr)
        self.record(message + "\n")

    def output(self, text: str) -> None:
        print(text, end="")
        self.record(text)

    def error_output(self, text: str) -> None:
        print(text, end="", file=sys.stderr)
        self.record(text)

    def record(self, text: str) -> None:
        if self._handle is None:
            return
        self._handle.write(text if text.endswith("\n") else text + "\n")
