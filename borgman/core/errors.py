from __future__ import annotations

import shlex
from collections.abc import Sequence


class BorgmanError(Exception):
    """Base class for every error that aborts a run."""


class ConfigError(BorgmanError):
    def __init__(self, flag: str, message: str) -> None:
        super().__init__(f"{flag}: {message}")
        self.flag = flag
        self.message = message


class InputError(BorgmanError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"input {path}: {reason}")
        self.path = path
        self.reason = reason


class CommandError(BorgmanError):
    """The external program could not be started."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        self.command = list(command)
        self.reason = reason
        super().__init__(f"could not run `{self.command_line}`: {reason}")

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)


class CommandFailure(BorgmanError):
    """The external program ran but exited with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str,
        stderr: str,
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._describe())

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)

    def _describe(self) -> str:
        lines = [f"`{self.command_line}` exited with status {self.returncode}"]
        if self.stdout.strip():
            lines.append(f"stdout:\n{self.stdout.rstrip()}")
        if self.stderr.strip():
            lines.append(f"stderr:\n{self.stderr.rstrip()}")
        return "\n".join(lines)


def format_error_chain(exc: BaseException) -> str:
    lines = [f"error: {exc}"]
    cause = exc.__cause__
    while cause is not None:
        lines.append(f"caused by: {cause}")
        cause = cause.__cause__
    return "\n".join(lines)
