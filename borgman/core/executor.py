from __future__ import annotations

import shlex
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import CommandError, CommandFailure
from .run_log import RunLog

UNDECODABLE_OUTPUT = "<undecodable output>"


@dataclass
class CommandResult:
    command: list[str]
    stdout: str
    stderr: str = ""
    succeeded: bool = True

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)


def decode_output(raw: bytes | None) -> str:
    if not raw:
        return ""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return UNDECODABLE_OUTPUT


class SubprocessExecutor:
    def execute(self, program: str, args: Iterable[str]) -> CommandResult:
        cmd = [program, *args]
        try:
            process = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as exc:
            raise CommandError(cmd, exc.strerror or str(exc)) from exc

        stdout = decode_output(process.stdout)
        stderr = decode_output(process.stderr)
        if process.returncode != 0:
            raise CommandFailure(cmd, process.returncode, stdout, stderr)
        return CommandResult(cmd, stdout, stderr)


class DryRunExecutor:
    """Prints each command instead of running it."""

    def __init__(self, log: RunLog) -> None:
        self._log = log
        self.commands: list[list[str]] = []

    def execute(self, program: str, args: Iterable[str]) -> CommandResult:
        cmd = [program, *args]
        self.commands.append(cmd)
        self._log.info(f"[dry-run] {shlex.join(cmd)}")
        return CommandResult(cmd, stdout="")
