from __future__ import annotations

import argparse
import re
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from .env_file import EnvFileLoader
from .errors import ConfigError
from .run_config import RunConfig

_RETENTION_PATTERN = re.compile(r"\+?[0-9]+")
_FLAG_PATTERNS = (
    re.compile(r"^argument ([^:]+):"),
    re.compile(r"^the following arguments are required: ([^,]+)"),
)


class _RaisingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ConfigError(_flag_from_message(message), message)


def _flag_from_message(message: str) -> str:
    for pattern in _FLAG_PATTERNS:
        match = pattern.match(message)
        if match:
            return match.group(1).strip()
    return "arguments"


def parse_retention(flag: str, value: str) -> int:
    """Parses a retention count the way an unsigned 8-bit integer is parsed."""
    if not _RETENTION_PATTERN.fullmatch(value):
        raise ConfigError(flag, f"invalid value {value!r}: expected an integer from 0 to 255")
    number = int(value)
    if number > 255:
        raise ConfigError(flag, f"invalid value {value!r}: expected an integer from 0 to 255")
    return number


class ConfigResolver:
    def __init__(self, env_loader: EnvFileLoader | None = None) -> None:
        self._env_loader = env_loader or EnvFileLoader()

    def build_parser(self) -> argparse.ArgumentParser:
        parser = _RaisingArgumentParser(
            prog="borgman",
            description="Create, prune and sync borg backups",
        )
        parser.add_argument(
            "inputs",
            metavar="INPUTS",
            nargs="+",
            help="Paths to archive",
        )
        parser.add_argument(
            "-e",
            "--exclude",
            dest="excludes",
            metavar="PATTERN",
            action="append",
            default=[],
            help="Exclude paths matching PATTERN (repeatable)",
        )
        parser.add_argument(
            "-d",
            "--keep-daily",
            metavar="DAILY",
            help="Number of daily archives to keep (default: 1)",
        )
        parser.add_argument(
            "-w",
            "--keep-weekly",
            metavar="WEEKLY",
            help="Number of weekly archives to keep (default: 1)",
        )
        parser.add_argument(
            "-m",
            "--keep-monthly",
            metavar="MONTHLY",
            help="Number of monthly archives to keep (default: 1)",
        )
        parser.add_argument(
            "-r",
            "--repo",
            metavar="PATH",
            help="Borg repository to back up into (required)",
        )
        parser.add_argument(
            "--rclone-dest",
            metavar="DEST",
            help="rclone destination the repository is copied to (required)",
        )
        parser.add_argument(
            "--rclone-delete",
            action="store_true",
            help="Delete remote files that no longer exist in the repository",
        )
        parser.add_argument(
            "--prometheus-push-addr",
            metavar="ADDR",
            help="Prometheus Pushgateway address for run metrics",
        )
        parser.add_argument(
            "-n",
            "--dry-run",
            action="store_true",
            help="Print the commands without running them",
        )
        parser.add_argument(
            "--log-dir",
            metavar="DIR",
            help="Directory for per-run log files",
        )
        parser.add_argument("--borg-bin", metavar="PATH", help="borg executable (default: borg)")
        parser.add_argument(
            "--rclone-bin",
            metavar="PATH",
            help="rclone executable (default: rclone)",
        )
        parser.add_argument(
            "--env-file",
            metavar="PATH",
            help="Optional env file supplying BORGMAN_* defaults",
        )
        return parser

    def resolve(self, argv: Sequence[str] | None = None) -> RunConfig:
        args = self.build_parser().parse_intermixed_args(argv)
        env_values = self._env_loader.load(args.env_file) if args.env_file else {}

        def pick(cli_value: str | None, env_key: str, default: str | None = None) -> str | None:
            if cli_value is not None:
                return cli_value
            return env_values.get(env_key) or default

        repo_path = pick(args.repo, "BORGMAN_REPO")
        if not repo_path:
            raise ConfigError("--repo", "a borg repository path is required")
        sync_dest = pick(args.rclone_dest, "BORGMAN_RCLONE_DEST")
        if not sync_dest:
            raise ConfigError("--rclone-dest", "an rclone destination is required")

        keep_daily = self._retention("--keep-daily", pick(args.keep_daily, "BORGMAN_KEEP_DAILY"))
        keep_weekly = self._retention("--keep-weekly", pick(args.keep_weekly, "BORGMAN_KEEP_WEEKLY"))
        keep_monthly = self._retention(
            "--keep-monthly", pick(args.keep_monthly, "BORGMAN_KEEP_MONTHLY")
        )
        log_dir = pick(args.log_dir, "BORGMAN_LOG_DIR")

        return RunConfig(
            inputs=tuple(args.inputs),
            repo_path=repo_path,
            sync_dest=sync_dest,
            excludes=tuple(args.excludes),
            keep_daily=keep_daily,
            keep_weekly=keep_weekly,
            keep_monthly=keep_monthly,
            dry_run=args.dry_run,
            metrics_addr=pick(args.prometheus_push_addr, "BORGMAN_PROMETHEUS_PUSH_ADDR"),
            sync_delete=args.rclone_delete,
            log_dir=Path(log_dir).expanduser() if log_dir else None,
            borg_bin=pick(args.borg_bin, "BORGMAN_BORG_BIN", "borg") or "borg",
            rclone_bin=pick(args.rclone_bin, "BORGMAN_RCLONE_BIN", "rclone") or "rclone",
        )

    def _retention(self, flag: str, value: str | None) -> int:
        return parse_retention(flag, "1" if value is None else value)
