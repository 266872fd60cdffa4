from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunConfig:
    inputs: tuple[str, ...]
    repo_path: str
    sync_dest: str
    excludes: tuple[str, ...] = ()
    keep_daily: int = 1
    keep_weekly: int = 1
    keep_monthly: int = 1
    dry_run: bool = False
    metrics_addr: str | None = None
    sync_delete: bool = False
    log_dir: Path | None = None
    borg_bin: str = "borg"
    rclone_bin: str = "rclone"
