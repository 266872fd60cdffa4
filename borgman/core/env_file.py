from __future__ import annotations

import os
from pathlib import Path

from .errors import ConfigError


class EnvFileLoader:
    def load(self, env_path: str | Path) -> dict[str, str]:
        env_file = Path(env_path).expanduser()
        if not env_file.is_file():
            raise ConfigError("--env-file", f"missing env file: {env_file}")

        values: dict[str, str] = {}
        for raw_line in env_file.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            cleaned = value.strip().strip('"').strip("'")
            values[key.strip()] = os.path.expandvars(cleaned)
        return values
