#!/usr/bin/env python3

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .commands.factory import CommandFactory
from .core.config_resolver import ConfigResolver
from .core.errors import BorgmanError, format_error_chain


class CliApplication:
    def __init__(
        self,
        resolver: ConfigResolver | None = None,
        factory: CommandFactory | None = None,
    ) -> None:
        self._resolver = resolver or ConfigResolver()
        self._factory = factory or CommandFactory()

    def build_parser(self) -> argparse.ArgumentParser:
        return self._resolver.build_parser()

    def run(self, argv: Sequence[str] | None = None) -> int:
        try:
            config = self._resolver.resolve(argv)
            return self._factory.create(config).run()
        except BorgmanError as exc:
            print(format_error_chain(exc), file=sys.stderr)
            return 1


def main() -> int:
    app = CliApplication()
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
