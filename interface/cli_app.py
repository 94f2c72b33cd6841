#!/usr/bin/env python3
"""
fitdb: topic/item progress tracker (CLI + TUI).

Thin facade: parses arguments, configures logging and delegates to the
command functions.
"""

import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from types import SimpleNamespace

from config import get_log_path
from util.logging_setup import configure_logging

from . import cli_commands
from .cli_parser import build_parser as build_cli_parser
from .tui_themes import DEFAULT_THEME, THEMES


def build_parser():
    return build_cli_parser(cli_commands, THEMES, DEFAULT_THEME)


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("fitdb"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    configure_logging(get_log_path())
    if not getattr(args, "command", None):
        args = SimpleNamespace(command="tui", db=None, theme=None, func=cli_commands.cmd_tui)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
