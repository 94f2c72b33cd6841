#!/usr/bin/env python3
"""Thin loader delegating CLI/TUI logic to the interface layer."""

import sys

from interface import cli_app as _cli_app

if __name__ != "__main__":
    # When imported, expose the CLI module directly.
    sys.modules[__name__] = _cli_app
else:
    sys.exit(_cli_app.main())
