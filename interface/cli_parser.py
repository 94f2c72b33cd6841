"""CLI parser construction for fitdb."""

import argparse
from typing import Any, Mapping


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fitdb",
        description="fitdb: track topics and the items inside them from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="store_true", help="print the installed version and exit")

    def add_db_arg(sp):
        sp.add_argument("--db", metavar="PATH", help="database file (default: config db_path or FITDB_DB_PATH)")
        return sp

    sub = parser.add_subparsers(dest="command", help="Commands")

    # init
    ip = add_db_arg(sub.add_parser("init", help="Create the database file and schema"))
    ip.add_argument("--remember", action="store_true", help="store --db as db_path in the user config")
    ip.set_defaults(func=commands.cmd_init)

    # tui
    tp = add_db_arg(sub.add_parser("tui", help="Start the TUI (default)"))
    tp.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"colour palette (default: {default_theme})")
    tp.set_defaults(func=commands.cmd_tui)

    # list
    lp = add_db_arg(sub.add_parser("list", help="Print every topic and its items"))
    lp.set_defaults(func=commands.cmd_list)

    # path
    pp = sub.add_parser("path", help="Show the database, config and log paths")
    pp.set_defaults(func=commands.cmd_path)

    return parser


__all__ = ["build_parser"]
