"""Argument parsing for the ``scriptwatch`` command."""

from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .consts import DEFAULT_TIMEOUT


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    - ``argv``: Optional list of tokens (defaults to ``sys.argv[1:]``).

    Without ``--id`` every script with automatic checks enabled is checked.
    """
    p = argparse.ArgumentParser(
        prog="scriptwatch",
        description="Check userscripts for updates",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument(
        "--scripts",
        type=Path,
        default=Path("scripts.json"),
        help="JSON file with the scripts to check",
    )
    p.add_argument(
        "--options",
        type=Path,
        default=None,
        help="JSON options file (notification toggles, last check time)",
    )
    p.add_argument("--id", dest="item_id", default=None, help="Check only this script")
    p.add_argument(
        "--if-due",
        action="store_true",
        help="Skip the bulk check unless the autoUpdate interval has elapsed",
    )
    p.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT, help="HTTP timeout in seconds"
    )
    p.add_argument(
        "--progress", action="store_true", help="Print per-script progress lines"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--log-file", default=None, help="Also write logs to this file")
    p.add_argument("--log-json", action="store_true", help="JSON logs on stdout")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Explicit log level (overrides --verbose)",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")

    if argv is None:
        argv = sys.argv[1:]
    return p.parse_args(argv)


__all__ = ["parse_args"]
