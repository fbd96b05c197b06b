"""Command line entry point running the bundled example REPLs."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import traceback
from typing import Optional, Sequence

from .demos import DEMOS
from .errors import BuilderError, CriticalError
from .logging_utils import setup_logging
from .repl import Repl


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minirepl",
        description="Run one of the example minirepl REPLs",
    )
    parser.add_argument(
        "demo",
        nargs="?",
        default="minimal",
        choices=sorted(DEMOS),
        help="Example to run (default: minimal)",
    )
    parser.add_argument("-l", "--log", help="Path to log file for structured logs (optional)")
    return parser


async def run_repl(repl: Repl) -> int:
    """Run ``repl`` and turn a critical error into a failing exit code."""
    try:
        await repl.run()
    except CriticalError as e:
        print(f"Repl halted: {e}", file=repl.config.out)
        if os.getenv("MINIREPL_DEBUG"):
            traceback.print_exception(e)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the minirepl CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log)

    try:
        repl = DEMOS[args.demo]()
    except BuilderError as e:
        print(f"Error: failed to create repl: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(asyncio.run(run_repl(repl)))
