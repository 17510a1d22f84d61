#!/usr/bin/env python3
from __future__ import annotations
from typing import Callable, Dict, List, Optional
import argparse
import io
import logging
import os
import sys
import threading

from calc import Calculator

LOG_LEVEL_ENV = "POLYCALC_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
NO_MEMORY_MESSAGE = "NO MEMORY"

# Nesting depth is bounded by input size, and the algebra recurses once per level.
THREAD_STACK_SIZE = 512 * 1024 * 1024
RECURSION_LIMIT = 1_000_000


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polycalc",
        description="Stack calculator for sparse multivariate integer polynomials.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="file with one command or polynomial per line (default: stdin)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"logging threshold (env: {LOG_LEVEL_ENV})",
    )
    return parser


def run_with_deep_stack(fn: Callable[[], None]) -> None:
    """Call ``fn`` on a worker thread with a large stack and recursion limit.

    Exceptions raised by ``fn`` are re-raised in the calling thread.
    """
    failure: Dict[str, BaseException] = {}

    def target() -> None:
        try:
            fn()
        except BaseException as e:
            failure["error"] = e

    old_limit = sys.getrecursionlimit()
    old_size = threading.stack_size(THREAD_STACK_SIZE)
    sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))
    try:
        worker = threading.Thread(target=target, name="polycalc")
        worker.start()
        worker.join()
    finally:
        threading.stack_size(old_size)
        sys.setrecursionlimit(old_limit)
    if "error" in failure:
        raise failure["error"]


def _process(calc: Calculator, path: str) -> None:
    # undecodable bytes survive as lone surrogates and fail the line's own checks
    if path == "-":
        if isinstance(sys.stdin, io.TextIOWrapper):
            sys.stdin.reconfigure(errors="surrogateescape")
        calc.run(sys.stdin)
    else:
        with open(path, encoding="utf-8", errors="surrogateescape") as f:
            calc.run(f)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    calc = Calculator()
    try:
        run_with_deep_stack(lambda: _process(calc, args.input))
    except (MemoryError, RecursionError) as e:
        logging.getLogger(__name__).debug("aborting: %r", e)
        print(NO_MEMORY_MESSAGE, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
