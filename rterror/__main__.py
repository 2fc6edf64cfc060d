#!/usr/bin/env python3
"""rterror/__main__.py — demo CLI that prints a chain of wrapped errors.

Usage examples
--------------
    # Four nested helpers, each wrapping the error of the next one
    python -m rterror

    # Deeper chain, no colour, custom output template
    python -m rterror --depth 6 --plain
    python -m rterror --format "{.function_base}@{.line}: {.message}"

    # JSON document of the outermost error
    python -m rterror --json

Exit codes
----------
    0   Success.
    2   Bad command-line arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rterror import __version__
from rterror.config import PLAIN_FORMAT, configure
from rterror.error import RTError, new

_log = logging.getLogger("rterror")

EXIT_OK: int = 0
EXIT_USAGE: int = 2


def _configure_logging(verbosity: int) -> None:
    """Set up the ``rterror`` logger: 0 → WARNING, 1 → INFO, 2+ → DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("rterror")
    root.setLevel(level)
    if not root.handlers:
        root.addHandler(handler)


def build_chain(depth: int) -> RTError:
    """Return an error wrapping *depth* - 1 causes, one per nested call."""

    def level(n: int) -> RTError:
        err = new("my error message {p0}", n)
        if n < depth:
            err.wrap(level(n + 1))
        return err

    return level(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rterror",
        description="Print a demo chain of wrapped runtime errors.",
    )
    parser.add_argument("--depth", type=int, default=4,
                        help="number of errors in the chain (default: 4)")
    parser.add_argument("--format", dest="template", default=None,
                        help="output template applied to every error")
    parser.add_argument("--plain", action="store_true",
                        help="use the colourless default template")
    parser.add_argument("--json", action="store_true",
                        help="print the outermost error as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="increase log verbosity (repeatable)")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.depth < 1:
        parser.print_usage(sys.stderr)
        _log.error("--depth must be at least 1, got %d", args.depth)
        return EXIT_USAGE

    if args.plain:
        configure(format=PLAIN_FORMAT)
    if args.template is not None:
        configure(format=args.template)

    err = build_chain(args.depth)
    _log.debug("built chain of %d error(s)", args.depth)

    print(err.marshal_json(indent=2) if args.json else err)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
