"""
ncparse – command-line interface
================================

Usage
-----
::

    python -m ncparse.cli SOURCE [OPTIONS]

Options
-------
--format, -f          Output format: ``text`` (default) or ``json``.
--output, -o          Output file path (default: stdout).
--preserve-text, -p   Attach each block's canonical text (json output).
--verbose, -v         Enable DEBUG logging.

Examples
--------
::

    python -m ncparse.cli part.nc
    python -m ncparse.cli part.nc -f json -p -o part.json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .core.errors import GCodeSyntaxError
from .core.program import parse_file

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ncparse",
        description="ncparse – parse G-code into blocks and print them back",
    )
    p.add_argument("source", help="G-code file to parse")
    p.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    p.add_argument(
        "--output", "-o",
        default="-",
        metavar="FILE",
        help="Output file (default: stdout)",
    )
    p.add_argument(
        "--preserve-text", "-p",
        action="store_true",
        help="Keep the canonical text of every block in the output",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    source = Path(args.source)
    if not source.is_file():
        print(f"ERROR: no such file: {source}", file=sys.stderr)
        return 2

    try:
        program = parse_file(source, preserve_text=args.preserve_text)
    except GCodeSyntaxError as exc:
        print(f"ERROR: {source}: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        output_text = json.dumps(program.to_dict(), indent=2)
    else:
        output_text = program.render().rstrip("\n")

    if output_text:
        output_text += "\n"

    if args.output == "-":
        sys.stdout.write(output_text)
    else:
        Path(args.output).write_text(output_text, encoding="utf-8")
        logger.info("Output written to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
