"""structparse-dump: parse a struct definition and print its AST."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .lexer.errors import render_snippet
from .parser import parse_struct, StructParseError
from .printer import render, dump, to_dict


logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="structparse-dump",
        description="Parse a struct definition and dump the resulting AST.",
    )
    ap.add_argument(
        "input", nargs="?", default="-",
        help="Source file to parse ('-' or omitted reads standard input)",
    )
    ap.add_argument(
        "-f", "--format", choices=("debug", "source", "json"), default="debug",
        help="Output form: indented AST dump, canonical source, or JSON",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    filename = "<stdin>" if args.input == "-" else args.input
    try:
        source = _read_input(args.input)
    except OSError as e:
        print(f"Error: cannot read {filename}: {e.strerror}", file=sys.stderr)
        return 2

    logger.debug("read %d bytes from %s", len(source), filename)

    try:
        struct = parse_struct(source, filename)
    except StructParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        print(render_snippet(source, e.span), file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(to_dict(struct), indent=2))
    elif args.format == "source":
        sys.stdout.write(render(struct))
    else:
        print(dump(struct))
    return 0


if __name__ == "__main__":
    sys.exit(main())
