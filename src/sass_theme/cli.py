"""``sass-theme`` command line entry point.

Prints the theme object of a SASS/SCSS file as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

import sass

from .theme import ConversionOptions, extract_theme

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sass-theme",
        description="Convert SASS variables to a JSON theme object",
    )
    parser.add_argument("file", help="SASS/SCSS file with the variables to convert")
    parser.add_argument("--camel", action="store_true", help="Convert keys to camelCase")
    parser.add_argument(
        "-I", "--include-path", action="append", default=[], dest="include_paths",
        help="Extra directory to search for imports (repeatable)",
    )
    parser.add_argument("--precision", type=int, help="Decimal precision of computed numbers")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    parser.add_argument("-o", "--output", help="Write JSON here instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def options_from_args(args: argparse.Namespace) -> ConversionOptions:
    compiler_options: dict = {}
    if args.include_paths:
        compiler_options["include_paths"] = list(args.include_paths)
    if args.precision is not None:
        compiler_options["precision"] = args.precision
    return ConversionOptions(camel_case_keys=args.camel, compiler_options=compiler_options)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        theme = extract_theme(args.file, options_from_args(args))
    except (sass.CompileError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(theme, indent=args.indent, ensure_ascii=False)
    if not args.output:
        print(text)
        return 0

    try:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(text + "\n")
    except OSError as exc:
        print(f"Error writing '{args.output}': {exc}", file=sys.stderr)
        return 1
    logger.debug("Wrote theme to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
