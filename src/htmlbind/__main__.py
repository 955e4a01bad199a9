"""Command line entry point: `python -m htmlbind [FILE]`."""

import argparse
import logging
import sys
from pathlib import Path

from .options import DEFAULT_OPTIONS
from .transform import HTMLBindingTransform


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="htmlbind",
        description="Rewrite binding inserts in HTML into binding-attribute declarations.",
    )
    parser.add_argument("file", nargs="?", type=Path, help="Input file (default: stdin)")
    parser.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    parser.add_argument(
        "--binding-attribute",
        default=DEFAULT_OPTIONS.binding_attribute_name,
        help="Attribute receiving the declarations (default: %(default)s)",
    )
    parser.add_argument(
        "--skip-attribute",
        action="append",
        default=[],
        metavar="NAME",
        help="Attribute never scanned for binding inserts (repeatable)",
    )
    parser.add_argument(
        "--template-delimiters",
        nargs=2,
        metavar=("OPEN", "CLOSE"),
        default=DEFAULT_OPTIONS.template_delimiters,
        help="Template insert delimiters (default: %(default)s)",
    )
    parser.add_argument(
        "--binding-delimiters",
        nargs=2,
        metavar=("OPEN", "CLOSE"),
        default=DEFAULT_OPTIONS.binding_delimiters,
        help="Binding insert delimiters (default: %(default)s)",
    )
    parser.add_argument(
        "--root",
        default=DEFAULT_OPTIONS.expression_root,
        help="Expression root identifier (default: %(default)s)",
    )
    parser.add_argument("--xhtml", action="store_true", help="Close empty void elements with ' />'")
    parser.add_argument(
        "--normalize-whitespace", action="store_true", help="Collapse whitespace runs in text nodes"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser, parser.parse_args(argv)


def main(argv=None):
    parser, args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        binder = HTMLBindingTransform(
            binding_attribute_name=args.binding_attribute,
            attributes_to_skip=args.skip_attribute,
            template_delimiters=tuple(args.template_delimiters),
            binding_delimiters=tuple(args.binding_delimiters),
            expression_root=args.root,
            xhtml_mode=args.xhtml,
            normalize_whitespace=args.normalize_whitespace,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        html = args.file.read_text(encoding="utf-8") if args.file else sys.stdin.read()
    except OSError as e:
        print(f"htmlbind: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 1

    result = binder.transform(html)

    if args.output:
        args.output.write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
