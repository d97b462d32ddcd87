"""Entry point for the fdentry command-line tool."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from fdentry.core.config import Config
from fdentry.core.entry import Entry
from fdentry.core.errors import ParseError
from fdentry.core.logger import get_logger, install_excepthook, setup_logging

_log = get_logger("main")

EXIT_MISSING = 1
EXIT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fdentry",
        description="Query FreeDesktop entry files (.desktop, index.theme, systemd units).",
    )
    parser.add_argument("path", help="Entry file to read")
    parser.add_argument("-s", "--section", help="Section to inspect")
    parser.add_argument("-a", "--attr", help="Attribute to print (requires --section)")
    parser.add_argument("-p", "--param", help="Parameter of the attribute, e.g. a locale")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.attr and not args.section:
        parser.error("--attr requires --section")
    if args.param and not args.attr:
        parser.error("--param requires --attr")

    setup_logging("DEBUG" if args.verbose else Config().get("log_level"))
    install_excepthook()

    try:
        entry = Entry.parse_file(args.path)
    except OSError as exc:
        _log.error("Cannot read %s: %s", args.path, exc)
        print(f"fdentry: cannot read {args.path}: {exc.strerror or exc}", file=sys.stderr)
        return EXIT_ERROR
    except ParseError as exc:
        _log.error("Cannot parse %s: %s", args.path, exc)
        print(f"fdentry: {args.path}: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if not args.section:
        for name in sorted(entry.section_names()):
            print(name)
        return 0

    section = entry.section(args.section)
    if not section.exists():
        print(f"fdentry: no section [{args.section}]", file=sys.stderr)
        return EXIT_MISSING

    if not args.attr:
        for name in sorted(section.attrs()):
            print(name)
        return 0

    if args.param:
        value = section.attr_with_param(args.attr, args.param)
        label = f"{args.attr}[{args.param}]"
    else:
        value = section.attr(args.attr)
        label = args.attr
    if value is None:
        print(f"fdentry: [{args.section}] has no {label}", file=sys.stderr)
        return EXIT_MISSING
    print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
