"""
Command-line interface for Breeze.

Usage:
    breeze TEMPLATE [--context FILE.json] [-D NAME=VALUE ...] [--output FILE]
    python -m breeze --help

Examples:
    breeze page.html --context page.json
    breeze greeting.txt -D name=John -D age=30
    breeze report.html -c data.json -o report.out.html -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from breeze import __version__
from breeze.context import Context
from breeze.environment import Environment, FileSystemLoader, TemplateError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breeze",
        description="Render a Breeze template file against a JSON context",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  breeze page.html --context page.json\n"
            "  breeze greeting.txt -D name=John -D age=30\n"
        ),
    )

    parser.add_argument("template",
                        help="Path of the template file to render")
    parser.add_argument("--context", "-c",
                        help="JSON file holding an object of template variables")
    parser.add_argument("--define", "-D", action="append", default=[], metavar="NAME=VALUE",
                        help="Set a variable; VALUE is parsed as JSON when possible "
                             "(overrides --context, may be repeated)")
    parser.add_argument("--output", "-o",
                        help="Write the result to this file instead of stdout")
    parser.add_argument("--max-output-size", type=int, default=None,
                        help="Fail when the output would exceed this many characters")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def parse_define(text: str) -> tuple[str, Any]:
    """Split ``NAME=VALUE``; VALUE is decoded as JSON, falling back to str."""
    name, sep, raw = text.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"expected NAME=VALUE, got {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return name.strip(), value


def load_context(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: context file must hold a JSON object")
    return data


def run_cli(args: list[str] | None = None) -> int:
    """Run the CLI with given arguments. Returns exit code."""
    parser = build_parser()
    opts = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if opts.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    template_path = Path(opts.template)
    entries: list[tuple[str, Any]] = []
    try:
        entries.extend(parse_define(item) for item in opts.define)
        if opts.context:
            entries.extend(load_context(Path(opts.context)).items())
        context = Context(entries)
    except (OSError, ValueError, TypeError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    env = Environment(
        loader=FileSystemLoader(template_path.parent),
        max_output_size=opts.max_output_size,
    )
    try:
        output = env.render(template_path.name, context)
    except TemplateError as exc:
        print(exc.format_compact(), file=sys.stderr)
        return 2 if exc.kind is None else 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: {template_path}: {exc}", file=sys.stderr)
        return 2

    if opts.output:
        try:
            Path(opts.output).write_text(output, encoding="utf-8")
        except OSError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 2
        logger.debug(f"Wrote {len(output)} chars to {opts.output}")
    else:
        sys.stdout.write(output)
    return 0


def main() -> None:
    sys.exit(run_cli())
