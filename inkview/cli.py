"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ICON_ENV_VAR, config_file_path, resolve_icon_path
from .renderer import MarkdownRenderer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inkview",
        description="View a markdown file in a live-reloading window.",
        epilog=f"Environment: {ICON_ENV_VAR} sets the icon path when --icon is not given.",
    )
    parser.add_argument("path", help="Markdown file to display.")
    parser.add_argument(
        "-i",
        "--icon",
        default=None,
        help="PNG/ICNS image to use as the application icon.",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Print the rendered HTML document to stdout and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    path = Path(args.path).expanduser().resolve()
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        return 2
    if not path.is_file():
        print(f"Path is not a file: {path}", file=sys.stderr)
        return 2

    if args.html:
        document = MarkdownRenderer().render(path)
        sys.stdout.write(document.html)
        if document.error:
            print(document.error, file=sys.stderr)
            return 1
        return 0

    # Imported lazily so --html works without a display stack.
    from .app import run_viewer

    return run_viewer(path, resolve_icon_path(args.icon), config_file_path())
