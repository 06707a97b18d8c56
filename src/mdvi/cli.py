"""CLI entry point: open a markdown file in the terminal viewer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console

from mdvi.config import ConfigError, ImageProtocol, get_config_path, load_config
from mdvi.lines import lines_to_text
from mdvi.renderer import DocumentReadError, read_markdown_file, render_markdown

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        msg = f"invalid line number: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if number < 1:
        msg = f"line number must be >= 1, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdvi",
        description="A high-quality markdown file viewer for the terminal",
    )
    parser.add_argument("path", type=Path, help="Markdown file to open")
    parser.add_argument(
        "-l",
        "--line",
        type=_positive_int,
        default=1,
        help="Start at a specific line (1-based, default: 1)",
    )
    parser.add_argument(
        "--image-protocol",
        choices=[p.value for p in ImageProtocol],
        default=None,
        help="Image rendering protocol (default: from config, else auto)",
    )
    parser.add_argument("--log-file", type=Path, help="Write debug logs to this file")
    parser.add_argument(
        "--print",
        action="store_true",
        dest="print_only",
        help="Print the rendered document instead of opening the viewer",
    )
    return parser


def _fail(message: str) -> NoReturn:
    print(f"mdvi: {message}", file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, render the file, and show it."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(get_config_path())
    except ConfigError as e:
        _fail(str(e))

    log_file: Path | None = args.log_file or config.log_file
    if log_file is not None:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    protocol = ImageProtocol(args.image_protocol) if args.image_protocol else config.image_protocol

    try:
        source = read_markdown_file(args.path)
    except DocumentReadError as e:
        _fail(str(e))

    document = render_markdown(source)
    logger.info("Opened %s (%d lines, protocol %s)", args.path, len(document.lines), protocol)

    if args.print_only:
        Console().print(lines_to_text(document.lines[args.line - 1 :]), soft_wrap=True)
        return

    # Defer the Textual import so --print stays lightweight
    from mdvi.tui.app import ViewerApp  # noqa: PLC0415

    app = ViewerApp(
        document,
        path=str(args.path),
        start_line=args.line,
        image_protocol=protocol,
    )
    app.run()
