"""Command-line front door for hopview.

Parses CLI options, merges them with persisted config, loads source text,
and dispatches into the interactive pager runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .jump import JumpConfig
from .runtime import run_pager
from .runtime.config import load_jump_config, load_theme_name
from .source_pane import DEFAULT_STYLE, read_text
from .ui_theme import available_theme_names

DEBUG_LOG_ENV = "HOPVIEW_DEBUG_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _label_alphabet(value: str) -> str:
    """argparse type validating a jump label alphabet."""
    try:
        JumpConfig(labels=value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def configure_logging(log_path: str | None) -> None:
    """Send debug logs to ``log_path``; without one, logging stays silent.

    The pager owns the terminal, so records never go to stderr.
    """
    if not log_path:
        logging.getLogger("hopview").addHandler(logging.NullHandler())
        return
    logging.basicConfig(filename=log_path, level=logging.DEBUG, format=LOG_FORMAT)


def resolve_jump_config(labels: str | None, max_depth: int | None) -> JumpConfig:
    """Merge CLI overrides onto the persisted jump settings."""
    config = load_jump_config()
    return JumpConfig(
        labels=labels if labels is not None else config.labels,
        max_depth=max_depth if max_depth is not None else config.max_depth,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Page a file in the terminal and jump to any word start with two keystrokes."
    )
    parser.add_argument("path", help="Path to the file to view.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for syntax colors.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--nopager", action="store_true", help="Print output directly without interactive paging.")
    parser.add_argument(
        "--wrap",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Soft-wrap long lines (default: last saved preference).",
    )
    parser.add_argument(
        "--labels",
        type=_label_alphabet,
        default=None,
        help="Jump label alphabet (default: a-z then A-Z).",
    )
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=None,
        help="Maximum narrowing rounds when labels are recycled (default: 10).",
    )
    parser.add_argument(
        "--debug-log",
        metavar="PATH",
        default=os.environ.get(DEBUG_LOG_ENV),
        help=f"Write debug logs to PATH (or set ${DEBUG_LOG_ENV}).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch hopview on a file."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug_log)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if path.is_dir():
        raise SystemExit(f"Not a file: {path}")

    source = read_text(path)
    run_pager(
        source,
        path,
        args.style,
        args.no_color,
        args.nopager,
        args.theme if args.theme is not None else load_theme_name(),
        resolve_jump_config(args.labels, args.max_depth),
        args.wrap,
    )


if __name__ == "__main__":
    main()
