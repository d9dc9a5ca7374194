"""CLI entrypoints for docsite commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, DocsiteConfig, load_config
from .errors import DocsiteError
from .logging import configure_logging
from .opener import open_docs
from .pipeline import Pipeline


def _add_logging_options(parser: argparse.ArgumentParser, *, nested: bool = False) -> None:
    # Subcommand copies must not reset a flag given before the subcommand.
    default: object = argparse.SUPPRESS if nested else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Show DEBUG messages, including every rewritten page.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only report warnings and errors on the console.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsite",
        description="Build, highlight and open generated API documentation.",
    )
    _add_logging_options(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write a DEBUG-level log to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate the docs, add keyword highlighting and assemble the site.",
    )
    _add_logging_options(build_parser, nested=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root or .docsite.yml path (defaults to current directory).",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Directory to assemble the site into (overrides `output`).",
    )
    build_parser.add_argument(
        "--skip-generate",
        action="store_true",
        help="Post-process the existing generator output without running it again.",
    )
    build_parser.add_argument(
        "--config",
        default=None,
        help="Explicit .docsite.yml to use instead of the one under PATH.",
    )

    highlight_parser = subparsers.add_parser(
        "highlight",
        help="Apply the highlight passes to an existing HTML tree.",
    )
    _add_logging_options(highlight_parser, nested=True)
    highlight_parser.add_argument("root", help="Directory containing generated HTML files.")
    highlight_parser.add_argument(
        "--suffix",
        default=None,
        help="File suffix to process (defaults to .html).",
    )
    highlight_parser.add_argument(
        "--config",
        default=".",
        help="Project root or .docsite.yml holding highlight settings (defaults to current directory).",
    )

    open_parser = subparsers.add_parser(
        "open",
        help="Open the built documentation in the default browser.",
    )
    _add_logging_options(open_parser, nested=True)
    open_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Built site directory or index.html (defaults to the configured output).",
    )
    open_parser.add_argument("--crate", default=None, help="Crate folder holding index.html.")
    open_parser.add_argument(
        "--config",
        default=".",
        help="Project root or .docsite.yml used to find the site (defaults to current directory).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docsite commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == "build":
        pipeline = Pipeline()
        try:
            outcome = pipeline.run_build(
                args.config or args.path,
                output=args.output,
                skip_generate=bool(args.skip_generate),
            )
        except ConfigError as exc:
            parser.exit(1, f"docsite build failed: invalid configuration: {exc}\n")
        except DocsiteError as exc:
            parser.exit(1, f"docsite build failed during {exc.stage}: {exc}\n")
        print(f"Site built at {_display_path(outcome.output_root)}")
        if outcome.index_page is not None:
            print(f"Open with: docsite open {_display_path(outcome.index_page)}")
    elif args.command == "highlight":
        pipeline = Pipeline()
        config = _load_or_exit(parser, Path(args.config))
        highlight = config.highlight
        if args.suffix:
            highlight.suffix = args.suffix if args.suffix.startswith(".") else f".{args.suffix}"
        try:
            report = pipeline.run_highlight(args.root, highlight=highlight)
        except ConfigError as exc:
            parser.exit(1, f"docsite highlight failed: invalid configuration: {exc}\n")
        except DocsiteError as exc:
            parser.exit(1, f"docsite highlight failed during {exc.stage}: {exc}\n")
        print(f"Highlighted {len(report.changed)} of {len(report.visited)} files")
    elif args.command == "open":
        config = _load_or_exit(parser, Path(args.config))
        target = Path(args.path) if args.path else config.output_root
        try:
            code = open_docs(target, crate=args.crate or config.crate, opener=config.opener)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"docsite open failed: {exc}\n")
        sys.exit(code)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _load_or_exit(parser: argparse.ArgumentParser, path: Path) -> DocsiteConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        parser.exit(1, f"docsite failed: invalid configuration: {exc}\n")


def _display_path(path: Path) -> str:
    """Show paths under the working directory relative to it."""
    here = Path.cwd()
    return str(path.relative_to(here)) if path.is_relative_to(here) else str(path)


if __name__ == "__main__":
    main()
