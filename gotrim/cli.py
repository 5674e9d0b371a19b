"""CLI entrypoint for gotrim."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gotrim",
        description=(
            "Format Go source, removing blank lines just inside block braces "
            "and between the entries of import groups."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="path",
        help="Go files or directories to format.",
    )
    parser.add_argument(
        "-w",
        dest="write",
        action="store_true",
        help="Write result to (source) file instead of stdout.",
    )
    parser.add_argument(
        "-d",
        dest="diff",
        action="store_true",
        help="Display diffs instead of rewriting files.",
    )
    parser.add_argument(
        "-l",
        dest="list_only",
        action="store_true",
        help="List files whose formatting differs from gotrim's.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log errors to stderr.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .gotrim.yml file or its directory (defaults to the current directory).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gotrim."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        config = load_config(Path(args.config) if args.config else Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"gotrim: {exc}\n")

    orchestrator = Orchestrator(config=config)
    batch = orchestrator.run(
        args.paths,
        write=bool(args.write),
        diff=bool(args.diff),
        list_only=bool(args.list_only),
    )
    if batch.errors:
        for error in batch.errors:
            print(error, file=sys.stderr)
        parser.exit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
