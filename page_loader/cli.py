"""Command-line entry point: ``page-loader URL [-o DIR]``."""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from page_loader import __version__
from page_loader.logging_config import configure_logging
from page_loader.services.errors import PageLoaderError, describe_error
from page_loader.services.loader import load_sync


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="page-loader",
        description="Download a web page and its same-host resources for offline viewing.",
    )
    parser.add_argument("url", help="Absolute http(s) URL of the page to download.")
    parser.add_argument(
        "-o",
        "--output",
        default=os.getcwd(),
        help="Existing directory to save into (default: current directory).",
    )
    parser.add_argument(
        "--no-progress",
        dest="progress",
        action="store_false",
        help="Do not show per-resource download progress.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log trace events to stderr.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)

    try:
        filepath = load_sync(args.url, args.output, progress=args.progress)
    except ValidationError:
        print(f"Error: invalid URL {args.url!r}; expected an absolute http(s) URL", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except PageLoaderError as exc:
        print(describe_error(exc), file=sys.stderr)
        return 1

    print(filepath)
    return 0


if __name__ == "__main__":
    sys.exit(main())
