"""Command-line interface: run the MCP server, or clean local .vtt files.

WHY: MCP clients start the server as a command, so the package needs an
entry point. The same caption cleaner is also handy on subtitle files
already on disk, without going through an MCP client.

HOW: argparse with two subcommands. ``serve`` (the default when no
subcommand is given) configures logging to stderr and runs the stdio
server. ``clean`` reads each file, cleans it, and prints the blocks to
stdout with the same filename header the download tool uses.

RULES:
- Logging always goes to stderr; stdout carries JSON-RPC or transcripts
- ``--log-level`` overrides LOG_LEVEL from .env
- ``clean`` exits 1 if any input file does not exist, before printing
- Python 3.10+ (the mcp library's floor)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mcp_youtube import __version__
from mcp_youtube.config import LOG_LEVEL
from mcp_youtube.core.vtt import clean_captions
from mcp_youtube.tools import format_subtitle_block

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _cmd_serve(args: argparse.Namespace) -> int:
    # Imported lazily so `clean` works without starting the MCP stack
    from mcp_youtube.server import run

    run()
    return 0


def _cmd_clean(args: argparse.Namespace) -> int:
    paths = [Path(p) for p in args.files]
    missing = [p for p in paths if not p.is_file()]
    if missing:
        for p in missing:
            print("Error: File not found: {}".format(p), file=sys.stderr)
        return 1

    blocks: List[str] = []
    for path in paths:
        raw = path.read_text(encoding="utf-8", errors="replace")
        result = clean_captions(raw)
        if not result.recognized:
            logger.warning("%s is not a WebVTT document", path)
        blocks.append(format_subtitle_block(path.name, result.text))

    print("\n".join(blocks))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser; separate from main() so tests can inspect it."""
    parser = argparse.ArgumentParser(
        prog="mcp_youtube",
        description="MCP server for YouTube subtitles, search and screenshots.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level for stderr output (default: %(default)s).",
    )
    parser.set_defaults(func=_cmd_serve)

    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the MCP server over stdio (default).")
    serve.set_defaults(func=_cmd_serve)

    clean = subparsers.add_parser(
        "clean",
        help="Print the cleaned transcript of one or more WebVTT files.",
    )
    clean.add_argument("files", nargs="+", help="Paths to .vtt files.")
    clean.set_defaults(func=_cmd_clean)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``mcp-youtube`` and ``python -m mcp_youtube``.

    argv=None means sys.argv; explicit argv is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
