#!/usr/bin/env python3
"""
Entry point for the CHUK Theory MCP Server.

Runs the theory tools over stdio (for MCP clients that spawn the server)
or http. --debug turns on the engine's DEBUG logs, which trace how each
roman numeral resolved and which voicing was chosen.
"""

import argparse
import asyncio
import logging
from collections.abc import Sequence

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the server."""
    parser = argparse.ArgumentParser(
        prog="chuk-mcp-theory",
        description="CHUK Theory MCP Server: scales, chords and voice-led progressions",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log label resolution and voicing choices",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, then start the server on the chosen transport."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Tools register on import; configure logging first
    from chuk_mcp_theory.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Theory MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Theory MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
