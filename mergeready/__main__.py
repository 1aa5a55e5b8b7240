"""Run the mergeready MCP server."""

import argparse
import logging
import os

from mergeready.exceptions import ConfigurationError
from mergeready.logging import configure_logging, get_logger
from mergeready.server import get_mcp

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
TRANSPORTS = ("stdio", "http", "sse")

logger = get_logger()


def default_port() -> int:
    raw_port = os.environ.get("MERGEREADY_PORT")
    if not raw_port:
        return DEFAULT_PORT
    try:
        return int(raw_port)
    except ValueError:
        raise ConfigurationError(f"Invalid MERGEREADY_PORT: {raw_port!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mergeready",
        description="Serve the pull request readiness check over MCP",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, default="http")
    parser.add_argument("--host", default=os.environ.get("MERGEREADY_HOST", DEFAULT_HOST))
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--debug", action="store_true", help="Log every GitHub request")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.INFO)

    mcp = get_mcp()
    if args.transport == "stdio":
        mcp.run(transport="stdio")
        return

    port = args.port if args.port is not None else default_port()
    logger.info("Serving on %s:%d (%s)", args.host, port, args.transport)
    mcp.run(transport=args.transport, host=args.host, port=port)


if __name__ == "__main__":
    main()
