"""CLI entrypoint for the GitHub MCP server."""

import argparse
import dataclasses
import logging
import sys

import uvicorn
from dotenv import load_dotenv

from github_mcp import SERVER_NAME
from github_mcp.app import create_app
from github_mcp.config import ConfigError, check_log_level, load_config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Stateless MCP server exposing GitHub pull request tools over HTTP",
        prog=SERVER_NAME,
    )
    parser.add_argument("--host", help="Interface to bind (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: $PORT or 3333)")
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    args = build_parser().parse_args(argv)

    # Configuration is checked before anything binds a socket.
    try:
        config = load_config()
        log_level = check_log_level(args.log_level) if args.log_level else None
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    overrides = {
        "host": args.host,
        "port": args.port,
        "log_level": log_level,
    }
    config = dataclasses.replace(
        config, **{k: v for k, v in overrides.items() if v is not None}
    )

    logging.basicConfig(
        level=config.log_level,
        format=LOG_FORMAT,
    )

    app = create_app(config)
    logger.info(
        "%s listening on http://%s:%s (MCP endpoint: /mcp)",
        SERVER_NAME, config.host, config.port,
    )
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
