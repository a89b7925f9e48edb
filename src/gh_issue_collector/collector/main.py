"""CLI entrypoint: load the project registry once, then serve HTTP."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from pydantic import ValidationError

from gh_issue_collector import __version__
from gh_issue_collector.collector.config import ConfigError, load_config
from gh_issue_collector.collector.logging import configure_logging
from gh_issue_collector.server.app import create_app
from gh_issue_collector.server.config import ServerSettings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-issue-collector",
        description="Relay web form submissions to GitHub issues",
    )
    parser.add_argument(
        "--version", action="version", version=f"gh-issue-collector {__version__}"
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config",
        type=Path,
        default=None,
        help=(
            "The file to load configuration from "
            "(default: $ISSUE_COLLECTOR_CONFIG or /etc/gh-issue-collector/config.yml)"
        ),
    )
    return parser


def parse_listen(listen: str) -> tuple[str, int]:
    """Split a ``host:port`` bind address.

    An empty host (``":8080"``) binds every interface.

    Raises:
        ValueError: If the port is missing or not a number.
    """

    host, sep, port = listen.strip().rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address: {listen!r} (expected host:port)")

    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ServerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment / .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    config_path: Path = args.config or settings.config_path
    try:
        config = load_config(config_path)
        host, port = parse_listen(config.listen)
    except (ConfigError, ValueError) as e:
        logger.critical("Configuration error: %s", e, extra={"path": str(config_path)})
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    app = create_app(config, settings=settings)

    logger.info("About to listen on %s", config.listen)
    try:
        uvicorn.run(app, host=host, port=port, log_config=None)
    except SystemExit as e:
        # uvicorn logs the bind error itself, then exits.
        if e.code in (None, 0):
            return 0
        logger.critical(
            "Could not start server on %s",
            config.listen,
            extra={"exit_code": e.code},
        )
        return 1
    return 0
