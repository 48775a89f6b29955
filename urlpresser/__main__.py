#!/usr/bin/env python3
"""
Main entry point for the URL shortener service.

Usage:
    python -m urlpresser [-a ADDRESS] [-b BASE_URL] [-f FILE_STORAGE_PATH]

Environment variables:
    SERVER_ADDRESS - HTTP listen address (host:port)
    BASE_URL - Prefix for complete short URLs
    FILE_STORAGE_PATH - JSON snapshot file (use -f "" to disable persistence)
    SHORT_CODE_LENGTH - Generated key length (6-8)
    FAIL_ON_PERSIST_ERROR - Fail shorten requests when the snapshot write fails
    LOG_LEVEL - Logging level

Flags take precedence over environment variables, which take precedence
over defaults. An empty environment variable counts as unset.
"""

import argparse
import sys
from typing import Optional, Sequence

import uvicorn
from pydantic import ValidationError

from urlpresser.core.exceptions import StorageError
from urlpresser.core.logging_config import setup_logging
from urlpresser.core.setting import Settings
from urlpresser.main import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="urlpresser",
        description="URL shortening service",
    )
    parser.add_argument("-a", dest="SERVER_ADDRESS", help="HTTP address (host:port)")
    parser.add_argument("-b", dest="BASE_URL", help="Base URL for short links")
    parser.add_argument(
        "-f",
        dest="FILE_STORAGE_PATH",
        help="File storage path (empty string disables persistence)"
    )
    parser.add_argument("-l", dest="LOG_LEVEL", help="Logging level")
    return parser


def load_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """
    Build settings from the environment, overridden by any flags given.

    Raises:
        SystemExit: On unknown flags
        ValidationError: On invalid values
    """
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return Settings(**overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    try:
        settings = load_settings(argv)
        host, port = settings.host, settings.port
    except (ValidationError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logger = setup_logging(settings.LOG_LEVEL)
    logger.info(f"HTTP Address: {settings.SERVER_ADDRESS}")
    logger.info(f"Base URL: {settings.BASE_URL}")
    logger.info(f"File storage path: {settings.FILE_STORAGE_PATH or '(disabled)'}")

    try:
        app = create_app(settings)
    except StorageError as e:
        logger.critical(f"Refusing to start: {e}")
        return 1

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
