#!/usr/bin/env python3
"""
sworkstyle command line entry point.

Parses arguments, configures logging and runs the daemon until the
compositor goes away or a shutdown signal arrives.
"""

import argparse
import asyncio
import logging
import os
import signal
import sys
from pathlib import Path
from typing import List, Optional

try:
    from systemd import journal
    SYSTEMD_AVAILABLE = True
except ImportError:
    SYSTEMD_AVAILABLE = False

from . import __version__
from .config import default_config_path
from .daemon import POLL_INTERVAL, Sworkstyle
from .errors import CompositorConnectionError

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sworkstyle",
        description="Name Sway/i3 workspaces after the applications they contain",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help=f"Icon configuration file (default: {default_config_path()})",
    )
    parser.add_argument(
        "-d", "--deduplicate",
        action="store_true",
        help="Show one icon for identical windows",
    )
    parser.add_argument(
        "-l", "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get("LOG_LEVEL", "INFO").upper(),
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=POLL_INTERVAL,
        help=f"Seconds between event loop cycles (default: {POLL_INTERVAL})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def setup_logging(level: str = "INFO") -> None:
    """Setup logging to systemd journal or stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if SYSTEMD_AVAILABLE:
        handler = journal.JournalHandler(SYSLOG_IDENTIFIER="sworkstyle")
    else:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(levelname)s [%(name)s] %(message)s"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logger.debug(f"Logging configured: level={level}")


async def main_async(args: argparse.Namespace) -> int:
    """Async main function.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    config_path = args.config if args.config is not None else default_config_path()
    daemon = Sworkstyle(config_path, args.deduplicate, args.poll_interval)

    loop = asyncio.get_running_loop()

    def signal_handler():
        logger.info("Received shutdown signal")
        daemon.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        await daemon.run()
    except CompositorConnectionError as e:
        logger.error(e.message)
        if e.suggestion:
            logger.info(f"Suggestion: {e.suggestion}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    logger.info(f"sworkstyle {__version__} starting (PID {os.getpid()})")

    try:
        sys.exit(asyncio.run(main_async(args)))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
