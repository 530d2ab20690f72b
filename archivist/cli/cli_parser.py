"""Argument parser configuration for the Archivist CLI"""

import argparse

from archivist import __version__
from archivist.ui.catalog import CATALOGS

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_argument_parser() -> argparse.ArgumentParser:
    """Setup the main argument parser for the Archivist CLI."""

    parser = argparse.ArgumentParser(
        prog="archivist",
        description="Interactive mail user agent - compose over SMTP, read over IMAP",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Archivist {__version__}",
    )
    parser.add_argument(
        "--lang",
        choices=sorted(CATALOGS),
        help="Prompt language (default: from configuration, else en)"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to the JSON configuration file"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level for the log file"
    )

    return parser
