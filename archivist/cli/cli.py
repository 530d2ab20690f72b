"""Main CLI entry point."""

import sys
from typing import List, Optional

from rich.markup import escape

from archivist.core.email.imap import open_imap_session
from archivist.core.email.smtp import get_smtp_client
from archivist.features.login import CredentialBuilder, LoginStateMachine, RetryPolicy
from archivist.ui.catalog import PromptKey, get_catalog
from archivist.ui.components import InputReader
from archivist.utils.config import ConfigManager
from archivist.utils.console import get_console
from archivist.utils.errors import (
    ArchivistError,
    InputClosedError,
    LoginAbortedError,
    format_error_message,
)
from archivist.utils.logging import get_logger, init_logging

from .cli_parser import setup_argument_parser
from .session import SessionLoop

logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 = logged out, 1 = error, 130 = interrupted)
    """
    parser = setup_argument_parser()
    args = parser.parse_args(argv)
    console = get_console()

    try:
        manager = ConfigManager(args.config)
        config = manager.apply_overrides(language=args.lang, log_level=args.log_level)
        init_logging(config.logging.log_level, log_to_file=config.logging.log_to_file)
    except ArchivistError as e:
        console.print(f"[red]Configuration error: {escape(e.message)}[/red]", highlight=False)
        return 1

    catalog = get_catalog(config.ui.language)
    reader = InputReader(catalog, console)

    login = LoginStateMachine(
        CredentialBuilder(reader),
        submission_factory=lambda session: get_smtp_client(session, config.network),
        retrieval_factory=lambda session: open_imap_session(session, config.network),
        messages=reader.messages,
        policy=RetryPolicy.from_config(config.login),
    )

    try:
        reader.messages.plain(catalog[PromptKey.WELCOME])
        authenticated = login.run()
        SessionLoop(reader, authenticated, wait_for_exit=config.ui.wait_for_exit).run()
        return 0

    except InputClosedError:
        logger.warning("Input closed, quitting")
        reader.messages.error(catalog[PromptKey.INPUT_CLOSED])
        return 1

    except LoginAbortedError as e:
        logger.error(f"Login aborted: {e.message}")
        return 1

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130  # Standard SIGINT exit code

    except ArchivistError as e:
        logger.error(f"Fatal error: {e.message}")
        console.print(f"[red]Fatal error: {escape(format_error_message(e))}[/red]", highlight=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())
