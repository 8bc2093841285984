"""Entry point for running the CLI as a module."""

import argparse
import asyncio
import sys

from docqa.configs.config import get_app_config
from docqa.configs.system import LoggingConfig
from docqa.infra.identity import find_user_id
from docqa.infra.logging import setup_logging

from .session_cli import DocqaCLI


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactive document Q&A",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--user-id",
        type=str,
        default="",
        help="User id for history (default: from config or session file)",
    )
    parser.add_argument(
        "--session-file",
        type=str,
        default="",
        help='JSON session file holding {"userId": ...}',
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args()


async def main(user_id: str = "", session_file: str = "", debug: bool = False) -> None:
    """Main entry point for the CLI."""
    config = get_app_config()
    setup_logging(
        LoggingConfig(level="DEBUG" if debug else "WARNING"),
        stream=sys.stderr,
        capture_uvicorn=False,
    )

    session = config.session.model_copy(
        update={
            "user_id": user_id or config.session.user_id,
            "session_file": session_file or config.session.session_file,
        }
    )
    cli = DocqaCLI(config, user_id=find_user_id(session))
    await cli.run()


def cli_entry() -> None:
    """CLI entry point."""
    args = parse_args()

    try:
        asyncio.run(
            main(
                user_id=args.user_id,
                session_file=args.session_file,
                debug=args.debug,
            )
        )
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    cli_entry()
