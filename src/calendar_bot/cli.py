"""Command-line interface for the calendar bot."""

import argparse
import logging
import sys
import threading

from pydantic import ValidationError

from calendar_bot import __version__
from calendar_bot.auth import CredentialsError, load_credentials
from calendar_bot.calendar import CalendarError, GoogleCalendarClient
from calendar_bot.config import Settings
from calendar_bot.decisions import DecisionEngine, PollCycle
from calendar_bot.logs import setup_logging
from calendar_bot.scheduler import install_signal_handlers, run_every

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calendar-bot",
        description="Calendar Bot - Accept or decline pending invitations based on conflicts",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-e",
        "--email",
        help="Email that bot will use to access Google Calendar (env: GOOGLE_EMAIL)",
    )
    parser.add_argument(
        "-c",
        "--check-interval",
        type=int,
        help="Interval of checks in seconds (env: CHECK_INTERVAL, default: 60)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Verbose logging",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single check and exit",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, with flags taking precedence."""
    overrides = {}
    if args.email is not None:
        overrides["google_email"] = args.email
    if args.check_interval is not None:
        overrides["check_interval"] = args.check_interval
    if args.debug is not None:
        overrides["debug"] = args.debug
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    print(f"calendarbot {__version__}")

    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(settings.debug)
    logger.info(
        f"options: email={settings.google_email} "
        f"check_interval={settings.check_interval}s calendar={settings.calendar_id}"
    )

    try:
        credentials = load_credentials(settings)
    except CredentialsError as e:
        logger.error(str(e))
        return 1

    calendar = GoogleCalendarClient(credentials, calendar_id=settings.calendar_id)
    engine = DecisionEngine(calendar, settings.google_email)
    cycle = PollCycle(calendar, engine, max_results=settings.max_results)

    if args.once:
        try:
            result = cycle.run_once()
        except CalendarError as e:
            logger.error(f"Unable to retrieve upcoming events: {e}")
            return 1
        logger.info(f"Processed {result.processed_count} of {result.events_found} events")
        return 0

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    logger.info(
        f"Calendar Checker. Using email {settings.google_email}. "
        f"Check interval {settings.check_interval} seconds"
    )
    run_every(settings.check_interval, cycle.run_once, stop_event)
    return 0


if __name__ == "__main__":
    sys.exit(main())
