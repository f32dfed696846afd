"""CLI entrypoint for the WG21 paper search bot."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from bot import PaperBot, run_transport
from catalog_store import CatalogStore
from config import Settings, load_settings
from refresher import CatalogRefresher
from supervisor import InfiniteRetry, RetryPolicy, run_supervised


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags. Flags override the matching environment variables."""
    parser = argparse.ArgumentParser(description="Telegram bot searching the WG21 paper index")
    parser.add_argument("--token", default=None, help="Telegram bot token (TELEGRAM_BOT_TOKEN)")
    parser.add_argument(
        "--max-results",
        type=int,
        default=None,
        help="Maximum papers returned per query (MAX_RESULTS_PER_REQUEST, default 20)",
    )
    parser.add_argument(
        "--max-message-length",
        type=int,
        default=None,
        help="Maximum characters per reply message (MAX_MESSAGE_LENGTH, default 2500)",
    )
    parser.add_argument(
        "--catalog-url",
        default=None,
        help="JSON paper index address (PAPERS_DATABASE_URI)",
    )
    parser.add_argument(
        "--refresh-interval",
        type=float,
        default=None,
        help="Seconds between catalog refreshes (CATALOG_REFRESH_INTERVAL_SECONDS, default 600)",
    )
    parser.add_argument(
        "--webhook-url",
        default=None,
        help="Public base URL; enables webhook mode instead of long polling (WEBHOOK_URL)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (LOG_LEVEL, default INFO)")
    return parser.parse_args(argv)


def run(settings: Settings, policy: RetryPolicy | None = None) -> None:
    """Load the catalog, start background refreshes and serve Telegram updates."""
    store = CatalogStore()
    refresher = CatalogRefresher(
        store,
        url=settings.catalog_url,
        interval=settings.refresh_interval,
        timeout=settings.request_timeout,
    )
    refresher.start()
    logging.info("Initial catalog size: %s", len(store))

    paper_bot = PaperBot(store, settings)
    run_supervised(lambda: run_transport(paper_bot), policy or InfiniteRetry())


def main(argv: list[str] | None = None) -> None:
    """Initialize config and run the bot."""
    load_dotenv()
    args = parse_args(argv)
    settings = load_settings(
        overrides={
            "token": args.token,
            "max_results": args.max_results,
            "max_message_length": args.max_message_length,
            "catalog_url": args.catalog_url,
            "refresh_interval": args.refresh_interval,
            "webhook_url": args.webhook_url,
            "log_level": args.log_level.upper() if args.log_level else None,
        }
    )
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.info("Starting WG21 paper bot")

    run(settings)


if __name__ == "__main__":
    main()
