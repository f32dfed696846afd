"""Telegram command handlers for paper search."""

from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from catalog_store import CatalogStore
from config import Settings
from formatter import format_results
from implicit_requests import find_paper_requests
from search import search, search_by_number

LOGGER = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "/paper <text> - find papers whose number, title or author contains <text> "
    "(case-insensitive substring match, no fuzzy search)\n"
    "/search <text> - same as /paper\n"
    "/about - information about the bot\n"
    "/help - show this message\n\n"
    "You can also mention papers inline in any message, e.g. [P2300R7], {N4860} or <CWG1234>."
)

USAGE_TEXT = "Usage: /paper <text>\n\nExample: /paper ranges"


def extract_query(text: str | None) -> str | None:
    """Return the command argument: everything after the first run of whitespace.

    None when the message has no argument or only whitespace after the command.
    """
    if not text:
        return None
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return None
    query = parts[1].strip()
    return query or None


class PaperBot:
    """Binds the handlers to one catalog store and one set of settings."""

    def __init__(self, store: CatalogStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    @property
    def about_text(self) -> str:
        return (
            "Searches the WG21 (C++ standardization committee) paper index.\n"
            f"Catalog source: {self.settings.catalog_url}\n"
            f"The catalog is refreshed every {self.settings.refresh_interval:g} seconds."
        )

    async def help_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await update.effective_message.reply_text(HELP_TEXT, do_quote=True)

    async def about_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await update.effective_message.reply_text(self.about_text, do_quote=True)

    async def paper_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        query = extract_query(message.text)
        if query is None:
            await message.reply_text(USAGE_TEXT, do_quote=True)
            return

        result = search(self.store.read(), query, self.settings.max_results)
        LOGGER.info(
            "Search query=%r found=%s capped=%s", query, len(result.papers), result.capped
        )
        for text in format_results(query, result, self.settings.max_message_length):
            await message.reply_text(text, do_quote=True)

    async def implicit_search(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        requests = find_paper_requests(message.text or "")
        if not requests:
            return

        query = ", ".join(request.pattern for request in requests)
        result = search_by_number(self.store.read(), requests, self.settings.max_results)
        LOGGER.info(
            "Implicit search patterns=%s found=%s capped=%s", query, len(result.papers), result.capped
        )
        for text in format_results(query, result, self.settings.max_message_length):
            await message.reply_text(text, do_quote=True)


async def log_identity(application: Application) -> None:
    LOGGER.info("Bot username: %s", application.bot.username)


async def log_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    LOGGER.error("Error while handling update %s", update, exc_info=context.error)


def build_application(paper_bot: PaperBot) -> Application:
    """Create a Telegram application with all handlers registered."""
    application = (
        ApplicationBuilder()
        .token(paper_bot.settings.token)
        .concurrent_updates(True)
        .post_init(log_identity)
        .build()
    )
    application.add_handler(CommandHandler(["start", "help"], paper_bot.help_command))
    application.add_handler(CommandHandler("about", paper_bot.about_command))
    application.add_handler(CommandHandler(["paper", "search"], paper_bot.paper_command))
    application.add_handler(
        MessageHandler(filters.TEXT & ~filters.COMMAND, paper_bot.implicit_search)
    )
    application.add_error_handler(log_error)
    return application


def run_transport(paper_bot: PaperBot) -> None:
    """Run one long-polling (or webhook) session until it stops or fails.

    A fresh application is built per session so a restart never reuses a
    half-initialized one. The event loop is left open for the next session.
    """
    application = build_application(paper_bot)
    settings = paper_bot.settings

    if settings.webhook_url:
        LOGGER.info("Webhook mode: listening on %s:%s", settings.bind_address, settings.bind_port)
        application.run_webhook(
            listen=settings.bind_address,
            port=settings.bind_port,
            url_path=settings.token,
            webhook_url=f"{settings.webhook_url.rstrip('/')}/{settings.token}",
            allowed_updates=Update.ALL_TYPES,
            close_loop=False,
        )
    else:
        LOGGER.info("Long polling started")
        application.run_polling(allowed_updates=Update.ALL_TYPES, close_loop=False)
