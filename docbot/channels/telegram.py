"""Telegram channel implementation using python-telegram-bot."""

from __future__ import annotations

import asyncio

import httpx
from loguru import logger
from telegram import BotCommand, CallbackQuery, LinkPreviewOptions, Message, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from docbot.config.schema import Config
from docbot.docs.fetch import DocumentFetcher
from docbot.docs.pages import Documentation, GroupSwitch, NoOp, PageJump, parse_callback
from docbot.path import DocPath, EmptyPathError, InvalidPathCharError
from docbot.session.store import BotContext, DocSession

USAGE_TEXT = "Usage: /docs <item path>"
NOT_FOUND_TEXT = "Cannot find that item."
FETCH_FAILED_TEXT = "Could not reach the documentation host. Try again later."
SEND_FAILED_TEXT = "Cannot display this documentation page."
PATH_FORMAT_TEXT = (
    "<b>Item Path Format</b>\n"
    "&lt;crate name&gt;::&lt;module1&gt;::&lt;module2&gt;::…::&lt;item name&gt;\n\n"
    "every segment of the path should <i>only</i> contain alphanumerics, "
    "underscore (<code>_</code>), or hyphen (<code>-</code>)."
)
HELP_TEXT = (
    "📚 <b>docbot commands</b>\n\n"
    "/docs &lt;path&gt; — Show documentation of a Rust item, e.g. <code>/docs std::vec::Vec</code>\n"
    "/help — Show this help message"
)
NO_PREVIEW = LinkPreviewOptions(is_disabled=True)


class TelegramChannel:
    """
    Telegram channel using long polling.

    Answers ``/docs`` with the first page of an item's documentation and pages
    through it by editing that message on inline-keyboard callbacks.
    """

    name = "telegram"

    # Commands registered with Telegram's command menu
    BOT_COMMANDS = [
        BotCommand("docs", "Show documentation of a Rust item"),
        BotCommand("help", "Show available commands"),
    ]

    def __init__(
        self,
        config: Config,
        context: BotContext,
        fetcher: DocumentFetcher | None = None,
    ):
        self.config = config
        self.context = context
        self.fetcher = fetcher or DocumentFetcher(config.docs, config.paging)
        self._app: Application | None = None
        self._running = False

    async def start(self) -> None:
        """Start the Telegram bot with long polling."""
        if not self.config.telegram.token:
            logger.error("Telegram bot token not configured")
            return

        self._running = True

        # Build the application
        builder = Application.builder().token(self.config.telegram.token)
        if self.config.telegram.proxy:
            proxy = self.config.telegram.proxy
            builder = builder.proxy(proxy).get_updates_proxy(proxy)
        self._app = builder.build()

        self._app.add_handler(CommandHandler("start", self._on_help))
        self._app.add_handler(CommandHandler("help", self._on_help))
        self._app.add_handler(CommandHandler("docs", self._on_docs))
        self._app.add_handler(CallbackQueryHandler(self._on_callback))

        logger.info("Starting Telegram bot (polling mode)...")

        await self._app.initialize()
        await self._app.start()

        bot_info = await self._app.bot.get_me()
        logger.info(f"Telegram bot @{bot_info.username} connected")

        try:
            await self._app.bot.set_my_commands(self.BOT_COMMANDS)
            logger.debug("Telegram bot commands registered")
        except TelegramError as e:
            logger.warning(f"Failed to register bot commands: {e}")

        await self._app.updater.start_polling(
            allowed_updates=["message", "callback_query"],
            drop_pending_updates=True,  # Ignore old messages on startup
        )

        # Keep running until stopped
        while self._running:
            await asyncio.sleep(1)

    async def stop(self) -> None:
        """Stop the Telegram bot."""
        self._running = False

        if self._app:
            logger.info("Stopping Telegram bot...")
            await self._app.updater.stop()
            await self._app.stop()
            await self._app.shutdown()
            self._app = None

    # -- documentation lookup ------------------------------------------------

    async def get_documentation(self, path: DocPath) -> Documentation | None:
        """Return cached documentation for *path*, fetching it on a miss."""
        cached = self.context.documents.get(path)
        if cached is not None:
            return cached

        documentation = await self.fetcher.fetch(path)
        if documentation is not None and len(documentation):
            self.context.documents.insert(path, documentation)
            return documentation
        return None

    # -- handlers ------------------------------------------------------------

    async def _on_help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start and /help."""
        if not update.message:
            return
        await update.message.reply_text(HELP_TEXT, parse_mode=ParseMode.HTML)

    async def _on_docs(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /docs <path>."""
        message = update.message
        if not message:
            return

        argument = " ".join(context.args or [])
        try:
            path = DocPath.parse(argument)
        except EmptyPathError:
            await message.reply_text(USAGE_TEXT)
            return
        except InvalidPathCharError as e:
            logger.debug(f"Rejected item path {argument!r}: {e}")
            await message.reply_text(PATH_FORMAT_TEXT, parse_mode=ParseMode.HTML)
            return

        try:
            documentation = await self.get_documentation(path)
        except httpx.HTTPError as e:
            logger.error(f"Cannot fetch documentation for {path.display}: {e}")
            await message.reply_text(FETCH_FAILED_TEXT)
            return

        if documentation is None:
            await message.reply_text(NOT_FOUND_TEXT)
            return

        page = documentation.pages[0]
        try:
            sent = await message.reply_text(
                page.text,
                parse_mode=ParseMode.HTML,
                reply_markup=page.build_keyboard(0),
                link_preview_options=NO_PREVIEW,
            )
        except TelegramError as e:
            logger.warning(f"Cannot send {path.display} page 1 ({page.length} chars): {e}")
            await message.reply_text(SEND_FAILED_TEXT)
            return
        self.context.sessions.insert(sent.chat_id, sent.message_id, DocSession(path=path))
        logger.debug(f"Sent {path.display} page 1/{len(documentation)} to chat {sent.chat_id}")

    async def _on_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle inline keyboard presses on a documentation message."""
        query = update.callback_query
        if not query:
            return

        try:
            await query.answer()
            await self.handle_callback(query)
        except TelegramError as e:
            logger.warning(f"Callback {query.data!r} failed: {e}")
        except httpx.HTTPError as e:
            logger.error(f"Cannot refetch documentation for callback {query.data!r}: {e}")

    async def handle_callback(self, query: CallbackQuery) -> None:
        message = query.message
        if not isinstance(message, Message):
            return

        session = self.context.sessions.get(message.chat_id, message.message_id)
        action = parse_callback(query.data)
        if session is None or action is None or isinstance(action, NoOp):
            return

        documentation = await self.get_documentation(session.path)
        if documentation is None:
            return

        if isinstance(action, PageJump):
            page = documentation.get(action.index)
            if page is None:
                return
            await message.edit_text(
                page.text,
                parse_mode=ParseMode.HTML,
                reply_markup=page.build_keyboard(0),
                link_preview_options=NO_PREVIEW,
            )
            session.page = action.index
            session.group = 0

        elif isinstance(action, GroupSwitch):
            page = documentation.get(session.page)
            keyboard = page.build_keyboard(action.index) if page else None
            if keyboard is None:
                return
            await message.edit_reply_markup(reply_markup=keyboard)
            session.group = action.index
