from __future__ import annotations

from telegram import Bot, InlineKeyboardMarkup
from telegram.error import TelegramError

from .config import TELEGRAM_BOT_TOKEN
from .errors import MissingConfiguration, TransportError


class TelegramClient:
    """
    Тонкая обёртка над telegram.Bot: три вызова Bot API, которые нужны
    боту, и единый тип ошибки для всех них.
    """

    def __init__(self, token: str | None = None, bot: Bot | None = None) -> None:
        self.token = token or TELEGRAM_BOT_TOKEN

        if bot is None and not self.token:
            raise MissingConfiguration("TELEGRAM_BOT_TOKEN is not set")

        self.bot = bot or Bot(self.token)

    async def initialize(self) -> None:
        await self.bot.initialize()

    async def shutdown(self) -> None:
        await self.bot.shutdown()

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> None:
        try:
            await self.bot.send_message(chat_id=chat_id, text=text, reply_markup=reply_markup)
        except TelegramError as exc:
            raise TransportError(exc.message) from exc

    async def answer_callback(self, callback_query_id: str) -> None:
        try:
            await self.bot.answer_callback_query(callback_query_id=callback_query_id)
        except TelegramError as exc:
            raise TransportError(exc.message) from exc

    async def send_document(
        self,
        chat_id: int,
        content: bytes,
        file_name: str,
        caption: str | None = None,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> None:
        """
        Отправляет PDF как вложение (multipart, как sendDocument в Bot API).
        """
        try:
            await self.bot.send_document(
                chat_id=chat_id,
                document=content,
                filename=file_name,
                caption=caption,
                reply_markup=reply_markup,
            )
        except TelegramError as exc:
            raise TransportError(exc.message) from exc
