from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import assert_never

from telegram import CallbackQuery, InlineKeyboardMarkup, Update

from . import messages
from .errors import DocbotError, ErrorKind, TransportError
from .messages import MenuAction
from .pdf_utils import DocumentGenerator, GeneratedDocument
from .state import ConversationMode, ConversationStateStore
from .telegram_client import TelegramClient
from .validators import parse_nosud, validate_apostille, validate_nosud

logger = logging.getLogger(__name__)

MENU_COMMANDS = {"/start", "/admin"}


@dataclass
class HandleResult:
    mode: ConversationMode
    error: ErrorKind | None = None
    document: GeneratedDocument | None = None


def _command(text: str) -> str | None:
    # "/start@my_bot payload" -> "/start"
    head = text.strip().split(maxsplit=1)[0] if text.strip() else ""
    if not head.startswith("/"):
        return None
    return head.split("@", 1)[0]


class ConversationController:
    def __init__(
        self,
        transport: TelegramClient,
        states: ConversationStateStore,
        generator: DocumentGenerator,
    ) -> None:
        self.transport = transport
        self.states = states
        self.generator = generator

    async def handle_update(self, update: Update) -> HandleResult | None:
        if update.callback_query is not None:
            return await self.handle_callback(update.callback_query)

        message = update.message
        if message is not None and message.text:
            return await self.handle_text(message.chat.id, message.text)
        return None

    async def handle_callback(self, query: CallbackQuery) -> HandleResult | None:
        chat_id = query.message.chat.id if query.message is not None else None
        result = None
        if chat_id is not None and query.data:
            result = await self._apply_action(chat_id, query.data)

        # На нажатие кнопки отвечаем всегда, иначе клиент крутит "часики"
        try:
            await self.transport.answer_callback(query.id)
        except TransportError as exc:
            logger.warning(f"answerCallbackQuery не удался: {exc}")
        return result

    async def _apply_action(self, chat_id: int, data: str) -> HandleResult | None:
        try:
            action = MenuAction(data)
        except ValueError:
            logger.info(f"Неизвестная кнопка {data!r} в чате {chat_id}")
            return None

        if action is MenuAction.NOSUD:
            self.states.set(chat_id, ConversationMode.AWAIT_NOSUD_INPUT)
            await self._send_quietly(chat_id, messages.NOSUD_PROMPT, messages.back_keyboard())
        elif action is MenuAction.NOTARY:
            # Нотариальный сценарий ещё не реализован: только переключаем режим
            self.states.set(chat_id, ConversationMode.AWAIT_NOTARY_INPUT)
        elif action is MenuAction.APOSTILLE:
            self.states.set(chat_id, ConversationMode.AWAIT_APOSTILLE_INPUT)
            await self._send_quietly(chat_id, messages.APOSTILLE_PROMPT, messages.back_keyboard())
        elif action is MenuAction.BACK:
            await self._reset(chat_id)
        else:
            assert_never(action)
        return HandleResult(mode=self.states.get(chat_id))

    async def handle_text(self, chat_id: int, text: str) -> HandleResult:
        if _command(text) in MENU_COMMANDS:
            await self._reset(chat_id)
            return HandleResult(mode=ConversationMode.IDLE)

        mode = self.states.get(chat_id)

        # Если состояние потерялось (новый инстанс), корректные данные для
        # справки всё равно принимаем. Исключение — режим апостиля.
        if mode is not ConversationMode.AWAIT_APOSTILLE_INPUT and validate_nosud(text):
            return await self._issue_nosud(chat_id, text)

        if mode is ConversationMode.AWAIT_NOSUD_INPUT:
            await self._send_quietly(chat_id, messages.NOSUD_INVALID, messages.back_keyboard())
            return HandleResult(mode=mode, error=ErrorKind.VALIDATION)
        elif mode is ConversationMode.AWAIT_APOSTILLE_INPUT:
            if not validate_apostille(text):
                await self._send_quietly(chat_id, messages.APOSTILLE_INVALID, messages.back_keyboard())
                return HandleResult(mode=mode, error=ErrorKind.VALIDATION)
            # Формат верный; генерация апостиля пока не подключена
            self.states.set(chat_id, ConversationMode.IDLE)
            return HandleResult(mode=ConversationMode.IDLE)
        elif mode is ConversationMode.IDLE or mode is ConversationMode.AWAIT_NOTARY_INPUT:
            return HandleResult(mode=mode)
        else:
            assert_never(mode)

    async def _issue_nosud(self, chat_id: int, text: str) -> HandleResult:
        mode = self.states.get(chat_id)
        data = parse_nosud(text)
        try:
            document = await asyncio.to_thread(self.generator.generate_nosud, data)
            await self.transport.send_document(
                chat_id,
                document.content,
                document.file_name,
                caption=messages.document_caption(document.pin, document.verify_url),
                reply_markup=messages.back_keyboard(),
            )
        except DocbotError as exc:
            logger.exception(f"Не удалось выдать документ в чат {chat_id}")
            await self._send_quietly(chat_id, messages.send_error(str(exc)))
            return HandleResult(mode=mode, error=exc.kind)

        await self._send_quietly(chat_id, messages.WELCOME, messages.main_menu_keyboard())
        self.states.set(chat_id, ConversationMode.IDLE)
        return HandleResult(mode=ConversationMode.IDLE, document=document)

    async def _reset(self, chat_id: int) -> None:
        self.states.set(chat_id, ConversationMode.IDLE)
        await self._send_quietly(chat_id, messages.WELCOME, messages.main_menu_keyboard())

    async def _send_quietly(
        self,
        chat_id: int,
        text: str,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> None:
        try:
            await self.transport.send_message(chat_id, text, reply_markup=reply_markup)
        except TransportError as exc:
            logger.warning(f"sendMessage в чат {chat_id} не удался: {exc}")
