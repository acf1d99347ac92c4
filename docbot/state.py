from __future__ import annotations

from enum import Enum


class ConversationMode(str, Enum):
    IDLE = "IDLE"
    AWAIT_NOSUD_INPUT = "AWAIT_NOSUD_INPUT"
    # Зарезервировано: нотариальный сценарий пока ничего не делает
    AWAIT_NOTARY_INPUT = "AWAIT_NOTARY_INPUT"
    AWAIT_APOSTILLE_INPUT = "AWAIT_APOSTILLE_INPUT"


class ConversationStateStore:
    """
    Простейшее in‑memory состояние: chat_id -> ConversationMode.
    Годится только для одного процесса; при нескольких инстансах
    состояние между ними не синхронизируется.
    """

    def __init__(self) -> None:
        self._modes: dict[int, ConversationMode] = {}

    def get(self, chat_id: int) -> ConversationMode:
        return self._modes.get(chat_id, ConversationMode.IDLE)

    def set(self, chat_id: int, mode: ConversationMode) -> None:
        self._modes[chat_id] = mode

    def __len__(self) -> int:
        return len(self._modes)
