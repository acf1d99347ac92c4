from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from telegram import Update

from docbot.handlers import ConversationController
from docbot.pdf_utils import DocumentGenerator
from docbot.state import ConversationStateStore
from docbot.store import ArtifactStore
from docbot.telegram_client import TelegramClient

BASE_URL = "https://docs.example.uz"


@pytest.fixture()
def store() -> ArtifactStore:
    return ArtifactStore()


@pytest.fixture()
def states() -> ConversationStateStore:
    return ConversationStateStore()


@pytest.fixture()
def assets_dir(tmp_path: Path) -> Path:
    """Empty assets directory: no template, no fonts."""
    path = tmp_path / "assets"
    path.mkdir()
    return path


@pytest.fixture()
def generator(store: ArtifactStore, assets_dir: Path) -> DocumentGenerator:
    return DocumentGenerator(store, base_url=BASE_URL, admin_info="", assets_dir=assets_dir)


@pytest.fixture()
def transport() -> AsyncMock:
    return AsyncMock(spec=TelegramClient)


@pytest.fixture()
def controller(
    transport: AsyncMock,
    states: ConversationStateStore,
    generator: DocumentGenerator,
) -> ConversationController:
    return ConversationController(transport, states, generator)


def _message_payload(chat_id: int, text: str) -> dict:
    return {
        "update_id": 1,
        "message": {
            "message_id": 10,
            "date": 1760000000,
            "chat": {"id": chat_id, "type": "private"},
            "from": {"id": chat_id, "is_bot": False, "first_name": "Test"},
            "text": text,
        },
    }


def _callback_payload(chat_id: int, data: str) -> dict:
    return {
        "update_id": 2,
        "callback_query": {
            "id": "cbq-1",
            "chat_instance": "instance-1",
            "from": {"id": chat_id, "is_bot": False, "first_name": "Test"},
            "data": data,
            "message": {
                "message_id": 11,
                "date": 1760000000,
                "chat": {"id": chat_id, "type": "private"},
                "text": "menu",
            },
        },
    }


@pytest.fixture()
def message_payload() -> Callable[[int, str], dict]:
    return _message_payload


@pytest.fixture()
def callback_payload() -> Callable[[int, str], dict]:
    return _callback_payload


@pytest.fixture()
def message_update() -> Callable[[int, str], Update]:
    return lambda chat_id, text: Update.de_json(_message_payload(chat_id, text), None)


@pytest.fixture()
def callback_update() -> Callable[[int, str], Update]:
    return lambda chat_id, data: Update.de_json(_callback_payload(chat_id, data), None)
