from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ArtifactRecord:
    token: str
    pin: str
    content: bytes | None = None
    created_at: datetime = field(default_factory=_utcnow)


class ArtifactStore:
    """
    Хранилище выданных документов: token -> (PIN, байты PDF).

    Запись создаётся с PIN до того, как PDF отрисован, поэтому проверка PIN
    работает сразу, а байты прикрепляются чуть позже. Записи живут до
    перезапуска процесса.
    """

    def __init__(self) -> None:
        self._records: dict[str, ArtifactRecord] = {}

    def create_with_pin(self, pin: str) -> str:
        token = str(uuid.uuid4())
        while token in self._records:
            token = str(uuid.uuid4())
        self._records[token] = ArtifactRecord(token=token, pin=pin)
        return token

    def attach_bytes(self, token: str, content: bytes) -> None:
        record = self._records.get(token)
        if record is None:
            self._records[token] = ArtifactRecord(token=token, pin="", content=content)
            return
        record.content = content

    def verify_pin(self, token: str, pin: str) -> bool:
        record = self._records.get(token)
        if record is None:
            return False
        return record.pin == pin

    def has_token(self, token: str) -> bool:
        return token in self._records

    def get_bytes(self, token: str) -> bytes | None:
        record = self._records.get(token)
        return record.content if record else None

    def __len__(self) -> int:
        return len(self._records)
