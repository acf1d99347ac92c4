from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "ValidationFailure"
    GENERATION = "GenerationFailure"
    TRANSPORT = "TransportFailure"


class DocbotError(Exception):
    kind: ErrorKind


class GenerationError(DocbotError):
    """Не удалось собрать PDF (шаблон, шрифты и QR уже перебраны)."""

    kind = ErrorKind.GENERATION


class TransportError(DocbotError):
    """Ошибка вызова Telegram Bot API."""

    kind = ErrorKind.TRANSPORT


class MissingConfiguration(RuntimeError):
    pass
