from __future__ import annotations

import re
from dataclasses import dataclass


PINFL_RE = re.compile(r"[0-9]{14}")
DATE_DDMMYYYY_RE = re.compile(r"(0[1-9]|[12][0-9]|3[01])\.(0[1-9]|1[0-2])\.(19|20)[0-9]{2}")
WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class NosudInput:
    last_name: str
    first_name: str
    middle_name: str
    birth_date: str
    pinfl: str


@dataclass(frozen=True)
class ApostilleInput:
    full_name: str
    organization: str


def _split(text: str) -> list[str]:
    # лишние запятые (в конце или двойные) игнорируем
    return [p for p in (part.strip() for part in text.split(",")) if p]


def validate_nosud(text: str) -> bool:
    # Ожидаем: ФАМИЛИЯ, ИМЯ, ОТЧЕСТВО, ДД.ММ.ГГГГ, ПИНФЛ
    parts = _split(text)
    if len(parts) != 5:
        return False
    _last, _first, _middle, birth_date, pinfl = parts
    if not DATE_DDMMYYYY_RE.fullmatch(birth_date):
        return False
    return PINFL_RE.fullmatch(pinfl) is not None


def validate_apostille(text: str) -> bool:
    # Ожидаем: Ф.И.О., Организация
    parts = _split(text)
    if len(parts) != 2:
        return False
    full_name, _org = parts
    # имя должно состоять хотя бы из двух слов
    return WHITESPACE_RE.search(full_name) is not None


def parse_nosud(text: str) -> NosudInput:
    last_name, first_name, middle_name, birth_date, pinfl = _split(text)
    return NosudInput(
        last_name=last_name,
        first_name=first_name,
        middle_name=middle_name,
        birth_date=birth_date,
        pinfl=pinfl,
    )


def parse_apostille(text: str) -> ApostilleInput:
    full_name, organization = _split(text)
    return ApostilleInput(full_name=full_name, organization=organization)
