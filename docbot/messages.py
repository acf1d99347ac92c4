from __future__ import annotations

from enum import Enum

from telegram import InlineKeyboardButton, InlineKeyboardMarkup


class MenuAction(str, Enum):
    NOSUD = "MENU_NOSUD"
    NOTARY = "MENU_NOTARY"
    APOSTILLE = "MENU_APOSTILLE"
    BACK = "BACK_TO_MENU"


WELCOME = (
    "👋 Добро пожаловать в бот генерации документов!\n\n"
    "Выберите, пожалуйста, тип документа, который хотите сформировать:"
)

NOSUD_PROMPT = (
    "📄Пожалуйста, введите через запятую следующие данные: "
    "Фамилия, Имя, Отчество, Дата рождения, ПИНФЛ\n\n"
    "Пример: MARDIYEV, XUSEN, MANSUROVICH, 27.03.2000, 30109986180092"
)

NOSUD_INVALID = (
    "⚠️Неверный формат. Введите все данные через запятую: "
    "Фамилия, Имя, Отчество, Дата рождения (ДД.ММ.ГГГГ), ПИНФЛ\n\n"
    "Пример: MARDIYEV, XUSEN, MANSUROVICH, 27.03.2000, 30109986180092"
)

APOSTILLE_PROMPT = (
    "📄Пожалуйста, введите через запятую следующие данные: "
    "Ф.И.О. лица, подписавшего документ, и название организации\n\n"
    "Пример: Ulmasov Bakhtiyor Abrorovich, CENTER OF PUBLIC SERVICES OF TAILOK DISTRICT"
)

APOSTILLE_INVALID = (
    "⚠️Неверный формат. Введите данные через запятую: Ф.И.О., Организация\n\n"
    "Пример: Ulmasov Bakhtiyor Abrorovich, CENTER OF PUBLIC SERVICES OF TAILOK DISTRICT"
)


def document_caption(pin: str, verify_url: str) -> str:
    return f"Документ сформирован. PIN: {pin}\nQR-ссылка: {verify_url}"


def send_error(reason: str | None) -> str:
    return f"Ошибка при отправке документа: {reason or 'неизвестная ошибка'}"


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton("1️⃣Справка о несудимости", callback_data=MenuAction.NOSUD.value)],
            [InlineKeyboardButton("2️⃣Нотариус", callback_data=MenuAction.NOTARY.value)],
            [InlineKeyboardButton("3️⃣Апостиль", callback_data=MenuAction.APOSTILLE.value)],
        ]
    )


def back_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton("🔙Назад", callback_data=MenuAction.BACK.value)]]
    )
