import os

from dotenv import load_dotenv


load_dotenv()


TELEGRAM_BOT_TOKEN: str | None = os.getenv("TELEGRAM_BOT_TOKEN")
TELEGRAM_WEBHOOK_SECRET: str | None = os.getenv("TELEGRAM_WEBHOOK_SECRET") or None

APP_BASE_URL: str = (os.getenv("APP_BASE_URL") or "http://localhost:3000").rstrip("/")
ADMIN_INFO: str = os.getenv("ADMIN_INFO", "")

# Шаблон лежит в {ASSETS_DIR}/pdfs, шрифты в {ASSETS_DIR}/fonts
ASSETS_DIR: str = os.getenv("ASSETS_DIR", "public")

HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


def validate_config() -> list[str]:
    """
    Возвращает список отсутствующих обязательных переменных окружения.
    Пустой список — всё настроено.
    """
    missing: list[str] = []
    if not TELEGRAM_BOT_TOKEN:
        missing.append("TELEGRAM_BOT_TOKEN")
    return missing
