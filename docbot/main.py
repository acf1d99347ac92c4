from __future__ import annotations

import logging

import uvicorn

from .config import HOST, LOG_LEVEL, PORT, validate_config
from .web import create_app


logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=LOG_LEVEL.upper(),
)
logger = logging.getLogger(__name__)


def main() -> None:
    missing = validate_config()
    if missing:
        # Веб-часть (проверка PIN, выдача файлов) работает и без бота,
        # а /webhook в этом случае отвечает 500
        logger.warning(f"Missing required environment variables: {', '.join(missing)}")

    app = create_app()

    logger.info(f"Starting document bot webhook server on {HOST}:{PORT}...")
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
