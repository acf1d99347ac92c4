from __future__ import annotations

import html
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, ValidationError
from telegram import Update

from . import config
from .handlers import ConversationController
from .pdf_utils import DocumentGenerator
from .state import ConversationStateStore
from .store import ArtifactStore
from .telegram_client import TelegramClient

logger = logging.getLogger(__name__)

SECRET_HEADER = "x-telegram-bot-api-secret-token"


class VerifyRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    token: str | None = None
    pin: str | None = None


VERIFY_PAGE = """<!doctype html>
<html lang="ru">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Введите код доступа</title>
<style>
  body {{ min-height: 100vh; margin: 0; display: flex; align-items: center;
         justify-content: center; background: #f5f5f5; font-family: sans-serif; }}
  .card {{ width: 100%; max-width: 28rem; background: #fff; border: 1px solid #e4e4e7;
          border-radius: 6px; padding: 24px; }}
  h1 {{ font-size: 20px; text-align: center; margin: 0 0 4px; }}
  p.hint {{ font-size: 14px; color: #52525b; text-align: center; margin: 0 0 24px; }}
  input {{ width: 100%; box-sizing: border-box; border: 1px solid #d4d4d8;
          border-radius: 4px; padding: 8px 12px; margin-bottom: 16px; }}
  button {{ width: 100%; background: #2563eb; color: #fff; border: 0;
           border-radius: 4px; padding: 8px; font-weight: 500; }}
  button:disabled {{ opacity: .6; }}
  .error {{ color: #dc2626; font-size: 14px; }}
</style>
</head>
<body>
<div class="card" data-token="{token_attr}">
  <h1>Введите код доступа</h1>
  <p class="hint">Введите PIN-код, указанный в PDF-файле.</p>
  <form id="pin-form">
    <input id="pin" type="text" inputmode="numeric" pattern="\\d{{6}}"
           placeholder="Например: 123456" required>
    <p id="error" class="error" hidden></p>
    <button id="submit" type="submit">Подтвердить</button>
  </form>
</div>
<script>
  const token = {token_js};
  const form = document.getElementById("pin-form");
  const button = document.getElementById("submit");
  const error = document.getElementById("error");
  function fail(text) {{
    error.textContent = text;
    error.hidden = false;
    button.disabled = false;
    button.textContent = "Подтвердить";
  }}
  form.addEventListener("submit", async (e) => {{
    e.preventDefault();
    button.disabled = true;
    button.textContent = "Проверка…";
    error.hidden = true;
    try {{
      const res = await fetch("/verify", {{
        method: "POST",
        headers: {{ "Content-Type": "application/json" }},
        body: JSON.stringify({{ token, pin: document.getElementById("pin").value }}),
      }});
      const data = await res.json();
      if (!data.ok) {{
        fail("Неверный PIN-код. Попробуйте снова.");
        return;
      }}
      window.location.href = data.fileUrl;
    }} catch (err) {{
      fail("Ошибка. Попробуйте позже.");
    }}
  }});
</script>
</body>
</html>
"""


def create_app(
    *,
    bot_token: str | None = None,
    webhook_secret: str | None = None,
    base_url: str | None = None,
    admin_info: str | None = None,
    assets_dir: str | Path | None = None,
    store: ArtifactStore | None = None,
    states: ConversationStateStore | None = None,
    transport: TelegramClient | None = None,
    generator: DocumentGenerator | None = None,
) -> FastAPI:
    """
    Собирает приложение: хранилища создаются один раз и передаются
    в обработчики явно. Параметры по умолчанию берутся из config.
    """
    bot_token = bot_token if bot_token is not None else config.TELEGRAM_BOT_TOKEN
    webhook_secret = webhook_secret if webhook_secret is not None else config.TELEGRAM_WEBHOOK_SECRET

    store = store if store is not None else ArtifactStore()
    states = states if states is not None else ConversationStateStore()
    if generator is None:
        generator = DocumentGenerator(store, base_url=base_url, admin_info=admin_info, assets_dir=assets_dir)
    if transport is None and bot_token:
        transport = TelegramClient(bot_token)

    controller = (
        ConversationController(transport, states, generator) if transport is not None else None
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if transport is not None:
            await transport.initialize()
        try:
            yield
        finally:
            if transport is not None:
                await transport.shutdown()

    app = FastAPI(lifespan=lifespan)
    app.state.store = store
    app.state.states = states
    app.state.generator = generator
    app.state.controller = controller

    @app.post("/webhook")
    async def webhook(request: Request) -> Response:
        if webhook_secret and request.headers.get(SECRET_HEADER) != webhook_secret:
            return PlainTextResponse("Forbidden", status_code=403)

        if not bot_token or controller is None:
            return JSONResponse({"ok": False, "error": "Missing TELEGRAM_BOT_TOKEN"}, status_code=500)

        try:
            payload = await request.json()
            update = Update.de_json(payload, None)
            await controller.handle_update(update)
        except Exception:
            # Telegram повторяет апдейт при не-2xx ответе, поэтому отвечаем 200
            logger.exception("Ошибка обработки апдейта")
            return JSONResponse({"ok": False})
        return JSONResponse({"ok": True})

    @app.get("/webhook")
    async def webhook_health() -> dict:
        return {"ok": True}

    @app.post("/verify")
    async def verify(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
            # массив или скаляр вместо объекта: полей token/pin просто нет
            body = VerifyRequest.model_validate(payload if isinstance(payload, dict) else {})
        except (ValueError, ValidationError) as exc:
            logger.warning(f"Некорректный запрос /verify: {exc}")
            return JSONResponse({"ok": False}, status_code=500)

        if not body.token or not body.pin:
            return JSONResponse({"ok": False, "error": "MISSING_FIELDS"}, status_code=400)
        if not store.has_token(body.token):
            return JSONResponse({"ok": False, "error": "NOT_FOUND"}, status_code=404)
        if not store.verify_pin(body.token, body.pin):
            return JSONResponse({"ok": False, "error": "INVALID_PIN"})
        return JSONResponse({"ok": True, "fileUrl": f"/file/{body.token}"})

    @app.get("/verify/{token}", response_class=HTMLResponse)
    async def verify_page(token: str) -> HTMLResponse:
        page = VERIFY_PAGE.format(
            token_attr=html.escape(token, quote=True),
            token_js=json.dumps(token).replace("</", "<\\/"),
        )
        return HTMLResponse(page)

    @app.get("/file/{token}")
    async def file(token: str) -> Response:
        content = store.get_bytes(token)
        if content is None:
            return PlainTextResponse("Not found", status_code=404)
        return Response(
            content=content,
            media_type="application/pdf",
            headers={
                "Content-Disposition": 'inline; filename="document.pdf"',
                "Cache-Control": "no-store",
            },
        )

    return app
