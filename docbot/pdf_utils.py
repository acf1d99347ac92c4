from __future__ import annotations

import logging
import random
import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from io import BytesIO
from pathlib import Path
from typing import Callable, Iterable, TypeVar

import qrcode
from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from . import config
from .errors import GenerationError
from .store import ArtifactStore
from .validators import NosudInput

logger = logging.getLogger(__name__)

T = TypeVar("T")

MARGIN = 50
QR_SIZE = 140

TEMPLATE_FILES = ["first.pdf"]
REGULAR_FONT_FILES = ["NotoSans-Regular.ttf", "DejaVuSans.ttf"]
BOLD_FONT_FILES = ["NotoSans-Bold.ttf", "DejaVuSans-Bold.ttf"]

_ID_ALPHABET = string.digits + string.ascii_uppercase


@dataclass
class GeneratedDocument:
    token: str
    pin: str
    content: bytes
    file_name: str
    verify_url: str
    generated_at: datetime
    doc_id: str
    serial_no: str


@dataclass
class _Fonts:
    regular: str
    bold: str
    unicode: bool


def generate_pin() -> str:
    return f"{secrets.randbelow(1_000_000):06d}"


def generate_ids(now: datetime) -> tuple[str, str]:
    """
    Номер документа вида UZ-NOSUD-YYYYMMDD-XXXXXX и 10-значный серийный номер.
    """
    rand = "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))
    doc_id = f"UZ-NOSUD-{now:%Y%m%d}-{rand}"
    serial_no = "".join(secrets.choice(string.digits) for _ in range(10))
    return doc_id, serial_no


def pick_business_date(now: datetime) -> datetime:
    """
    Дата "выдачи" документа: выходные сдвигаются на пятницу,
    время — случайное в пределах рабочего дня (08:00–18:59).
    """
    weekday = now.weekday()
    if weekday == 6:
        now = now - timedelta(days=2)
    elif weekday == 5:
        now = now - timedelta(days=1)
    return now.replace(
        hour=random.randint(8, 18),
        minute=random.randrange(60),
        second=random.randrange(60),
        microsecond=0,
    )


def replace_non_latin1(text: str) -> str:
    # Стандартные шрифты PDF не умеют кириллицу
    return "".join(ch if ord(ch) <= 0xFF else "?" for ch in text)


def render_qr_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=6,
        border=0,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = BytesIO()
    img.save(buf)
    return buf.getvalue()


def first_available(candidates: Iterable[Path], load: Callable[[Path], T]) -> T | None:
    """
    Перебирает кандидатов по порядку и возвращает первый успешно загруженный.
    """
    for path in candidates:
        try:
            return load(path)
        except (OSError, ValueError, TTFError, PdfReadError) as exc:
            logger.debug(f"Пропускаем {path}: {exc}")
    return None


def _load_template(path: Path) -> PdfReader:
    reader = PdfReader(BytesIO(path.read_bytes()))
    if not reader.pages:
        raise ValueError("template has no pages")
    return reader


def _register_font(path: Path) -> str:
    name = path.stem
    pdfmetrics.registerFont(TTFont(name, str(path)))
    return name


class DocumentGenerator:
    """
    Собирает справку о несудимости: текст и QR-код накладываются на первую
    страницу шаблона, документ регистрируется в ArtifactStore под новым
    токеном и PIN-кодом.
    """

    def __init__(
        self,
        store: ArtifactStore,
        base_url: str | None = None,
        admin_info: str | None = None,
        assets_dir: str | Path | None = None,
    ) -> None:
        self.store = store
        self.base_url = (base_url or config.APP_BASE_URL).rstrip("/")
        self.admin_info = config.ADMIN_INFO if admin_info is None else admin_info

        assets = Path(assets_dir or config.ASSETS_DIR)
        self.template_candidates = [assets / "pdfs" / name for name in TEMPLATE_FILES]
        self.regular_font_candidates = [assets / "fonts" / name for name in REGULAR_FONT_FILES]
        self.bold_font_candidates = [assets / "fonts" / name for name in BOLD_FONT_FILES]

    def generate_nosud(self, data: NosudInput, now: datetime | None = None) -> GeneratedDocument:
        now = now or datetime.now()
        doc_id, serial_no = generate_ids(now)
        pin = generate_pin()
        token = self.store.create_with_pin(pin)
        verify_url = f"{self.base_url}/verify/{token}"
        generated_at = pick_business_date(now)

        lines = self._nosud_lines(data, doc_id, serial_no, generated_at, pin, verify_url)
        try:
            content = self._render(lines, verify_url)
        except Exception as exc:
            raise GenerationError(str(exc) or exc.__class__.__name__) from exc

        self.store.attach_bytes(token, content)
        logger.info(f"Сформирован документ {doc_id} (token={token})")

        return GeneratedDocument(
            token=token,
            pin=pin,
            content=content,
            file_name=f"NOSUD_{doc_id}.pdf",
            verify_url=verify_url,
            generated_at=generated_at,
            doc_id=doc_id,
            serial_no=serial_no,
        )

    def _nosud_lines(
        self,
        data: NosudInput,
        doc_id: str,
        serial_no: str,
        generated_at: datetime,
        pin: str,
        verify_url: str,
    ) -> list[tuple[str, bool, int]]:
        stamp = f"{generated_at:%d.%m.%Y %H:%M}"
        lines = [
            ("Справка о несудимости: сведения", True, 16),
            (f"ФИО: {data.last_name} {data.first_name} {data.middle_name}", False, 12),
            (f"Дата рождения: {data.birth_date}", False, 12),
            (f"ПИНФЛ: {data.pinfl}", False, 12),
            (f"Документ №: {doc_id}", False, 12),
            (f"Серийный №: {serial_no}", False, 12),
            (f"Дата и время генерации: {stamp}", False, 12),
            (f"(дублируется) {stamp}", False, 12),
        ]
        if self.admin_info:
            lines.append((f"Информация админа: {self.admin_info}", False, 12))
        lines.append((f"PIN-код для доступа: {pin}", False, 12))
        lines.append((f"Сканируйте QR-код или перейдите по ссылке: {verify_url}", False, 10))
        return lines

    def _resolve_fonts(self) -> _Fonts:
        regular = first_available(self.regular_font_candidates, _register_font)
        bold = first_available(self.bold_font_candidates, _register_font)
        if regular is None and bold is None:
            logger.warning("Unicode-шрифт не найден, используем Helvetica без кириллицы")
            return _Fonts(regular="Helvetica", bold="Helvetica-Bold", unicode=False)
        return _Fonts(regular=regular or bold, bold=bold or regular, unicode=True)

    def _render(self, lines: list[tuple[str, bool, int]], verify_url: str) -> bytes:
        template = first_available(self.template_candidates, _load_template)
        if template is None:
            logger.warning("Шаблон PDF недоступен, рисуем на чистой странице")
            width, height = A4
        else:
            box = template.pages[0].mediabox
            width, height = float(box.width), float(box.height)

        overlay = self._draw_overlay(lines, verify_url, width, height)
        if template is None:
            return overlay

        page = template.pages[0]
        page.merge_page(PdfReader(BytesIO(overlay)).pages[0])
        writer = PdfWriter()
        for p in template.pages:
            writer.add_page(p)
        out = BytesIO()
        writer.write(out)
        return out.getvalue()

    def _draw_overlay(
        self,
        lines: list[tuple[str, bool, int]],
        verify_url: str,
        width: float,
        height: float,
    ) -> bytes:
        fonts = self._resolve_fonts()
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=(width, height))
        max_width = width - MARGIN * 2

        y = height - MARGIN
        for text, bold, size in lines:
            font = fonts.bold if bold else fonts.regular
            if not fonts.unicode:
                text = replace_non_latin1(text)
            c.setFont(font, size)
            for i, chunk in enumerate(simpleSplit(text, font, size, max_width)):
                y -= size + 6 if i == 0 else size + 4
                c.drawString(MARGIN, y, chunk)

        qr = ImageReader(BytesIO(render_qr_png(verify_url)))
        c.drawImage(qr, width - MARGIN - QR_SIZE, MARGIN, width=QR_SIZE, height=QR_SIZE)

        c.showPage()
        c.save()
        return buf.getvalue()
