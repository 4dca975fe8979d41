"""PNG and PDF export of the rendered QR code."""
from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .config import AppConfig
from .qr import RenderedSurface

logger = logging.getLogger(__name__)

PDF_TITLE = "Generated QR Code"
PDF_TITLE_FONT_SIZE = 20
PDF_CAPTION_FONT_SIZE = 10
PDF_CAPTION_GREY = 100 / 255
PDF_CENTER_X_MM = 105
PDF_TITLE_Y_MM = 20
PDF_IMAGE_X_MM = 40
PDF_IMAGE_Y_MM = 40
PDF_IMAGE_SIZE_MM = 130
PDF_CAPTION_Y_MM = 180


def artifact_name(extension: str, timestamp_ms: int) -> str:
    return f"qr-code-{timestamp_ms}.{extension}"


def caption_text(value: str) -> str:
    return f"Content: {value}"


def build_pdf(surface: RenderedSurface, value: str, *, page_compression: bool = False) -> bytes:
    """Return a single A4 page holding a title, the QR image and a caption.

    Positions are measured from the top-left corner of the page in
    millimetres; reportlab's origin is the bottom-left corner.
    """

    buffer = io.BytesIO()
    _, page_height = A4
    pdf = canvas.Canvas(buffer, pagesize=A4, pageCompression=int(page_compression))
    pdf.setTitle(PDF_TITLE)

    pdf.setFont("Helvetica", PDF_TITLE_FONT_SIZE)
    pdf.drawCentredString(PDF_CENTER_X_MM * mm, page_height - PDF_TITLE_Y_MM * mm, PDF_TITLE)

    image_size = PDF_IMAGE_SIZE_MM * mm
    pdf.drawImage(
        ImageReader(io.BytesIO(surface.png)),
        PDF_IMAGE_X_MM * mm,
        page_height - PDF_IMAGE_Y_MM * mm - image_size,
        width=image_size,
        height=image_size,
        mask="auto",
    )

    pdf.setFont("Helvetica", PDF_CAPTION_FONT_SIZE)
    pdf.setFillGray(PDF_CAPTION_GREY)
    pdf.drawCentredString(
        PDF_CENTER_X_MM * mm, page_height - PDF_CAPTION_Y_MM * mm, caption_text(value)
    )

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@dataclass(slots=True)
class Exporter:
    """Write the current surface to disk on demand.

    Nothing is cached: ``surface_provider`` and ``value_provider`` are called
    at export time so the artefact always reflects the latest render.  When
    no surface is available both exports return ``None`` without touching the
    file system.
    """

    config: AppConfig
    surface_provider: Callable[[], Optional[RenderedSurface]]
    value_provider: Callable[[], str]
    clock: Callable[[], float] = time.time

    def timestamp_ms(self) -> int:
        return int(self.clock() * 1000)

    def _target(self, extension: str) -> Path:
        directory = Path(self.config.export_dir)
        directory.mkdir(parents=True, exist_ok=True)
        return directory / artifact_name(extension, self.timestamp_ms())

    def export_png(self) -> Optional[Path]:
        surface = self.surface_provider()
        if surface is None:
            logger.info("PNG export skipped: no rendered QR code available")
            return None

        path = self._target("png")
        path.write_bytes(surface.png)
        logger.info("Exported PNG to %s", path)
        return path

    def export_pdf(self) -> Optional[Path]:
        surface = self.surface_provider()
        if surface is None:
            logger.info("PDF export skipped: no rendered QR code available")
            return None

        data = build_pdf(
            surface,
            self.value_provider(),
            page_compression=self.config.pdf_page_compression,
        )
        path = self._target("pdf")
        path.write_bytes(data)
        logger.info("Exported PDF to %s", path)
        return path


__all__ = ["artifact_name", "caption_text", "build_pdf", "Exporter"]
