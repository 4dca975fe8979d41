"""QR code rendering utilities."""
from __future__ import annotations

import io
from dataclasses import dataclass

import segno
from PIL import Image

from .config import AppConfig
from .state import QRConfig


class QRCapacityError(ValueError):
    """Raised when the payload does not fit into any QR symbol version."""


@dataclass(frozen=True, slots=True)
class RenderedSurface:
    """A rendered QR code together with the configuration it came from."""

    png: bytes
    size: int
    config: QRConfig

    def to_image(self) -> Image.Image:
        """Return the surface as a Pillow image."""

        image = Image.open(io.BytesIO(self.png))
        image.load()
        return image


@dataclass(slots=True)
class QRCodeManager:
    """Generate QR codes using :mod:`segno`."""

    config: AppConfig

    def border_for(self, qr_config: QRConfig) -> int:
        return self.config.qr_border if qr_config.include_margin else 0

    def render(self, qr_config: QRConfig) -> RenderedSurface:
        """Render ``qr_config`` into a square PNG of ``size`` pixels.

        segno only scales by whole modules, so the symbol is drawn at the
        largest scale that fits and then resized with nearest-neighbour
        sampling to the exact pixel size.  Colours are handed to segno as-is;
        it raises :class:`ValueError` for values it cannot interpret.
        """

        if qr_config.size <= 0:
            raise ValueError(f"QR size must be a positive number of pixels, got {qr_config.size}")

        try:
            qr = segno.make_qr(
                qr_config.render_value,
                error=qr_config.level,
                boost_error=False,
            )
        except segno.DataOverflowError as exc:
            raise QRCapacityError(
                f"Content is too long for a QR code at error correction level "
                f"{qr_config.level} ({len(qr_config.value)} characters)"
            ) from exc

        border = self.border_for(qr_config)
        modules, _ = qr.symbol_size(scale=1, border=border)
        scale = max(1, qr_config.size // modules)

        buffer = io.BytesIO()
        qr.save(
            buffer,
            kind="png",
            scale=scale,
            border=border,
            dark=qr_config.fg_color,
            light=qr_config.bg_color,
        )
        buffer.seek(0)

        with Image.open(buffer) as symbol:
            image = symbol.convert("RGBA")
        if image.size != (qr_config.size, qr_config.size):
            image = image.resize((qr_config.size, qr_config.size), Image.NEAREST)

        output = io.BytesIO()
        image.save(output, format="PNG")
        return RenderedSurface(png=output.getvalue(), size=qr_config.size, config=qr_config)

    def to_qpixmap(self, surface: RenderedSurface):  # pragma: no cover - requires PyQt at runtime
        """Return a ``QPixmap`` for ``surface``.

        :mod:`PyQt5` is imported lazily to keep the module usable in headless
        test environments.
        """

        try:
            from PyQt5.QtGui import QImage, QPixmap
        except Exception as exc:  # pragma: no cover - depends on environment
            raise RuntimeError("PyQt5 is required to generate a preview pixmap") from exc

        image = QImage()
        if not image.loadFromData(surface.png):
            raise RuntimeError("Failed to load QR image into QImage")

        return QPixmap.fromImage(image)


__all__ = ["QRCapacityError", "RenderedSurface", "QRCodeManager"]
