"""Application icon helpers."""
from __future__ import annotations


def create_icon(size: int = 64):  # pragma: no cover - requires PyQt at runtime
    """Create a :class:`~PyQt5.QtGui.QIcon` showing three QR finder patterns.

    The import is performed lazily so that automated tests do not require a
    graphical backend.
    """

    try:
        from PyQt5.QtGui import QBrush, QColor, QIcon, QPainter, QPixmap
        from PyQt5.QtCore import Qt
    except Exception as exc:  # pragma: no cover - depends on environment
        raise RuntimeError("PyQt5 is required to generate the application icon") from exc

    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)
    painter.setPen(Qt.NoPen)
    painter.setBrush(QBrush(QColor("#2563EB")))
    painter.drawRoundedRect(0, 0, size, size, size // 6, size // 6)

    unit = size // 8
    for x, y in ((unit, unit), (size - 4 * unit, unit), (unit, size - 4 * unit)):
        painter.setBrush(QBrush(Qt.white))
        painter.drawRect(x, y, 3 * unit, 3 * unit)
        painter.setBrush(QBrush(QColor("#2563EB")))
        painter.drawRect(x + unit // 2, y + unit // 2, 2 * unit, 2 * unit)
        painter.setBrush(QBrush(Qt.white))
        painter.drawRect(x + unit, y + unit, unit, unit)
    painter.end()

    return QIcon(pixmap)


__all__ = ["create_icon"]
