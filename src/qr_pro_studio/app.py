"""PyQt5 user interface for QR Pro Studio."""
from __future__ import annotations

import logging
from itertools import count
from typing import Callable, Dict, Optional, Tuple

from PyQt5.QtCore import QObject, QThread, QTimer, Qt, pyqtSignal, pyqtSlot
from PyQt5.QtGui import QColor, QFont
from PyQt5.QtWidgets import (
    QApplication,
    QCheckBox,
    QColorDialog,
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from .analysis import ContentAnalyzer
from .config import AppConfig, StyleConfig
from .icon import create_icon
from .logging_setup import configure_logging
from .qr import RenderedSurface
from .state import AIResult, ERROR_CORRECTION_LABELS, ERROR_CORRECTION_LEVELS
from .studio import QRStudio

logger = logging.getLogger(__name__)


class QtTimerHandle:  # pragma: no cover - requires Qt event loop
    def __init__(self, timer: QTimer):
        self._timer: Optional[QTimer] = timer
        timer.timeout.connect(self._release)

    def _release(self) -> None:
        if self._timer is not None:
            self._timer.deleteLater()
            self._timer = None

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._release()


class QtScheduler(QObject):  # pragma: no cover - requires Qt event loop
    """Single-shot timers on the Qt event loop."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        handle = QtTimerHandle(timer)
        timer.start(delay_ms)
        return handle


class QtClipboard:  # pragma: no cover - requires Qt event loop
    def set_text(self, text: str) -> None:
        clipboard = QApplication.clipboard()
        if clipboard is None:
            raise RuntimeError("System clipboard is not available")
        clipboard.setText(text)


class AnalysisWorker(QObject):
    finished = pyqtSignal(int, object)

    def __init__(self, analyzer: ContentAnalyzer, job_id: int, content: str):
        super().__init__()
        self._analyzer = analyzer
        self._job_id = job_id
        self._content = content

    def run(self) -> None:
        # ContentAnalyzer.analyze never raises.
        result = self._analyzer.analyze(self._content)
        self.finished.emit(self._job_id, result)


class ThreadedAnalysisRunner(QObject):
    """Run each analysis on its own ``QThread``.

    Results come back through a queued signal, so ``on_done`` always runs on
    the UI thread.  Calls cannot be cancelled once submitted.  A job's thread
    stays referenced until it has stopped; Qt aborts the process when a
    running ``QThread`` is destroyed.
    """

    def __init__(self, analyzer: ContentAnalyzer, parent: QObject | None = None):
        super().__init__(parent)
        self._analyzer = analyzer
        self._ids = count(1)
        self._jobs: Dict[int, Tuple[QThread, AnalysisWorker, Callable[[AIResult], None]]] = {}

    @property
    def pending(self) -> int:
        return len(self._jobs)

    def submit(self, content: str, on_done: Callable[[AIResult], None]) -> None:
        job_id = next(self._ids)
        thread = QThread()
        worker = AnalysisWorker(self._analyzer, job_id, content)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.finished.connect(self._on_worker_finished)

        self._jobs[job_id] = (thread, worker, on_done)
        thread.start()

    @pyqtSlot(int, object)
    def _on_worker_finished(self, job_id: int, result: AIResult) -> None:
        job = self._jobs.get(job_id)
        if job is None:
            return
        thread, _worker, on_done = job
        # run() has returned; only the thread's event loop is left to exit.
        thread.quit()
        thread.wait()
        del self._jobs[job_id]
        on_done(result)

    def shutdown(self, timeout_ms: int = 2000) -> None:
        """Stop all job threads, blocking until each one has finished."""

        for thread, _worker, _on_done in list(self._jobs.values()):
            thread.quit()
            if not thread.wait(timeout_ms):
                logger.warning(
                    "Analysis thread still busy after %d ms; waiting for it to finish",
                    timeout_ms,
                )
                thread.wait()
        self._jobs.clear()


class MainWindow(QWidget):  # pragma: no cover - requires Qt event loop
    def __init__(self, studio: QRStudio, config: AppConfig, style: StyleConfig):
        super().__init__()
        self._studio = studio
        self._config = config
        self._style = style

        self._studio.render_listeners.append(self._on_rendered)
        self._studio.result_listeners.append(self._on_ai_result)
        self._studio.busy_listeners.append(self._on_busy)
        self._studio.copied_listeners.append(self._on_copied)

        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)

        left = QVBoxLayout()
        left.addWidget(self._create_content_group())
        left.addWidget(self._create_customize_group())
        left.addStretch()

        right = QVBoxLayout()
        right.addWidget(self._create_preview_group())
        right.addWidget(self._create_tips())
        right.addStretch()

        layout.addLayout(left, 7)
        layout.addLayout(right, 5)

    def _create_content_group(self) -> QWidget:
        group = QGroupBox("কিউআর কোড কন্টেন্ট (লিংক বা টেক্সট)")
        layout = QVBoxLayout()

        self._char_count = QLabel()
        self._char_count.setObjectName("SubtleLabel")
        self._char_count.setAlignment(Qt.AlignRight)

        self._content_input = QTextEdit()
        self._content_input.setAcceptRichText(False)
        self._content_input.setMinimumHeight(110)
        self._content_input.setPlaceholderText(
            "এখানে আপনার লিংক, ফোন নম্বর বা যেকোনো টেক্সট লিখুন..."
        )
        self._content_input.setPlainText(self._studio.config.value)
        self._content_input.textChanged.connect(self._on_content_edited)

        self._copy_btn = QPushButton("Copy")
        self._copy_btn.setToolTip("Copy content")
        self._copy_btn.clicked.connect(self._copy_content)

        self._ai_label = QLabel()
        self._ai_label.setWordWrap(True)
        self._ai_label.hide()

        copy_row = QHBoxLayout()
        copy_row.addStretch()
        copy_row.addWidget(self._copy_btn)

        layout.addWidget(self._char_count)
        layout.addWidget(self._content_input)
        layout.addLayout(copy_row)
        layout.addWidget(self._ai_label)
        group.setLayout(layout)

        self._update_char_count()
        return group

    def _create_customize_group(self) -> QWidget:
        group = QGroupBox("কাস্টমাইজ করুন")
        layout = QHBoxLayout()

        colors = QVBoxLayout()
        self._fg_btn = QPushButton()
        self._fg_btn.clicked.connect(lambda: self._pick_color("fg"))
        self._bg_btn = QPushButton()
        self._bg_btn.clicked.connect(lambda: self._pick_color("bg"))
        colors.addWidget(QLabel("ফোরগ্রাউন্ড কালার"))
        colors.addWidget(self._fg_btn)
        colors.addWidget(QLabel("ব্যাকগ্রাউন্ড কালার"))
        colors.addWidget(self._bg_btn)

        options = QVBoxLayout()
        self._level_selector = QComboBox()
        for level in ERROR_CORRECTION_LEVELS:
            self._level_selector.addItem(ERROR_CORRECTION_LABELS[level], level)
        self._level_selector.setCurrentIndex(
            self._level_selector.findData(self._studio.config.level)
        )
        self._level_selector.currentIndexChanged.connect(self._on_level_changed)

        self._margin_check = QCheckBox("মার্জিন যোগ করুন")
        self._margin_check.setChecked(self._studio.config.include_margin)
        self._margin_check.toggled.connect(self._studio.store.set_include_margin)

        self._size_spin = QSpinBox()
        self._size_spin.setRange(64, 1024)
        self._size_spin.setSingleStep(32)
        self._size_spin.setSuffix(" px")
        self._size_spin.setValue(self._studio.config.size)
        self._size_spin.valueChanged.connect(self._studio.store.set_size)

        options.addWidget(QLabel("নির্ভুলতা স্তর (Error Correction)"))
        options.addWidget(self._level_selector)
        options.addWidget(self._margin_check)
        options.addWidget(QLabel("Size"))
        options.addWidget(self._size_spin)

        layout.addLayout(colors)
        layout.addLayout(options)
        group.setLayout(layout)

        self._update_color_buttons()
        return group

    def _create_preview_group(self) -> QWidget:
        group = QGroupBox("কিউআর প্রিভিউ")
        layout = QVBoxLayout()

        self._qr_preview = QLabel("QR code will appear here")
        self._qr_preview.setObjectName("qrDisplayLabel")
        self._qr_preview.setAlignment(Qt.AlignCenter)
        self._qr_preview.setWordWrap(True)
        self._qr_preview.setMinimumSize(280, 280)

        self._size_label = QLabel()
        self._size_label.setObjectName("SubtleLabel")
        self._size_label.setAlignment(Qt.AlignCenter)

        png_btn = QPushButton("ইমেজ ডাউনলোড করুন (PNG)")
        png_btn.setObjectName("AccentButton")
        png_btn.clicked.connect(self._export_png)

        pdf_btn = QPushButton("পিডিএফ ডাউনলোড করুন (PDF)")
        pdf_btn.clicked.connect(self._export_pdf)

        layout.addWidget(self._qr_preview)
        layout.addWidget(self._size_label)
        layout.addWidget(png_btn)
        layout.addWidget(pdf_btn)
        group.setLayout(layout)
        return group

    def _create_tips(self) -> QWidget:
        tips = QLabel(
            "টিপস: সবচেয়ে ভালো স্ক্যানিং ফলাফলের জন্য ব্যাকগ্রাউন্ডের চেয়ে ফোরগ্রাউন্ড কালার "
            "গাঢ় রাখার চেষ্টা করুন। প্রিন্ট করার জন্য PDF ফরম্যাট বেছে নিন।"
        )
        tips.setObjectName("InfoLabel")
        tips.setWordWrap(True)
        return tips

    def _on_content_edited(self) -> None:
        self._studio.store.set_value(self._content_input.toPlainText())
        self._update_char_count()

    def _update_char_count(self) -> None:
        self._char_count.setText(f"{len(self._studio.config.value)} ক্যারেক্টার")

    def _on_level_changed(self, index: int) -> None:
        level = self._level_selector.itemData(index)
        if level is None:
            return
        self._studio.store.set_level(level)

    def _pick_color(self, which: str) -> None:
        current = self._studio.config.fg_color if which == "fg" else self._studio.config.bg_color
        color = QColorDialog.getColor(QColor(current), self, "Choose colour")
        if not color.isValid():
            return
        if which == "fg":
            self._studio.store.set_fg_color(color.name())
        else:
            self._studio.store.set_bg_color(color.name())
        self._update_color_buttons()

    def _update_color_buttons(self) -> None:
        config = self._studio.config
        for button, value in ((self._fg_btn, config.fg_color), (self._bg_btn, config.bg_color)):
            button.setText(value.upper())
            button.setFont(QFont(self._style.font_mono, 11))

    def _on_rendered(self, surface: Optional[RenderedSurface]) -> None:
        config = self._studio.config
        self._size_label.setText(f"ক্যানভাস সাইজ: {config.size}x{config.size}px")

        if surface is None:
            self._qr_preview.clear()
            self._qr_preview.setText(f"QR preview failed: {self._studio.state.render_error}")
            return

        try:
            pixmap = self._studio.renderer.to_qpixmap(surface)
        except Exception as exc:
            self._qr_preview.setText(f"QR preview failed: {exc}")
            return

        scaled = pixmap.scaled(self._qr_preview.size(), Qt.KeepAspectRatio, Qt.FastTransformation)
        self._qr_preview.setPixmap(scaled)

    def _on_ai_result(self, result: AIResult) -> None:
        self._show_ai_result(result)

    def _show_ai_result(self, result: AIResult) -> None:
        self._ai_label.setObjectName("SuccessLabel" if result.is_safe else "WarningLabel")
        self._ai_label.setText(("✔ " if result.is_safe else "⚠ ") + result.suggestion)
        self._ai_label.style().polish(self._ai_label)
        self._ai_label.show()

    def _on_busy(self, busy: bool) -> None:
        if busy:
            self._ai_label.setObjectName("InfoLabel")
            self._ai_label.setText("AI কন্টেন্ট বিশ্লেষণ করছে...")
            self._ai_label.style().polish(self._ai_label)
            self._ai_label.show()
        elif self._studio.state.ai_result is not None:
            self._show_ai_result(self._studio.state.ai_result)
        else:
            self._ai_label.hide()

    def _on_copied(self, copied: bool) -> None:
        self._copy_btn.setText("✔ Copied" if copied else "Copy")

    def _copy_content(self) -> None:
        if not self._studio.copy_value():
            QMessageBox.warning(self, "Error", "Copy to clipboard failed")

    def _export_png(self) -> None:
        try:
            path = self._studio.export_png()
        except OSError as exc:
            QMessageBox.critical(self, "Error", f"Save failed: {exc}")
            return
        if path is None:
            QMessageBox.warning(self, "Error", "No QR code to save")
            return
        QMessageBox.information(self, "Success", f"QR image saved to:\n{path}")

    def _export_pdf(self) -> None:
        try:
            path = self._studio.export_pdf()
        except OSError as exc:
            QMessageBox.critical(self, "Error", f"Save failed: {exc}")
            return
        if path is None:
            QMessageBox.warning(self, "Error", "No QR code to save")
            return
        QMessageBox.information(self, "Success", f"QR PDF saved to:\n{path}")


class QRStudioApp(QMainWindow):  # pragma: no cover - requires Qt event loop
    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()

        self._config = config if config is not None else AppConfig.from_env()
        self._style = StyleConfig()

        self._scheduler = QtScheduler(self)
        self._runner = ThreadedAnalysisRunner(ContentAnalyzer(self._config), self)
        self._studio = QRStudio(self._config, self._scheduler, self._runner, QtClipboard())

        self._setup_ui()
        self._studio.start()

    def _setup_ui(self) -> None:
        self.setWindowTitle(f"{self._config.app_name} v{self._config.app_version}")
        self.setGeometry(100, 100, 1000, 720)
        self.setMinimumSize(820, 620)

        try:
            self.setWindowIcon(create_icon())
        except RuntimeError:
            pass

        self._apply_stylesheet()
        self.setCentralWidget(MainWindow(self._studio, self._config, self._style))
        self.show()

    def _apply_stylesheet(self) -> None:
        style = self._style
        self.setStyleSheet(
            f"""
            QMainWindow {{ background: {style.bg_primary}; }}
            QWidget {{ color: {style.fg_primary}; font-family: {style.font_family}; font-size: {style.font_size}px; }}
            QGroupBox {{ font-weight: bold; border: 1px solid {style.border}; border-radius: 12px; margin-top: 1ex; padding: 15px; background: {style.bg_secondary}; }}
            QTextEdit, QComboBox, QSpinBox {{ background: {style.bg_tertiary}; color: {style.fg_secondary}; border: 1px solid {style.border}; border-radius: 8px; padding: 8px; }}
            QTextEdit:focus {{ border: 1px solid {style.accent_primary}; }}
            QPushButton {{ background: {style.accent_secondary}; color: white; border: none; padding: 12px 18px; border-radius: 8px; font-weight: bold; }}
            QPushButton#AccentButton {{ background: {style.accent_primary}; }}
            QPushButton:hover {{ background: #3B82F6; }}
            #SubtleLabel {{ color: {style.fg_subtle}; }}
            #WarningLabel {{ background: {style.warning_bg}; color: {style.warning}; padding: 8px; border-radius: 6px; }}
            #SuccessLabel {{ background: {style.success_bg}; color: {style.success}; padding: 8px; border-radius: 6px; }}
            #InfoLabel {{ background: {style.info_bg}; color: {style.info}; padding: 12px; border-radius: 8px; }}
            #qrDisplayLabel {{ border: 2px dashed {style.border}; background: white; border-radius: 8px; }}
            """
        )

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._studio.shutdown()
        self._runner.shutdown()
        event.accept()


def run() -> int:  # pragma: no cover - requires Qt event loop
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    app = QApplication.instance() or QApplication([])
    app.setApplicationName(config.app_name)
    window = QRStudioApp(config)
    return app.exec_()


__all__ = ["run", "QRStudioApp"]
