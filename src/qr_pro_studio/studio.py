"""Headless controller wiring the config store, renderer, trigger and exports."""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional

from .clipboard import CopyHelper
from .config import AppConfig
from .export import Exporter
from .ports import AnalysisRunner, Clipboard, Scheduler
from .qr import QRCodeManager, RenderedSurface
from .state import AIResult, AppState, ConfigStore, QRConfig
from .trigger import AnalysisTrigger

logger = logging.getLogger(__name__)


class QRStudio:
    """Application core shared by the GUI and the tests.

    Every config update re-renders the QR code synchronously.  Content
    changes additionally feed the debounced analysis trigger.  Exports pull
    the current surface when asked.
    """

    def __init__(
        self,
        config: AppConfig,
        scheduler: Scheduler,
        runner: AnalysisRunner,
        clipboard: Clipboard,
        initial: QRConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config
        self.state = AppState()
        self.store = ConfigStore(initial if initial is not None else QRConfig(size=config.default_size))
        self.renderer = QRCodeManager(config)
        self.surface: Optional[RenderedSurface] = None

        self.render_listeners: List[Callable[[Optional[RenderedSurface]], None]] = []
        self.result_listeners: List[Callable[[AIResult], None]] = []
        self.busy_listeners: List[Callable[[bool], None]] = []
        self.copied_listeners: List[Callable[[bool], None]] = []

        self.trigger = AnalysisTrigger(
            config,
            scheduler,
            runner,
            on_result=self._on_result,
            on_busy=self._on_busy,
        )
        self.exporter = Exporter(
            config,
            surface_provider=lambda: self.surface,
            value_provider=lambda: self.store.config.value,
            clock=clock,
        )
        self.copier = CopyHelper(config, clipboard, scheduler, on_change=self._on_copied)

        self._last_value: Optional[str] = None
        self.store.subscribe(self._on_config_changed)

    @property
    def config(self) -> QRConfig:
        return self.store.config

    def start(self) -> None:
        """Render the initial config and schedule analysis of its content."""

        self._on_config_changed(self.store.config)

    def shutdown(self) -> None:
        self.trigger.shutdown()

    def export_png(self) -> Optional[Path]:
        return self.exporter.export_png()

    def export_pdf(self) -> Optional[Path]:
        return self.exporter.export_pdf()

    def copy_value(self) -> bool:
        return self.copier.copy(self.store.config.value)

    def _on_config_changed(self, qr_config: QRConfig) -> None:
        self._render(qr_config)
        if qr_config.value != self._last_value:
            self._last_value = qr_config.value
            self.trigger.content_changed(qr_config.value)

    def _render(self, qr_config: QRConfig) -> None:
        try:
            self.surface = self.renderer.render(qr_config)
        except ValueError as exc:
            logger.warning("QR render failed: %s", exc)
            self.surface = None
            self.state.render_error = str(exc)
        else:
            self.state.render_error = None

        for listener in self.render_listeners:
            listener(self.surface)

    def _on_result(self, result: AIResult) -> None:
        self.state.ai_result = result
        for listener in self.result_listeners:
            listener(result)

    def _on_busy(self, busy: bool) -> None:
        self.state.is_analyzing = busy
        for listener in self.busy_listeners:
            listener(busy)

    def _on_copied(self, copied: bool) -> None:
        self.state.copied = copied
        for listener in self.copied_listeners:
            listener(copied)


__all__ = ["QRStudio"]
