"""Copy-to-clipboard helper with transient feedback."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import AppConfig
from .ports import Clipboard, Scheduler

logger = logging.getLogger(__name__)


class CopyHelper:
    """Copy text and raise a ``copied`` flag for a short while.

    Revert timers from earlier copies are left running; each one only clears
    the flag when no newer copy has happened since it was armed.
    """

    def __init__(
        self,
        config: AppConfig,
        clipboard: Clipboard,
        scheduler: Scheduler,
        on_change: Optional[Callable[[bool], None]] = None,
    ):
        self._config = config
        self._clipboard = clipboard
        self._scheduler = scheduler
        self._on_change = on_change
        self._copies = 0
        self.copied = False

    def copy(self, text: str) -> bool:
        try:
            self._clipboard.set_text(text)
        except Exception as exc:
            logger.error("Copy to clipboard failed: %s", exc)
            return False

        self._copies += 1
        copy_id = self._copies
        self._set_copied(True)
        self._scheduler.call_later(self._config.copy_feedback_ms, lambda: self._revert(copy_id))
        return True

    def _revert(self, copy_id: int) -> None:
        if copy_id == self._copies:
            self._set_copied(False)

    def _set_copied(self, copied: bool) -> None:
        changed = copied != self.copied
        self.copied = copied
        if changed and self._on_change is not None:
            self._on_change(copied)


__all__ = ["CopyHelper"]
