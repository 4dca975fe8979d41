"""Ports between the studio core and its event-loop adapters.

The core never touches Qt directly.  Timers, background work and the
clipboard are reached through these protocols so that the debounce and copy
logic can be driven by a virtual clock in tests.
"""
from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from .state import AIResult


@runtime_checkable
class TimerHandle(Protocol):
    """A pending single-shot callback."""

    def cancel(self) -> None:
        """Prevent the callback from firing; a no-op once it has fired."""


@runtime_checkable
class Scheduler(Protocol):
    """Single-shot timers on the UI event loop."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` on the event loop after ``delay_ms`` milliseconds."""


@runtime_checkable
class AnalysisRunner(Protocol):
    """Runs a blocking analysis off the UI thread."""

    def submit(self, content: str, on_done: Callable[[AIResult], None]) -> None:
        """Analyse ``content`` and deliver the result to ``on_done`` on the UI thread."""


@runtime_checkable
class Clipboard(Protocol):
    """System clipboard."""

    def set_text(self, text: str) -> None:
        """Replace the clipboard contents; raises on failure."""


__all__ = ["TimerHandle", "Scheduler", "AnalysisRunner", "Clipboard"]
