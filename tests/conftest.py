from __future__ import annotations

from typing import Callable, List, Tuple

import pytest

from qr_pro_studio.config import AppConfig
from qr_pro_studio.state import AIResult


class ManualTimer:
    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler; timers fire only when time is advanced."""

    def __init__(self):
        self.now_ms = 0
        self.timers: List[ManualTimer] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now_ms + delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, delta_ms: int) -> None:
        target = self.now_ms + delta_ms
        while True:
            due = [t for t in self.pending if t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due_ms)
            self.now_ms = timer.due_ms
            timer.fired = True
            timer.callback()
        self.now_ms = target


class RecordingRunner:
    """Runner that holds calls until the test completes them."""

    def __init__(self):
        self.calls: List[Tuple[str, Callable[[AIResult], None]]] = []

    @property
    def contents(self) -> List[str]:
        return [content for content, _ in self.calls]

    def submit(self, content: str, on_done: Callable[[AIResult], None]) -> None:
        self.calls.append((content, on_done))

    def complete(self, index: int, result: AIResult) -> None:
        _, on_done = self.calls[index]
        on_done(result)


class ImmediateRunner:
    """Runner that answers synchronously with a fixed result."""

    def __init__(self, result: AIResult):
        self.result = result
        self.contents: List[str] = []

    def submit(self, content: str, on_done: Callable[[AIResult], None]) -> None:
        self.contents.append(content)
        on_done(self.result)


class FakeClipboard:
    def __init__(self, fail: bool = False):
        self.text: str | None = None
        self.fail = fail

    def set_text(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("clipboard unavailable")
        self.text = text


@pytest.fixture()
def config(tmp_path) -> AppConfig:
    return AppConfig(api_key="test-key", export_dir=tmp_path / "exports")


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def clipboard() -> FakeClipboard:
    return FakeClipboard()
