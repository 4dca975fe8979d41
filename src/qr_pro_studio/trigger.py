"""Debounced trigger for content analysis."""
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Optional

from .config import AppConfig
from .ports import AnalysisRunner, Scheduler, TimerHandle
from .state import AIResult

logger = logging.getLogger(__name__)


class AnalysisState(Enum):
    IDLE = auto()
    SCHEDULED = auto()
    RUNNING = auto()


class TriggerEvent(Enum):
    EDIT = auto()
    FIRE = auto()
    SKIP = auto()
    RESUME = auto()
    DONE = auto()


_TRANSITIONS = {
    AnalysisState.IDLE: {
        TriggerEvent.EDIT: AnalysisState.SCHEDULED,
    },
    AnalysisState.SCHEDULED: {
        TriggerEvent.EDIT: AnalysisState.SCHEDULED,
        TriggerEvent.FIRE: AnalysisState.RUNNING,
        TriggerEvent.SKIP: AnalysisState.IDLE,
        # Timer skipped while an earlier call is still in flight.
        TriggerEvent.RESUME: AnalysisState.RUNNING,
    },
    AnalysisState.RUNNING: {
        TriggerEvent.EDIT: AnalysisState.SCHEDULED,
        TriggerEvent.DONE: AnalysisState.IDLE,
    },
}


class TriggerStateMachine:
    def __init__(self):
        self.state = AnalysisState.IDLE

    def transition(self, event: TriggerEvent) -> AnalysisState:
        next_state = _TRANSITIONS.get(self.state, {}).get(event, self.state)
        if next_state == self.state and event not in _TRANSITIONS.get(self.state, {}):
            logger.warning(
                "Invalid trigger transition: %s --%s--> %s", self.state, event, next_state
            )
        self.state = next_state
        return self.state


class AnalysisTrigger:
    """Coalesce content edits into at most one analysis per settled period.

    Every edit cancels the pending timer and arms a new one, so at most one
    timer is pending at any time.  When the timer fires, the content captured
    at edit time is analysed if it is long enough.  Calls already handed to
    the runner are never cancelled; with overlapping calls the last one to
    complete is published unless ``discard_stale_results`` is set, in which
    case results from calls older than the newest issued call are dropped.
    """

    def __init__(
        self,
        config: AppConfig,
        scheduler: Scheduler,
        runner: AnalysisRunner,
        on_result: Callable[[AIResult], None],
        on_busy: Optional[Callable[[bool], None]] = None,
    ):
        self._config = config
        self._scheduler = scheduler
        self._runner = runner
        self._on_result = on_result
        self._on_busy = on_busy
        self._machine = TriggerStateMachine()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._latest_issued = 0
        self._in_flight = 0

    @property
    def state(self) -> AnalysisState:
        return self._machine.state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def is_analyzing(self) -> bool:
        return self._in_flight > 0

    def qualifies(self, value: str) -> bool:
        """Return ``True`` if ``value`` is worth sending for analysis."""

        return len(value) > self._config.analysis_min_length and bool(value.strip())

    def content_changed(self, value: str) -> None:
        self._cancel_timer()
        self._generation += 1
        generation = self._generation
        self._timer = self._scheduler.call_later(
            self._config.analysis_debounce_ms,
            lambda: self._on_timer(generation, value),
        )
        self._machine.transition(TriggerEvent.EDIT)
        logger.debug("Analysis scheduled for generation %d", generation)

    def shutdown(self) -> None:
        """Cancel the pending timer; in-flight calls still complete."""

        if self._timer is not None:
            self._cancel_timer()
            self._settle_skipped_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _settle_skipped_timer(self) -> None:
        if self._in_flight:
            self._machine.transition(TriggerEvent.RESUME)
        else:
            self._machine.transition(TriggerEvent.SKIP)

    def _on_timer(self, generation: int, value: str) -> None:
        if generation != self._generation:
            return
        self._timer = None

        if not self.qualifies(value):
            logger.debug(
                "Content too short for analysis (%d chars), generation %d skipped",
                len(value),
                generation,
            )
            self._settle_skipped_timer()
            return

        self._machine.transition(TriggerEvent.FIRE)
        self._in_flight += 1
        self._latest_issued = generation
        if self._in_flight == 1 and self._on_busy is not None:
            self._on_busy(True)

        logger.debug("Analysis started for generation %d", generation)
        self._runner.submit(value, lambda result: self._on_done(generation, result))

    def _on_done(self, generation: int, result: AIResult) -> None:
        self._in_flight -= 1

        if generation < self._latest_issued and self._config.discard_stale_results:
            logger.info(
                "Dropping analysis result for generation %d; generation %d is newer",
                generation,
                self._latest_issued,
            )
        else:
            self._on_result(result)

        if self._in_flight == 0:
            if self._on_busy is not None:
                self._on_busy(False)
            if self._machine.state is AnalysisState.RUNNING:
                self._machine.transition(TriggerEvent.DONE)


__all__ = ["AnalysisState", "TriggerEvent", "TriggerStateMachine", "AnalysisTrigger"]
