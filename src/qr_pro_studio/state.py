"""Runtime state containers used by QR Pro Studio."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Mapping, Optional

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = ("L", "M", "Q", "H")
"""Error-correction levels in ascending order of redundancy."""

ERROR_CORRECTION_LABELS = {
    "L": "Low (7%)",
    "M": "Medium (15%)",
    "Q": "Quartile (25%)",
    "H": "High (30%)",
}


@dataclass(frozen=True, slots=True)
class QRConfig:
    """Immutable snapshot of the QR content and its rendering options."""

    value: str = "https://google.com"
    fg_color: str = "#000000"
    bg_color: str = "#ffffff"
    size: int = 256
    level: str = "M"
    include_margin: bool = True

    @property
    def render_value(self) -> str:
        """Return the payload handed to the encoder.

        An empty payload cannot be encoded, so a single space stands in for it.
        """

        return self.value or " "


@dataclass(frozen=True, slots=True)
class AIResult:
    """Outcome of one content analysis."""

    suggestion: str
    is_safe: bool

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AIResult":
        """Build a result from the ``{"suggestion", "isSafe"}`` wire shape."""

        suggestion = data.get("suggestion")
        is_safe = data.get("isSafe")
        if not isinstance(suggestion, str) or not isinstance(is_safe, bool):
            raise ValueError(f"Unexpected analysis payload: {dict(data)!r}")
        return cls(suggestion=suggestion, is_safe=is_safe)


ConfigListener = Callable[[QRConfig], None]


class ConfigStore:
    """Single source of truth for the current :class:`QRConfig`.

    Every update swaps in a new frozen snapshot and notifies subscribers
    synchronously.
    """

    def __init__(self, initial: QRConfig | None = None):
        self._config = initial if initial is not None else QRConfig()
        self._listeners: List[ConfigListener] = []

    @property
    def config(self) -> QRConfig:
        return self._config

    def subscribe(self, listener: ConfigListener) -> None:
        self._listeners.append(listener)

    def set_value(self, value: str) -> QRConfig:
        return self._update(value=value)

    def set_fg_color(self, color: str) -> QRConfig:
        return self._update(fg_color=color)

    def set_bg_color(self, color: str) -> QRConfig:
        return self._update(bg_color=color)

    def set_size(self, size: int) -> QRConfig:
        return self._update(size=size)

    def set_level(self, level: str) -> QRConfig:
        if level not in ERROR_CORRECTION_LEVELS:
            raise ValueError(
                f"Error correction level must be one of: {', '.join(ERROR_CORRECTION_LEVELS)}"
            )
        return self._update(level=level)

    def set_include_margin(self, include_margin: bool) -> QRConfig:
        return self._update(include_margin=bool(include_margin))

    def _update(self, **changes: Any) -> QRConfig:
        self._config = replace(self._config, **changes)
        logger.debug("Config updated: %s", ", ".join(sorted(changes)))
        for listener in list(self._listeners):
            listener(self._config)
        return self._config


@dataclass(slots=True)
class AppState:
    """Mutable state shared between UI components."""

    ai_result: Optional[AIResult] = None
    is_analyzing: bool = False
    copied: bool = False
    render_error: Optional[str] = None


__all__ = [
    "ERROR_CORRECTION_LEVELS",
    "ERROR_CORRECTION_LABELS",
    "QRConfig",
    "AIResult",
    "ConfigStore",
    "AppState",
]
