"""Content-safety analysis backed by the Gemini REST API."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .config import AppConfig
from .state import AIResult

logger = logging.getLogger(__name__)

FALLBACK_RESULT = AIResult(suggestion="অ্যানালাইসিস করা সম্ভব হয়নি।", is_safe=True)
"""Returned whenever the service cannot be reached or answers garbage."""

EMPTY_RESPONSE_RESULT = AIResult(suggestion="Error analyzing content", is_safe=True)
"""Returned when the service answers with an empty body."""

PROMPT_TEMPLATE = (
    'Analyze this content for a QR code: "{content}".\n'
    "Is it a safe link or text? Give a short 1-sentence suggestion or summary in Bengali.\n"
    'Return JSON format: {{ "suggestion": "string", "isSafe": boolean }}'
)


def build_prompt(content: str) -> str:
    return PROMPT_TEMPLATE.format(content=content)


def extract_text(response: Dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate in ``response``."""

    candidates = response.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


@dataclass(slots=True)
class ContentAnalyzer:
    """Ask Gemini whether QR content looks safe.

    :meth:`analyze` never raises.  Transport, HTTP, parsing and shape errors
    are logged and turned into :data:`FALLBACK_RESULT`.
    """

    config: AppConfig
    session: Optional[requests.Session] = None
    _warned_missing_key: bool = field(default=False, init=False, repr=False)

    @property
    def endpoint(self) -> str:
        base = self.config.gemini_api_base.rstrip("/")
        return f"{base}/models/{self.config.gemini_model}:generateContent"

    def is_available(self) -> bool:
        return bool(self.config.api_key)

    def analyze(self, content: str) -> AIResult:
        if not self.is_available():
            if not self._warned_missing_key:
                logger.warning("No Gemini API key configured; content analysis is disabled")
                self._warned_missing_key = True
            return FALLBACK_RESULT

        try:
            text = self._request(content)
            if not text:
                return EMPTY_RESPONSE_RESULT
            return AIResult.from_mapping(json.loads(text))
        except requests.RequestException as exc:
            logger.error("Gemini request failed: %s", exc)
            return FALLBACK_RESULT
        except Exception as exc:
            logger.error("Gemini response could not be parsed: %s", exc)
            return FALLBACK_RESULT

    def _request(self, content: str) -> str:
        body = {
            "contents": [{"parts": [{"text": build_prompt(content)}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.api_key or "",
        }
        post = self.session.post if self.session is not None else requests.post
        resp = post(
            self.endpoint,
            headers=headers,
            json=body,
            timeout=self.config.analysis_timeout_s,
        )
        resp.raise_for_status()
        return extract_text(resp.json())


__all__ = [
    "FALLBACK_RESULT",
    "EMPTY_RESPONSE_RESULT",
    "build_prompt",
    "extract_text",
    "ContentAnalyzer",
]
