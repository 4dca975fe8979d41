"""Configuration data structures for QR Pro Studio."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _default_export_dir() -> Path:
    downloads = Path.home() / "Downloads"
    if downloads.is_dir():
        return downloads
    return Path.cwd()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class AppConfig:
    """Static configuration options used across the application."""

    app_name: str = "QR Pro Studio"
    app_version: str = "1.0"
    analysis_debounce_ms: int = 1_500
    analysis_min_length: int = 5
    analysis_timeout_s: float = 30.0
    discard_stale_results: bool = False
    copy_feedback_ms: int = 2_000
    qr_border: int = 4
    default_size: int = 256
    gemini_model: str = "gemini-3-flash-preview"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    api_key: Optional[str] = field(default=None, repr=False)
    export_dir: Path = field(default_factory=_default_export_dir)
    pdf_page_compression: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | os.PathLike[str] | None = None) -> "AppConfig":
        """Build a configuration from the process environment.

        A ``.env`` file is loaded first when present.  Variables already set in
        the environment take precedence over the file.  A missing API key is
        not an error; the analyzer then answers with its fallback result.
        """

        load_dotenv(dotenv_path)

        config = cls()
        config.api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None
        config.gemini_model = os.getenv("GEMINI_MODEL", config.gemini_model)
        config.log_level = os.getenv("QR_STUDIO_LOG_LEVEL", config.log_level).upper()
        config.discard_stale_results = _env_flag(
            "QR_STUDIO_DISCARD_STALE", config.discard_stale_results
        )

        export_dir = os.getenv("QR_STUDIO_EXPORT_DIR")
        if export_dir:
            config.export_dir = Path(export_dir).expanduser()

        return config


@dataclass(slots=True)
class StyleConfig:
    """Simple grouping of UI styling constants."""

    bg_primary: str = "#F8FAFC"
    bg_secondary: str = "#FFFFFF"
    bg_tertiary: str = "#F1F5F9"
    fg_primary: str = "#334155"
    fg_secondary: str = "#1E293B"
    fg_subtle: str = "#94A3B8"
    accent_primary: str = "#2563EB"
    accent_secondary: str = "#1E293B"
    warning: str = "#9F1239"
    warning_bg: str = "#FFF1F2"
    success: str = "#065F46"
    success_bg: str = "#ECFDF5"
    info: str = "#1D4ED8"
    info_bg: str = "#EFF6FF"
    border: str = "#E2E8F0"
    font_family: str = "Segoe UI, Noto Sans Bengali, sans-serif"
    font_size: int = 14
    font_mono: str = "Courier New, monospace"


__all__ = ["AppConfig", "StyleConfig"]
