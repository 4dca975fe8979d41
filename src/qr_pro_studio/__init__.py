"""QR Pro Studio package."""
from __future__ import annotations

from .analysis import ContentAnalyzer
from .clipboard import CopyHelper
from .config import AppConfig, StyleConfig
from .export import Exporter
from .qr import QRCapacityError, QRCodeManager, RenderedSurface
from .state import AIResult, AppState, ConfigStore, QRConfig
from .studio import QRStudio
from .trigger import AnalysisState, AnalysisTrigger

__all__ = [
    "AppConfig",
    "StyleConfig",
    "AIResult",
    "AppState",
    "ConfigStore",
    "QRConfig",
    "ContentAnalyzer",
    "CopyHelper",
    "Exporter",
    "QRCapacityError",
    "QRCodeManager",
    "RenderedSurface",
    "QRStudio",
    "AnalysisState",
    "AnalysisTrigger",
]

__version__ = "1.0"
