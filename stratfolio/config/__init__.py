"""Runtime configuration."""

from stratfolio.config.settings import (
    DEFAULT_SETTINGS,
    AnalyzerSettings,
    load_settings,
)

__all__ = ["AnalyzerSettings", "DEFAULT_SETTINGS", "load_settings"]
