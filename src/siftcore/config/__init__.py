"""
Configuration models for SiftCore.
"""

from .config import (
    DEFAULT_CONTENT_SELECTORS,
    DEFAULT_NOISE_SELECTORS,
    Config,
    ExtractionSettings,
    MonitoringConfig,
    ScoringConfig,
    SelectorWeight,
    find_config_file,
    settings,
)

__all__ = [
    "Config",
    "ExtractionSettings",
    "MonitoringConfig",
    "ScoringConfig",
    "SelectorWeight",
    "DEFAULT_CONTENT_SELECTORS",
    "DEFAULT_NOISE_SELECTORS",
    "find_config_file",
    "settings",
]
