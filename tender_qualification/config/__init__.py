"""
Configuration module for logging and engine settings.
"""
from .logging_config import get_logger, reset_logging, setup_logging
from .settings import (
    ProfileSettings,
    QualificationSettings,
    Settings,
    SuggestionSettings,
    settings,
)

__all__ = [
    "settings",
    "Settings",
    "ProfileSettings",
    "QualificationSettings",
    "SuggestionSettings",
    "setup_logging",
    "get_logger",
    "reset_logging",
]
