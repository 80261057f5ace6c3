"""
Shared utilities for the qualification engine.
"""
from .config_loader import load_or_create_config
from .constants import (
    DOCUMENT_ALIASES,
    DOCUMENT_KEYWORDS,
    DOCUMENT_LABELS,
    PROFESSIONAL_BODY_KEYWORDS,
    ProfileDefaults,
    RiskFlag,
    SuggestionDefaults,
)
from .text import (
    coerce_number,
    format_number,
    fuzzy_match,
    humanize_key,
    loose_contains,
    normalize,
    split_clauses,
)

__all__ = [
    # Config
    "load_or_create_config",
    # Text
    "normalize",
    "fuzzy_match",
    "loose_contains",
    "humanize_key",
    "split_clauses",
    "coerce_number",
    "format_number",
    # Constants
    "ProfileDefaults",
    "SuggestionDefaults",
    "RiskFlag",
    "DOCUMENT_LABELS",
    "DOCUMENT_ALIASES",
    "DOCUMENT_KEYWORDS",
    "PROFESSIONAL_BODY_KEYWORDS",
]
