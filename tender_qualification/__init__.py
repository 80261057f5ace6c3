"""
Vendor qualification and compliance scoring engine for the tender marketplace.
"""
from .compliance import ProfileEvaluator, ProfileMetrics
from .decision import QualificationMatcher, QualificationResult
from .recommendation import SuggestionRanker

__version__ = "1.0.0"

__all__ = [
    "ProfileEvaluator",
    "ProfileMetrics",
    "QualificationMatcher",
    "QualificationResult",
    "SuggestionRanker",
]
