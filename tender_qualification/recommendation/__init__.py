"""
Tender suggestion module.
"""
from .suggestion_ranker import SuggestionPreferences, SuggestionRanker

__all__ = ["SuggestionRanker", "SuggestionPreferences"]
