"""
Decision module for tender qualification matching.
"""
from .cidb import CidbGrade, compare_grades, grade_from_clause
from .clause_rules import CLAUSE_RULES, ClauseRule, classify_clause, evaluate_clause
from .qualification_matcher import QualificationMatcher, QualificationResult
from .requirement_checks import MatchContext, RequirementStatus, RequirementType

__all__ = [
    "QualificationMatcher",
    "QualificationResult",
    "RequirementStatus",
    "RequirementType",
    "MatchContext",
    "CidbGrade",
    "compare_grades",
    "grade_from_clause",
    "ClauseRule",
    "CLAUSE_RULES",
    "classify_clause",
    "evaluate_clause",
]
