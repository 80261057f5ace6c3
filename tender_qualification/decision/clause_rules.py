"""
Rule chain for classifying free-text requirement clauses.

Each rule pairs a matcher (clause -> classification key or None) with a
builder that turns the clause into a checklist row. Rules are tried in list
order and the first match wins; the last rule accepts everything.
"""
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..utils.constants import CIDB_BODY, DOCUMENT_KEYWORDS, PROFESSIONAL_BODY_KEYWORDS
from ..utils.text import normalize
from .cidb import grade_from_clause
from .requirement_checks import (
    MatchContext,
    RequirementStatus,
    RequirementType,
    check_cidb,
    check_document,
    check_professional,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClauseRule:
    name: str
    match: Callable[[str], str | None]
    build: Callable[[MatchContext, str, str], RequirementStatus]


def match_cidb(clause: str) -> str | None:
    return CIDB_BODY if CIDB_BODY in clause.lower() else None


def build_cidb(ctx: MatchContext, clause: str, key: str) -> RequirementStatus:
    # A grade written in the clause wins over the structured field
    grade = grade_from_clause(clause) or ctx.tender.cidb_grade
    return check_cidb(ctx, grade, clause)


def match_document(clause: str) -> str | None:
    lowered = clause.lower()
    for pattern, key in DOCUMENT_KEYWORDS:
        if re.search(pattern, lowered):
            return key
    return None


def build_document(ctx: MatchContext, clause: str, key: str) -> RequirementStatus:
    return check_document(ctx, key, clause)


def match_professional(clause: str) -> str | None:
    lowered = clause.lower()
    for keyword in PROFESSIONAL_BODY_KEYWORDS:
        if re.search(rf"\b{keyword}\b", lowered):
            return keyword
    return None


def build_professional(ctx: MatchContext, clause: str, key: str) -> RequirementStatus:
    return check_professional(ctx, key, clause)


def match_any(clause: str) -> str | None:
    return normalize(clause) or clause


def build_unverified(ctx: MatchContext, clause: str, key: str) -> RequirementStatus:
    logger.debug(f"Clause not recognised, reporting as unverifiable: {clause!r}")
    return RequirementStatus(
        key=f"text-{key}",
        name=clause,
        type=RequirementType.TEXT,
        met=None,
        note=ctx.unverifiable_note,
    )


CLAUSE_RULES: list[ClauseRule] = [
    ClauseRule("cidb", match_cidb, build_cidb),
    ClauseRule("document", match_document, build_document),
    ClauseRule("professional", match_professional, build_professional),
    ClauseRule("unclassified", match_any, build_unverified),
]


def classify_clause(clause: str, rules: list[ClauseRule] | None = None) -> tuple[ClauseRule, str] | None:
    """
    Find the first rule that accepts a clause.

    Returns:
        (rule, classification key), or None if no rule accepts it
    """
    for rule in rules if rules is not None else CLAUSE_RULES:
        key = rule.match(clause)
        if key:
            return rule, key
    return None


def evaluate_clause(
    ctx: MatchContext,
    clause: str,
    rules: list[ClauseRule] | None = None,
) -> RequirementStatus | None:
    """Turn one clause into a checklist row using the first matching rule."""
    classified = classify_clause(clause, rules)
    if classified is None:
        return None
    rule, key = classified
    return rule.build(ctx, clause, key)
