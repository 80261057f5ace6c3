"""
Text and value normalization helpers shared by the evaluator and matcher.
"""
import math
import re
from typing import Any

from .constants import CLAUSE_BULLETS

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_CLAUSE_SPLIT = re.compile(rf"[\r\n{CLAUSE_BULLETS}]+")
_LEADING_MARKER = re.compile(rf"^(?:[-*–—{CLAUSE_BULLETS}]+|\(?\d+[.)](?=\s))\s*")


def normalize(value: Any) -> str:
    """
    Lowercase a label and strip every non-alphanumeric character.

    Examples:
        >>> normalize("B-BBEE")
        'bbbee'
        >>> normalize(None)
        ''
    """
    if value is None:
        return ""
    return _NON_ALNUM.sub("", str(value).lower())


def fuzzy_match(left: Any, right: Any) -> bool:
    """
    Check whether two labels are equivalent after normalization.

    Labels match when their normalized forms are equal or either contains the
    other, so "bee certificate", "B-BBEE" and "bbbee" line up. Empty labels
    never match.
    """
    a = normalize(left)
    b = normalize(right)
    if not a or not b:
        return False
    return a == b or a in b or b in a


def loose_contains(left: Any, right: Any) -> bool:
    """Case-insensitive substring check in either direction, without stripping punctuation."""
    a = str(left or "").strip().lower()
    b = str(right or "").strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def humanize_key(raw: Any) -> str:
    """
    Build a display label from a raw document key.

    Args:
        raw: Key as written by the tender author (e.g. "tax_clearance")

    Returns:
        Title-cased label with separators replaced by spaces
    """
    words = re.split(r"[\s_\-]+", str(raw or "").strip())
    return " ".join(word[:1].upper() + word[1:] for word in words if word)


def split_clauses(text: Any) -> list[str]:
    """
    Split a free-text requirements block into individual clauses.

    Lines and bullet characters separate clauses; leading dash, bullet and
    numbering markers are trimmed and blank clauses dropped.

    Examples:
        >>> split_clauses("- CIDB 3CE minimum\\n\\n• Tax clearance")
        ['CIDB 3CE minimum', 'Tax clearance']
    """
    if not isinstance(text, str) or not text.strip():
        return []

    clauses = []
    for part in _CLAUSE_SPLIT.split(text):
        clause = _LEADING_MARKER.sub("", part.strip()).strip()
        if clause:
            clauses.append(clause)
    return clauses


def coerce_number(value: Any, default: int | float = 0) -> int | float:
    """
    Convert a raw numeric field to a number, falling back to a default.

    Integral values come back as int so snapshots read naturally.

    Examples:
        >>> coerce_number("12")
        12
        >>> coerce_number("twelve")
        0
        >>> coerce_number(None)
        0
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return int(value)

    try:
        number = float(str(value).replace(",", "").strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return default

    if math.isnan(number) or math.isinf(number):
        return default
    return int(number) if number.is_integer() else number


def format_number(value: int | float) -> str:
    """Render a number without a trailing '.0' for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
