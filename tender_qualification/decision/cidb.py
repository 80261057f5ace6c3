"""
CIDB grade parsing and comparison.

A CIDB grade is written as <level><class>, e.g. "7GB": level 7 in the
general building class. Vendors qualify on level; a class difference is
reported but does not fail the requirement.
"""
import re
from dataclasses import dataclass
from typing import Any

from ..utils.constants import CIDB_CLASS_CODES

# Digits, optional space, letters: "7GB", "7 GB", "Grade 7GB"
GRADE_PATTERN = re.compile(r"(\d+)\s*([a-zA-Z]+)")

# Grades embedded in prose must use a known class code, so "7 or" is not a grade
CLAUSE_GRADE_PATTERN = re.compile(
    rf"\b(\d{{1,2}})\s*({'|'.join(CIDB_CLASS_CODES)})\b",
    re.IGNORECASE,
)

NO_REGISTRATION_NOTE = "No CIDB registration found"
INVALID_GRADE_NOTE = "CIDB grade is missing or invalid"


@dataclass(frozen=True)
class CidbGrade:
    level: int = 0
    grade_class: str = ""

    @classmethod
    def parse(cls, text: Any, pattern: re.Pattern = GRADE_PATTERN) -> "CidbGrade":
        """Parse a grade string; unparseable input gives level 0."""
        match = pattern.search(str(text or ""))
        if not match:
            return cls()
        return cls(level=int(match.group(1)), grade_class=match.group(2).upper())

    @property
    def is_valid(self) -> bool:
        return self.level > 0

    def __str__(self) -> str:
        return f"{self.level}{self.grade_class}" if self.is_valid else ""


def grade_from_clause(clause: str) -> str | None:
    """Extract a grade written inside a free-text clause, e.g. "CIDB 3CE minimum"."""
    grade = CidbGrade.parse(clause, CLAUSE_GRADE_PATTERN)
    return str(grade) if grade.is_valid else None


def compare_grades(
    required: Any,
    vendor_grade: Any,
    has_registration: bool,
    report_class_mismatch: bool = True,
) -> tuple[bool, str | None]:
    """
    Decide whether a vendor's CIDB grade satisfies a required grade.

    Args:
        required: Required grade text (may be unparseable)
        vendor_grade: Grade on the vendor's CIDB registration
        has_registration: Whether the vendor holds a CIDB registration at all
        report_class_mismatch: Attach a note when levels pass but classes differ

    Returns:
        (met, note) tuple
    """
    if not has_registration:
        return False, NO_REGISTRATION_NOTE

    required_grade = CidbGrade.parse(required)
    if not required_grade.is_valid:
        return True, None

    vendor = CidbGrade.parse(vendor_grade)
    if not vendor.is_valid:
        return False, INVALID_GRADE_NOTE

    if vendor.level >= required_grade.level:
        if report_class_mismatch and required_grade.grade_class != vendor.grade_class:
            return True, f"Different class: you have {vendor_grade}, tender requires {required_grade}"
        return True, None

    return False, f"Requires {required_grade}, you have {vendor_grade}"
