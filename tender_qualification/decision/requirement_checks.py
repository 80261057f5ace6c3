"""
Per-requirement checks shared by the structured and free-text matching steps.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..schemas.tender import Tender
from ..schemas.vendor import VendorProfile
from ..utils.constants import DOCUMENT_ALIASES, DOCUMENT_LABELS, PROFESSIONAL_BODY_KEYWORDS
from ..utils.text import coerce_number, format_number, fuzzy_match, humanize_key, loose_contains, normalize
from .cidb import compare_grades


class RequirementType(str, Enum):
    """Kinds of tender requirement."""
    DOCUMENT = "document"
    PROFESSIONAL = "professional"
    CIDB = "cidb"
    TEXT = "text"
    EXPERIENCE = "experience"


@dataclass
class RequirementStatus:
    """
    One row of a qualification checklist.

    met is True/False when the requirement was checked, None when it cannot be
    checked automatically (no profile, or an unrecognised clause).
    """

    key: str
    name: str
    type: RequirementType
    met: bool | None
    note: str | None = None

    @property
    def actionable(self) -> bool:
        return self.met is not None

    def to_dict(self) -> dict[str, Any]:
        data = {"key": self.key, "name": self.name, "met": self.met, "type": self.type.value}
        if self.note:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class MatchContext:
    """Inputs shared by every check while matching one tender."""
    tender: Tender
    profile: VendorProfile | None
    unverifiable_note: str = "Cannot be verified automatically"
    report_class_mismatch: bool = True

    @property
    def has_profile(self) -> bool:
        return self.profile is not None


def document_key(raw: Any) -> str:
    """Requirement key for a document type, folding known aliases."""
    normalized = normalize(raw)
    return DOCUMENT_ALIASES.get(normalized, normalized)


def document_label(raw: Any) -> str:
    return DOCUMENT_LABELS.get(normalize(raw)) or humanize_key(raw)


def professional_key(raw: Any) -> str:
    """Requirement key for a professional body, preferring a known body keyword."""
    lowered = str(raw or "").lower()
    for keyword in PROFESSIONAL_BODY_KEYWORDS:
        if re.search(rf"\b{keyword}\b", lowered):
            return keyword
    return normalize(raw)


def check_document(ctx: MatchContext, required: Any, name: str) -> RequirementStatus:
    key = document_key(required)
    met = None
    if ctx.has_profile:
        met = any(
            fuzzy_match(doc.type, required) or fuzzy_match(doc.type, key)
            for doc in ctx.profile.documents
        )
    return RequirementStatus(key=f"doc-{key}", name=name, type=RequirementType.DOCUMENT, met=met)


def check_professional(ctx: MatchContext, required: Any, name: str) -> RequirementStatus:
    key = professional_key(required)
    met = None
    if ctx.has_profile:
        met = any(loose_contains(body, required) for body in ctx.profile.registration_bodies())
    return RequirementStatus(key=f"prof-{key}", name=name, type=RequirementType.PROFESSIONAL, met=met)


def check_cidb(ctx: MatchContext, required_grade: Any, name: str) -> RequirementStatus:
    if not ctx.has_profile:
        return RequirementStatus(key="cidb", name=name, type=RequirementType.CIDB, met=None)

    registration = ctx.profile.cidb_registration()
    met, note = compare_grades(
        required_grade,
        registration.grade if registration else None,
        has_registration=registration is not None,
        report_class_mismatch=ctx.report_class_mismatch,
    )
    return RequirementStatus(key="cidb", name=name, type=RequirementType.CIDB, met=met, note=note)


def check_experience(ctx: MatchContext) -> list[RequirementStatus]:
    """Minimum years-of-experience and completed-project gates."""
    gates = [
        ("experience-years", ctx.tender.min_years_experience, "Experience: need {}+ years",
         "years_experience", "You have {} years"),
        ("experience-projects", ctx.tender.min_completed_projects, "Projects: need {}+ similar",
         "completed_projects", "You have {} completed projects"),
    ]

    statuses = []
    for key, minimum, label, field, shortfall in gates:
        if minimum is None or minimum <= 0:
            continue
        met, note = None, None
        if ctx.has_profile:
            actual = coerce_number(getattr(ctx.profile, field))
            met = actual >= minimum
            note = None if met else shortfall.format(format_number(actual))
        statuses.append(RequirementStatus(
            key=key,
            name=label.format(format_number(minimum)),
            type=RequirementType.EXPERIENCE,
            met=met,
            note=note,
        ))
    return statuses
