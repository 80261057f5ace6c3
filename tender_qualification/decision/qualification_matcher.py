"""
Tender qualification matcher.
Checks a vendor profile against a tender's documents, professional
registrations, CIDB grade, experience gates and free-text requirement clauses,
and aggregates the checklist into a qualifies/missing verdict.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..config.settings import settings
from ..schemas.tender import Tender
from ..schemas.vendor import VendorProfile
from ..utils.text import split_clauses
from .clause_rules import ClauseRule, evaluate_clause
from .requirement_checks import (
    MatchContext,
    RequirementStatus,
    check_cidb,
    check_document,
    check_experience,
    check_professional,
    document_label,
)

logger = logging.getLogger(__name__)


@dataclass
class QualificationResult:
    """
    Checklist of a tender's requirements for one vendor, plus the verdict.

    qualifies and missing are None when there is no profile to check against
    or when no requirement could be checked: an unscorable tender is never
    reported as qualified.
    """

    requirements: list[RequirementStatus] = field(default_factory=list)
    qualifies: bool | None = None
    missing: list[str] | None = None

    @classmethod
    def from_requirements(cls, requirements: list[RequirementStatus], has_profile: bool) -> "QualificationResult":
        actionable = [req for req in requirements if req.actionable]
        if not has_profile or not actionable:
            return cls(requirements=requirements)

        missing = [req.name for req in actionable if req.met is False]
        return cls(requirements=requirements, qualifies=not missing, missing=missing)

    @property
    def is_scored(self) -> bool:
        return self.qualifies is not None

    def get(self, key: str) -> RequirementStatus | None:
        for requirement in self.requirements:
            if requirement.key == key:
                return requirement
        return None

    def summary(self) -> dict[str, int]:
        return {
            "total": len(self.requirements),
            "met": sum(1 for req in self.requirements if req.met is True),
            "unmet": sum(1 for req in self.requirements if req.met is False),
            "unverifiable": sum(1 for req in self.requirements if req.met is None),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirements": [req.to_dict() for req in self.requirements],
            "qualifies": self.qualifies,
            "missing": list(self.missing) if self.missing is not None else None,
        }


class QualificationMatcher:
    """
    Match tenders against vendor profiles.

    Matching is pure and deterministic; one matcher can be shared freely.
    """

    def __init__(
        self,
        clause_rules: list[ClauseRule] | None = None,
        unverifiable_note: str | None = None,
        report_class_mismatch: bool | None = None,
    ):
        """
        Initialize the matcher.

        Args:
            clause_rules: Rule chain for free-text clauses (default CLAUSE_RULES)
            unverifiable_note: Note attached to clauses no rule recognises
            report_class_mismatch: Note CIDB class differences on passing grades
        """
        self.clause_rules = clause_rules
        self.unverifiable_note = unverifiable_note or settings.qualification.unverifiable_note
        self.report_class_mismatch = (
            settings.qualification.report_class_mismatch
            if report_class_mismatch is None else report_class_mismatch
        )
        self.logger = logger

    def match(
        self,
        tender: Tender | Mapping[str, Any],
        profile: VendorProfile | Mapping[str, Any] | None = None,
    ) -> QualificationResult:
        """
        Build the qualification checklist for a tender.

        Args:
            tender: Tender model or stored record
            profile: Vendor profile model or stored record; None when signed out

        Returns:
            QualificationResult in requirement encounter order
        """
        tender = Tender.from_record(tender)
        if profile is not None:
            profile = VendorProfile.from_record(profile)

        ctx = MatchContext(
            tender=tender,
            profile=profile,
            unverifiable_note=self.unverifiable_note,
            report_class_mismatch=self.report_class_mismatch,
        )

        entries: dict[str, RequirementStatus] = {}

        for required in tender.required_docs:
            self._merge(entries, check_document(ctx, required, document_label(required)))

        for required in tender.professional_requirements:
            self._merge(entries, check_professional(ctx, required, required))

        if tender.cidb_grade:
            self._merge(entries, check_cidb(ctx, tender.cidb_grade, f"CIDB Grade {tender.cidb_grade}"))

        for clause in split_clauses(tender.requirements):
            status = evaluate_clause(ctx, clause, self.clause_rules)
            if status is not None:
                self._merge(entries, status)

        for status in check_experience(ctx):
            self._merge(entries, status)

        result = QualificationResult.from_requirements(list(entries.values()), has_profile=ctx.has_profile)
        self.logger.debug(
            f"Matched tender {tender.id or tender.title or '<unsaved>'}: "
            f"{result.summary()}, qualifies={result.qualifies}"
        )
        return result

    @staticmethod
    def _merge(entries: dict[str, RequirementStatus], status: RequirementStatus) -> None:
        """Insert by key; a later row for the same key replaces the earlier one in place."""
        entries[status.key] = status
