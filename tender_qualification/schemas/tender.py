"""Pydantic schemas for tender records consumed by the matcher and ranker."""
from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from ..utils.text import format_number
from .base import (
    Identifier,
    OptionalNumber,
    RecordModel,
    Text,
    TextList,
    Timestamp,
    mapping_list,
)


class TenderStatus(str, Enum):
    """Tender approval workflow states."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CLOSED = "closed"


def _to_tender_status(value: Any) -> TenderStatus:
    if isinstance(value, TenderStatus):
        return value
    try:
        return TenderStatus(value)
    except (TypeError, ValueError):
        return TenderStatus.PENDING


class EvaluationCriterion(RecordModel):
    criterion: Text = None
    weight: OptionalNumber = None


class Tender(RecordModel):
    """A procurement opportunity with its eligibility requirements."""

    id: Identifier = Field(default=None, alias="_id")
    title: Text = None
    description: Text = None
    category: Text = None
    sector: Text = None
    location: Text = None

    budget_min: OptionalNumber = None
    budget_max: OptionalNumber = None
    deadline: Timestamp = None

    # Qualification requirements
    requirements: Text = None
    required_docs: TextList = Field(default_factory=list)
    tags: TextList = Field(default_factory=list)
    professional_requirements: TextList = Field(default_factory=list)
    min_years_experience: OptionalNumber = None
    min_completed_projects: OptionalNumber = None
    specialised_notes: Text = None
    cidb_grade: Text = None
    contract_duration: Text = None

    evaluation_criteria: mapping_list(EvaluationCriterion) = Field(default_factory=list)

    created_by: Identifier = None
    status: Annotated[TenderStatus, BeforeValidator(_to_tender_status)] = TenderStatus.PENDING
    created_at: Timestamp = None

    @property
    def budget_range(self) -> str | None:
        """Display string for the budget bounds."""
        if self.budget_min is None and self.budget_max is None:
            return None
        if self.budget_min is not None and self.budget_max is not None:
            return f"{format_number(self.budget_min)} - {format_number(self.budget_max)}"
        if self.budget_min is not None:
            return f"From {format_number(self.budget_min)}"
        return f"Up to {format_number(self.budget_max)}"

    @property
    def budget_midpoint(self) -> float | None:
        """Midpoint of the budget bounds; a missing bound equals the present one."""
        if self.budget_min is None and self.budget_max is None:
            return None
        lower = self.budget_min if self.budget_min is not None else self.budget_max
        upper = self.budget_max if self.budget_max is not None else self.budget_min
        return (lower + upper) / 2
