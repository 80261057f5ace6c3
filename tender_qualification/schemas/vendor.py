"""Pydantic schemas for vendor compliance profiles."""
import logging
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..utils.constants import CIDB_BODY
from ..utils.text import normalize
from .base import (
    Flag,
    Identifier,
    OptionalNumber,
    RawNumber,
    RecordModel,
    Text,
    TextList,
    Timestamp,
    mapping_list,
    nested,
)

logger = logging.getLogger(__name__)


class ProfileStatus(str, Enum):
    """Vendor profile lifecycle."""
    INCOMPLETE = "incomplete"
    DRAFT = "draft"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    @classmethod
    def parse(cls, value: Any) -> "ProfileStatus | None":
        """Read a stored status, ignoring case and surrounding spaces; None if unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() in cls.values():
            return cls(value.strip().lower())
        return None


class Address(RecordModel):
    street: Text = None
    city: Text = None
    postal_code: Text = None


class Director(RecordModel):
    name: Text = None
    id_number: Text = None
    role: Text = None


class ProfileDocument(RecordModel):
    """Metadata for an uploaded compliance document (bytes live elsewhere)."""
    type: Text = None
    filename: Text = None
    url: Text = None
    mime_type: Text = None
    size: OptionalNumber = None
    uploaded_at: Timestamp = None
    expiry_date: Timestamp = None
    verified: Flag = False


class ProfessionalRegistration(RecordModel):
    body: Text = None
    registration_number: Text = None
    grade: Text = None
    expiry: Timestamp = None
    verified: Flag = False


class ProfileNote(RecordModel):
    by: Identifier = None
    text: Text = None
    created_at: Timestamp = None


class ReviewInfo(RecordModel):
    last_reviewer: Identifier = None
    last_reviewed_at: Timestamp = None


class ProfileMetrics(RecordModel):
    """
    Derived completeness/compliance snapshot of a vendor profile.

    Always built fresh by the profile evaluator; never patched field by field.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    completeness: float = Field(default=0.0, ge=0.0, le=1.0)
    document_coverage: float = Field(default=0.0, ge=0.0, le=1.0)
    missing_fields: tuple[str, ...] = ()
    missing_docs: tuple[str, ...] = ()
    missing_registrations: tuple[str, ...] = ()
    risk_flags: tuple[str, ...] = ()
    experience_years: int | float = 0
    projects_completed: int | float = 0
    professional_bodies: int = 0
    last_evaluation: datetime | None = None


def _to_metrics(value: Any) -> ProfileMetrics | None:
    if isinstance(value, ProfileMetrics):
        return value
    if isinstance(value, Mapping):
        try:
            return ProfileMetrics.model_validate(dict(value))
        except ValidationError as e:
            logger.warning(f"Dropping invalid stored metrics: {e}")
            return None
    return None


def _to_profile_status(value: Any) -> ProfileStatus:
    status = ProfileStatus.parse(value)
    if status is not None:
        return status
    if value is not None:
        logger.warning(f"Unknown profile status {value!r}, treating as incomplete")
    return ProfileStatus.INCOMPLETE


class VendorProfile(RecordModel):
    """A bidder's compliance and capability record."""

    id: Identifier = Field(default=None, alias="_id")
    user_id: Identifier = None

    # Company details
    company_name: Text = None
    trading_name: Text = None
    registration_number: Text = None
    vat_number: Text = None
    csd_number: Text = None
    bbbee_level: Text = None

    # Contact info
    address: nested(Address) = Field(default_factory=Address)
    phone: Text = None

    directors: mapping_list(Director) = Field(default_factory=list)
    documents: mapping_list(ProfileDocument) = Field(default_factory=list)
    professional_registrations: mapping_list(ProfessionalRegistration) = Field(default_factory=list)

    # Experience & capabilities; raw values kept as supplied
    years_experience: RawNumber = None
    completed_projects: RawNumber = None
    core_capabilities: TextList = Field(default_factory=list)
    industries_served: TextList = Field(default_factory=list)

    status: Annotated[ProfileStatus, BeforeValidator(_to_profile_status)] = ProfileStatus.INCOMPLETE
    metrics: Annotated[ProfileMetrics | None, BeforeValidator(_to_metrics)] = None

    notes: mapping_list(ProfileNote) = Field(default_factory=list)
    review: nested(ReviewInfo) = Field(default_factory=ReviewInfo)

    def document_types(self) -> list[str]:
        """Lower-cased document types in upload order."""
        return [(doc.type or "").lower() for doc in self.documents]

    def registration_bodies(self) -> list[str]:
        """Trimmed, non-blank professional body names."""
        return [
            reg.body.strip()
            for reg in self.professional_registrations
            if isinstance(reg.body, str) and reg.body.strip()
        ]

    def cidb_registration(self) -> ProfessionalRegistration | None:
        """First registration with the CIDB body, if any."""
        for reg in self.professional_registrations:
            if CIDB_BODY in normalize(reg.body):
                return reg
        return None
