"""
Caller-side profile mutations that re-run the evaluator.

The evaluator only ever promotes incomplete -> draft. The helpers here cover the
other transitions performed around it: document uploads, vendor edits,
submission for review and admin review decisions.
"""
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic.alias_generators import to_camel

from ..config.settings import settings
from ..errors import InvalidStatusError, StatusTransitionError
from ..schemas.vendor import ProfileDocument, ProfileNote, ProfileStatus, ReviewInfo, VendorProfile
from .profile_evaluator import ProfileEvaluator

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_TYPE = "other"

# Keys a vendor edit may never set directly
PROTECTED_FIELDS = ("metrics", "status", "review", "notes", "_id", "id", "userId", "user_id")

REVIEWED_STATUSES = (ProfileStatus.VERIFIED, ProfileStatus.REJECTED)

_default_evaluator: ProfileEvaluator | None = None


def _evaluator(evaluator: ProfileEvaluator | None) -> ProfileEvaluator:
    global _default_evaluator
    if evaluator is not None:
        return evaluator
    if _default_evaluator is None:
        _default_evaluator = ProfileEvaluator()
    return _default_evaluator


def upsert_document(
    profile: VendorProfile | Mapping[str, Any],
    document: ProfileDocument | Mapping[str, Any],
    evaluator: ProfileEvaluator | None = None,
) -> VendorProfile:
    """
    Attach a document, replacing any existing document of the same type.

    Args:
        profile: Vendor profile model or stored record
        document: Uploaded document metadata; a missing type becomes "other"
        evaluator: Evaluator to re-run (default shared instance)

    Returns:
        Re-evaluated copy of the profile
    """
    profile = VendorProfile.from_record(profile)
    document = ProfileDocument.from_record(document)
    if not document.type:
        document = document.model_copy(update={"type": DEFAULT_DOCUMENT_TYPE})

    documents = [doc for doc in profile.documents if doc.type != document.type]
    replaced = len(documents) != len(profile.documents)
    documents.append(document)
    if replaced:
        logger.info(f"Replaced {document.type} document on profile {profile.id or '<unsaved>'}")

    return _evaluator(evaluator).apply(profile.model_copy(update={"documents": documents}))


def apply_vendor_edit(
    profile: VendorProfile | Mapping[str, Any],
    changes: Mapping[str, Any],
    evaluator: ProfileEvaluator | None = None,
    reverify: bool | None = None,
) -> VendorProfile:
    """
    Apply a vendor's own edit to their profile.

    Protected keys (metrics, status, review data, identity) in the changes are
    ignored. When re-verification is on, editing a verified or rejected
    profile sends it back to pending.

    Args:
        profile: Current vendor profile model or stored record
        changes: Edited fields in stored JSON shape
        evaluator: Evaluator to re-run (default shared instance)
        reverify: Override settings.profile.reverify_on_edit

    Returns:
        Re-evaluated copy of the profile
    """
    profile = VendorProfile.from_record(profile)
    if reverify is None:
        reverify = settings.profile.reverify_on_edit

    allowed = {
        (key if key.startswith("_") else to_camel(key)): value
        for key, value in (changes or {}).items()
        if key not in PROTECTED_FIELDS
    }
    record = profile.model_dump(by_alias=True)
    record.update(allowed)
    edited = VendorProfile.from_record(record)

    if reverify and profile.status in REVIEWED_STATUSES:
        logger.info(f"Profile {profile.id or '<unsaved>'} edited after review; resetting to pending")
        edited = edited.model_copy(update={"status": ProfileStatus.PENDING})

    return _evaluator(evaluator).apply(edited)


def submit_for_review(
    profile: VendorProfile | Mapping[str, Any],
    evaluator: ProfileEvaluator | None = None,
) -> VendorProfile:
    """Move a draft profile to pending review."""
    profile = VendorProfile.from_record(profile)
    if profile.status != ProfileStatus.DRAFT:
        raise StatusTransitionError(
            f"Only draft profiles can be submitted for review (status is {profile.status.value})"
        )
    return _evaluator(evaluator).apply(profile.model_copy(update={"status": ProfileStatus.PENDING}))


def set_review_status(
    profile: VendorProfile | Mapping[str, Any],
    status: str,
    reviewer: str | None = None,
    note: str | None = None,
    evaluator: ProfileEvaluator | None = None,
    now: datetime | None = None,
) -> VendorProfile:
    """
    Record an admin review decision.

    Args:
        profile: Vendor profile model or stored record
        status: New lifecycle status
        reviewer: Identifier of the reviewing admin
        note: Optional note appended to the profile
        evaluator: Evaluator to re-run (default shared instance)
        now: Review timestamp (default current UTC time)

    Returns:
        Re-evaluated copy of the profile

    Raises:
        InvalidStatusError: If status is not a lifecycle value
    """
    if status not in ProfileStatus.values():
        raise InvalidStatusError(status, ProfileStatus.values())

    profile = VendorProfile.from_record(profile)
    now = now or datetime.now(timezone.utc)

    notes = list(profile.notes)
    if note:
        notes.append(ProfileNote(by=reviewer, text=note, created_at=now))

    reviewed = profile.model_copy(update={
        "status": ProfileStatus(status),
        "notes": notes,
        "review": ReviewInfo(last_reviewer=reviewer, last_reviewed_at=now),
    })
    logger.info(f"Profile {profile.id or '<unsaved>'} set to {status} by {reviewer or 'unknown reviewer'}")
    return _evaluator(evaluator).apply(reviewed)
