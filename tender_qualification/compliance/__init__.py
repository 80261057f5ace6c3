"""
Compliance module for vendor profile evaluation and lifecycle helpers.
"""
from ..schemas.vendor import ProfileMetrics
from .profile_evaluator import EvaluationOutcome, ProfileEvaluator
from .profile_lifecycle import (
    apply_vendor_edit,
    set_review_status,
    submit_for_review,
    upsert_document,
)

__all__ = [
    "ProfileEvaluator",
    "EvaluationOutcome",
    "ProfileMetrics",
    "upsert_document",
    "apply_vendor_edit",
    "submit_for_review",
    "set_review_status",
]
