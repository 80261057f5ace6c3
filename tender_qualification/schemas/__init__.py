"""
Record schemas for vendor profiles, tenders and applications.
"""
from .application import Application
from .tender import EvaluationCriterion, Tender, TenderStatus
from .vendor import (
    Address,
    Director,
    ProfessionalRegistration,
    ProfileDocument,
    ProfileMetrics,
    ProfileNote,
    ProfileStatus,
    ReviewInfo,
    VendorProfile,
)

__all__ = [
    "Address",
    "Application",
    "Director",
    "EvaluationCriterion",
    "ProfessionalRegistration",
    "ProfileDocument",
    "ProfileMetrics",
    "ProfileNote",
    "ProfileStatus",
    "ReviewInfo",
    "Tender",
    "TenderStatus",
    "VendorProfile",
]
