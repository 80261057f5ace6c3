"""
Pytest configuration and shared fixtures for qualification engine tests.

Provides:
- A fixed evaluation clock
- Vendor profile record factories (stored camelCase shape)
- Tender and application record factories
"""
import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tender_qualification.compliance import ProfileEvaluator
from tender_qualification.config.logging_config import reset_logging

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Engine Fixtures
# =============================================================================

@pytest.fixture
def fixed_now() -> datetime:
    """The fixed evaluation instant used across tests."""
    return FIXED_NOW


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def evaluator(fixed_clock) -> ProfileEvaluator:
    """Profile evaluator with the default rules and a fixed clock."""
    return ProfileEvaluator(clock=fixed_clock)


@pytest.fixture
def clean_logging():
    """Reset package logging before and after a test."""
    reset_logging()
    yield
    reset_logging()


# =============================================================================
# Sample Data Factories
# =============================================================================

@pytest.fixture
def complete_profile_data() -> dict[str, Any]:
    """A vendor profile with every required field and document present."""
    return {
        "_id": "vp-1",
        "userId": "user-1",
        "companyName": "Acme Civils (Pty) Ltd",
        "registrationNumber": "2015/123456/07",
        "vatNumber": "4123456789",
        "csdNumber": "MAAA0123456",
        "bbbeeLevel": "1",
        "phone": "011 555 0100",
        "address": {"street": "12 Main Road", "city": "Johannesburg", "postalCode": "2001"},
        "directors": [{"name": "T. Mokoena", "idNumber": "8001015009087", "role": "CEO"}],
        "documents": [
            {"type": "cipc", "filename": "cipc.pdf"},
            {"type": "bbbee", "filename": "bbbee.pdf"},
            {"type": "csd", "filename": "csd.pdf"},
        ],
        "professionalRegistrations": [
            {"body": "CIDB", "registrationNumber": "CIDB-001", "grade": "7GB"},
            {"body": "ECSA", "registrationNumber": "ECSA-777"},
        ],
        "yearsExperience": 8,
        "completedProjects": 14,
        "coreCapabilities": ["Roads", "Stormwater"],
        "status": "incomplete",
    }


@pytest.fixture
def minimal_profile_data() -> dict[str, Any]:
    """A freshly created profile with only the company basics filled in."""
    return {
        "_id": "vp-2",
        "companyName": "Acme",
        "registrationNumber": "123",
        "status": "incomplete",
    }


@pytest.fixture
def make_profile(complete_profile_data) -> Callable[..., dict[str, Any]]:
    """Factory for profile records based on the complete profile."""
    def _make(**overrides: Any) -> dict[str, Any]:
        record = dict(complete_profile_data)
        record.update(overrides)
        return record
    return _make


@pytest.fixture
def make_tender() -> Callable[..., dict[str, Any]]:
    """Factory for approved tender records with deadlines relative to FIXED_NOW."""
    def _make(
        tender_id: str = "t-1",
        category: str | None = "Construction",
        sector: str | None = "Public Works",
        days_to_deadline: int | None = 10,
        budget: tuple[float | None, float | None] = (100_000, 200_000),
        required_docs: list[str] | None = None,
        status: str = "approved",
        **extra: Any,
    ) -> dict[str, Any]:
        record = {
            "_id": tender_id,
            "title": f"Tender {tender_id}",
            "category": category,
            "sector": sector,
            "budgetMin": budget[0],
            "budgetMax": budget[1],
            "deadline": (
                (FIXED_NOW + timedelta(days=days_to_deadline)).isoformat()
                if days_to_deadline is not None else None
            ),
            "requiredDocs": required_docs or [],
            "status": status,
        }
        record.update(extra)
        return record
    return _make


@pytest.fixture
def make_application() -> Callable[..., dict[str, Any]]:
    """Factory for application records whose tender reference is populated."""
    def _make(tender: Any, days_ago: int = 1, application_id: str = "app-1") -> dict[str, Any]:
        return {
            "_id": application_id,
            "userId": "user-1",
            "tender": tender,
            "status": "submitted",
            "createdAt": (FIXED_NOW - timedelta(days=days_ago)).isoformat(),
        }
    return _make
