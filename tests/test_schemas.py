"""
Tests for the lenient record schemas.
"""
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from tender_qualification.schemas import (
    Application,
    ProfileMetrics,
    ProfileStatus,
    Tender,
    TenderStatus,
    VendorProfile,
)
from tender_qualification.schemas import base as base_schema
from tender_qualification.schemas import vendor as vendor_schema


class TestVendorProfileSchema:

    def test_stored_record_round_trip_keys(self, complete_profile_data):
        profile = VendorProfile.from_record(complete_profile_data)
        record = profile.to_record()

        assert profile.id == "vp-1"
        assert profile.company_name == "Acme Civils (Pty) Ltd"
        assert profile.address.postal_code == "2001"
        assert record["_id"] == "vp-1"
        assert record["companyName"] == "Acme Civils (Pty) Ltd"
        assert record["address"]["postalCode"] == "2001"

    @pytest.mark.parametrize("record", [None, "vp-1", 3, ["a"]])
    def test_non_mapping_gives_empty_profile(self, record):
        profile = VendorProfile.from_record(record)
        assert profile.company_name is None
        assert profile.documents == []
        assert profile.status == ProfileStatus.INCOMPLETE

    def test_from_record_returns_same_instance(self, complete_profile_data):
        profile = VendorProfile.from_record(complete_profile_data)
        assert VendorProfile.from_record(profile) is profile

    def test_non_record_items_are_dropped(self):
        profile = VendorProfile.from_record({"documents": ["cipc", {"type": "csd"}, None], "directors": "x"})
        assert [doc.type for doc in profile.documents] == ["csd"]
        assert profile.directors == []

    def test_unknown_status_becomes_incomplete(self):
        with patch.object(vendor_schema.logger, "warning") as mock_log:
            assert VendorProfile.from_record({"status": "archived"}).status == ProfileStatus.INCOMPLETE
            mock_log.assert_called_once_with("Unknown profile status 'archived', treating as incomplete")

    def test_absent_status_is_not_logged(self):
        with patch.object(vendor_schema.logger, "warning") as mock_log:
            assert VendorProfile.from_record({}).status == ProfileStatus.INCOMPLETE
            mock_log.assert_not_called()

    @pytest.mark.parametrize("raw", ["Verified", " VERIFIED ", ProfileStatus.VERIFIED])
    def test_status_ignores_case_and_spacing(self, raw):
        assert VendorProfile.from_record({"status": raw}).status == ProfileStatus.VERIFIED

    def test_address_shape_is_tolerated(self):
        assert VendorProfile.from_record({"address": "12 Main Road"}).address.street is None

    def test_invalid_metrics_dropped(self):
        with patch.object(vendor_schema.logger, "warning") as mock_log:
            profile = VendorProfile.from_record({"companyName": "Acme", "metrics": {"completeness": 7}})
            mock_log.assert_called_once()

        assert profile.metrics is None
        assert profile.company_name == "Acme"

    def test_unreadable_record_is_logged(self):
        with patch.object(base_schema.logger, "warning") as mock_log:
            metrics = ProfileMetrics.from_record({"completeness": 7, "professionalBodies": 2})
            mock_log.assert_called_once()

        assert metrics.completeness == 0.0
        assert metrics.professional_bodies == 0
        assert mock_log.call_args[0][0].startswith("Could not read ProfileMetrics record, using an empty one:")

    def test_text_list_fields(self):
        profile = VendorProfile.from_record({"coreCapabilities": "Roads"})
        assert profile.core_capabilities == ["Roads"]

    def test_cidb_registration_lookup(self):
        profile = VendorProfile.from_record({
            "professionalRegistrations": [
                {"body": "ECSA"},
                {"body": "C.I.D.B.", "grade": "6CE"},
                {"body": "CIDB", "grade": "4GB"},
            ]
        })
        assert profile.cidb_registration().grade == "6CE"
        assert profile.registration_bodies() == ["ECSA", "C.I.D.B.", "CIDB"]

    def test_document_types_lower_cased(self):
        profile = VendorProfile.from_record({"documents": [{"type": "CIPC"}, {"filename": "x.pdf"}]})
        assert profile.document_types() == ["cipc", ""]

    def test_metrics_bounds(self):
        with pytest.raises(ValueError):
            ProfileMetrics(completeness=1.5)


class TestTenderSchema:

    def test_required_docs_string_coerced(self):
        assert Tender.from_record({"requiredDocs": "cipc"}).required_docs == ["cipc"]

    def test_required_docs_deduplicated(self):
        assert Tender.from_record({"requiredDocs": ["cipc", "cipc", " ", 5]}).required_docs == ["cipc", "5"]

    def test_numeric_id_is_text(self):
        assert Tender.from_record({"_id": 42}).id == "42"

    @pytest.mark.parametrize("raw,expected", [
        ("approved", TenderStatus.APPROVED),
        ("closed", TenderStatus.CLOSED),
        ("bogus", TenderStatus.PENDING),
        (None, TenderStatus.PENDING),
    ])
    def test_status(self, raw, expected):
        assert Tender.from_record({"status": raw}).status == expected

    @pytest.mark.parametrize("raw", [
        "2025-04-01T00:00:00Z",
        "2025-04-01T00:00:00+00:00",
        1743465600000,
    ])
    def test_deadline_formats(self, raw):
        deadline = Tender.from_record({"deadline": raw}).deadline
        assert deadline == datetime(2025, 4, 1, tzinfo=timezone.utc)

    def test_date_deadline(self):
        assert Tender.from_record({"deadline": date(2025, 4, 1)}).deadline == datetime(2025, 4, 1)

    def test_unparseable_deadline(self):
        assert Tender.from_record({"deadline": "next week"}).deadline is None

    @pytest.mark.parametrize("bounds,label,midpoint", [
        ((100_000, 200_000), "100000 - 200000", 150_000),
        ((100_000, None), "From 100000", 100_000),
        ((None, 50_000), "Up to 50000", 50_000),
        ((None, None), None, None),
    ])
    def test_budget(self, bounds, label, midpoint):
        tender = Tender.from_record({"budgetMin": bounds[0], "budgetMax": bounds[1]})
        assert tender.budget_range == label
        assert tender.budget_midpoint == midpoint

    def test_numeric_strings_in_gates(self):
        tender = Tender.from_record({"minYearsExperience": "5", "minCompletedProjects": "many"})
        assert tender.min_years_experience == 5
        assert tender.min_completed_projects is None


class TestApplicationSchema:

    def test_populated_tender(self, make_tender):
        application = Application.from_record({"tender": make_tender("t-7"), "createdAt": "2025-02-01T10:00:00Z"})
        assert application.tender.id == "t-7"
        assert application.created_at.year == 2025

    def test_tender_id_alias(self, make_tender):
        assert Application.from_record({"tenderId": make_tender("t-8")}).tender.id == "t-8"

    def test_bare_reference_has_no_tender(self):
        assert Application.from_record({"tender": "64f0c2"}).tender is None
