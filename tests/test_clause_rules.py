"""
Tests for free-text clause classification.
"""
import pytest

from tender_qualification.decision import (
    CLAUSE_RULES,
    ClauseRule,
    MatchContext,
    RequirementType,
    classify_clause,
    evaluate_clause,
)
from tender_qualification.schemas import Tender, VendorProfile


@pytest.fixture
def context(make_profile):
    tender = Tender.from_record({"cidbGrade": "5GB"})
    return MatchContext(tender=tender, profile=VendorProfile.from_record(make_profile()))


class TestClassifyClause:

    @pytest.mark.parametrize("clause,rule_name,key", [
        ("CIDB 3CE minimum", "cidb", "cidb"),
        ("B-BBEE Level 1 certificate required", "document", "bbbee"),
        ("Valid BBBEE affidavit", "document", "bbbee"),
        ("Copy of BEE certificate", "document", "bbbee"),
        ("CIPC company registration documents", "document", "cipc"),
        ("Company registration documents", "document", "cipc"),
        ("Proof of CSD registration", "document", "csd"),
        ("Valid tax clearance certificate", "document", "taxclearance"),
        ("SARS tax compliance pin", "document", "taxclearance"),
        ("COIDA letter of good standing", "document", "coida"),
        ("ECSA registered engineer on site", "professional", "ecsa"),
        ("Principal agent registered with SACPCMP", "professional", "sacpcmp"),
        ("Compulsory site briefing", "unclassified", "compulsorysitebriefing"),
    ])
    def test_rule_priority(self, clause, rule_name, key):
        rule, matched_key = classify_clause(clause)
        assert rule.name == rule_name
        assert matched_key == key

    def test_cidb_wins_over_document_keywords(self):
        rule, _ = classify_clause("CIDB grading and tax clearance")
        assert rule.name == "cidb"

    def test_document_wins_over_professional_keywords(self):
        rule, key = classify_clause("ECSA letter plus COIDA letter")
        assert rule.name == "document"
        assert key == "coida"

    def test_keywords_match_whole_words(self):
        rule, _ = classify_clause("Bees and wasps removal")
        assert rule.name == "unclassified"

    def test_empty_rule_chain(self):
        assert classify_clause("anything", rules=[]) is None


class TestEvaluateClause:

    def test_unclassified_clause_is_unverifiable(self, context):
        status = evaluate_clause(context, "Compulsory site briefing")
        assert status.key == "text-compulsorysitebriefing"
        assert status.type == RequirementType.TEXT
        assert status.met is None
        assert status.note == "Cannot be verified automatically"
        assert status.name == "Compulsory site briefing"

    def test_document_clause_uses_clause_as_name(self, context):
        status = evaluate_clause(context, "Valid tax clearance certificate")
        assert status.key == "doc-taxclearance"
        assert status.name == "Valid tax clearance certificate"
        assert status.met is False

    def test_cidb_clause_grade_overrides_structured_grade(self, context):
        status = evaluate_clause(context, "CIDB 9GB minimum")
        assert status.met is False
        assert status.note == "Requires 9GB, you have 7GB"

    def test_cidb_clause_without_grade_uses_structured_grade(self, context):
        status = evaluate_clause(context, "Active CIDB registration")
        assert status.key == "cidb"
        assert status.met is True
        assert status.note is None

    def test_custom_rule_chain(self, context):
        def build_site_visit(ctx, clause, key):
            return CLAUSE_RULES[-1].build(ctx, clause, "site-visit")

        site_rule = ClauseRule(
            "site-visit",
            lambda clause: "site" if "site" in clause.lower() else None,
            build_site_visit,
        )
        status = evaluate_clause(context, "Compulsory site briefing", rules=[site_rule, *CLAUSE_RULES])
        assert status.key == "text-site-visit"

    def test_no_rule_matches(self, context):
        assert evaluate_clause(context, "anything", rules=[]) is None
