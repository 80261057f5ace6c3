"""
History-based tender suggestions.
Biases the approved tender pool towards the categories, sectors and budget
range a vendor has applied for before, keeping only tenders whose required
documents the vendor already holds.
"""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from ..config.settings import settings
from ..schemas.application import Application
from ..schemas.tender import Tender, TenderStatus
from ..schemas.vendor import VendorProfile
from ..utils.text import fuzzy_match

logger = logging.getLogger(__name__)


@dataclass
class SuggestionPreferences:
    """Preferences inferred from a vendor's application history."""
    categories: list[str] = field(default_factory=list)
    sectors: list[str] = field(default_factory=list)
    average_budget: float | None = None

    @property
    def has_segments(self) -> bool:
        return bool(self.categories or self.sectors)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SuggestionRanker:
    """
    Rank approved tenders for a vendor using their application history.
    """

    def __init__(
        self,
        history_limit: int | None = None,
        top_preferences: int | None = None,
        budget_tolerance: float | None = None,
        candidate_limit: int | None = None,
        fallback_pool: int | None = None,
        max_results: int | None = None,
    ):
        config = settings.suggestions
        self.history_limit = history_limit if history_limit is not None else config.history_limit
        self.top_preferences = top_preferences if top_preferences is not None else config.top_preferences
        self.budget_tolerance = budget_tolerance if budget_tolerance is not None else config.budget_tolerance
        self.candidate_limit = candidate_limit if candidate_limit is not None else config.candidate_limit
        self.fallback_pool = fallback_pool if fallback_pool is not None else config.fallback_pool
        self.max_results = max_results if max_results is not None else config.max_results
        self.logger = logger

    def build_preferences(self, applications: Iterable[Application | Mapping[str, Any]]) -> SuggestionPreferences:
        """
        Tally categories, sectors and budgets from the most recent applications.

        Ties in the tally keep first-encountered order (most recent first).
        """
        history = self._history_frame(applications)
        if history.empty:
            return SuggestionPreferences()

        midpoints = history["midpoint"].dropna()
        return SuggestionPreferences(
            categories=self._top_values(history["category"]),
            sectors=self._top_values(history["sector"]),
            average_budget=float(midpoints.mean()) if not midpoints.empty else None,
        )

    def suggest(
        self,
        tenders: Iterable[Tender | Mapping[str, Any]],
        applications: Iterable[Application | Mapping[str, Any]] = (),
        profile: VendorProfile | Mapping[str, Any] | None = None,
    ) -> list[Tender]:
        """
        Suggest tenders for a vendor, soonest deadline first.

        Args:
            tenders: Tender pool; only approved tenders are considered
            applications: The vendor's prior applications
            profile: The vendor's profile, used for document ownership

        Returns:
            Up to max_results tenders
        """
        approved = [
            tender for tender in (Tender.from_record(t) for t in tenders)
            if tender.status == TenderStatus.APPROVED
        ]
        if not approved:
            return []

        preferences = self.build_preferences(applications)
        owned_docs = self._owned_doc_types(profile)
        pool = self._pool_frame(approved, owned_docs)

        candidates = pool
        if preferences.has_segments:
            in_segment = (
                candidates["category"].isin(preferences.categories)
                | candidates["sector"].isin(preferences.sectors)
            )
            candidates = candidates[in_segment]
        candidates = candidates.head(self.candidate_limit)

        if owned_docs:
            candidates = candidates[candidates["docs_owned"]]

        if preferences.average_budget:
            tolerance = preferences.average_budget * self.budget_tolerance
            distance = (candidates["midpoint"] - preferences.average_budget).abs()
            candidates = candidates[candidates["midpoint"].isna() | (distance <= tolerance)]

        if candidates.empty:
            self.logger.info("No history-matched tenders; falling back to upcoming deadlines")
            candidates = pool.head(self.fallback_pool)
            if owned_docs:
                candidates = candidates[candidates["docs_owned"]]

        return [approved[position] for position in candidates.head(self.max_results)["position"]]

    def _history_frame(self, applications: Iterable[Application | Mapping[str, Any]]) -> pd.DataFrame:
        rows = []
        for application in (Application.from_record(a) for a in applications):
            tender = application.tender
            rows.append({
                "created_at": _as_utc(application.created_at),
                "has_tender": tender is not None,
                "category": (tender.category or None) if tender else None,
                "sector": (tender.sector or None) if tender else None,
                "midpoint": tender.budget_midpoint if tender else None,
            })
        if not rows:
            return pd.DataFrame(columns=["created_at", "has_tender", "category", "sector", "midpoint"])

        frame = pd.DataFrame(rows)
        frame["created_at"] = pd.to_datetime(frame["created_at"], utc=True)
        frame["midpoint"] = pd.to_numeric(frame["midpoint"], errors="coerce")
        frame = frame.sort_values("created_at", ascending=False, kind="stable", na_position="last")
        frame = frame.head(self.history_limit)
        return frame[frame["has_tender"]]

    def _top_values(self, column: pd.Series) -> list[str]:
        values = column.dropna()
        if values.empty:
            return []
        counts = values.groupby(values, sort=False).size()
        return counts.sort_values(ascending=False, kind="stable").head(self.top_preferences).index.tolist()

    def _pool_frame(self, tenders: list[Tender], owned_docs: list[str]) -> pd.DataFrame:
        frame = pd.DataFrame({
            "position": range(len(tenders)),
            "category": [tender.category for tender in tenders],
            "sector": [tender.sector for tender in tenders],
            "midpoint": [tender.budget_midpoint for tender in tenders],
            "deadline": [_as_utc(tender.deadline) for tender in tenders],
            "docs_owned": [self._holds_required_docs(tender, owned_docs) for tender in tenders],
        })
        frame["midpoint"] = pd.to_numeric(frame["midpoint"], errors="coerce")
        frame["deadline"] = pd.to_datetime(frame["deadline"], utc=True)
        return frame.sort_values("deadline", kind="stable", na_position="last")

    @staticmethod
    def _owned_doc_types(profile: VendorProfile | Mapping[str, Any] | None) -> list[str]:
        if profile is None:
            return []
        return [doc_type for doc_type in VendorProfile.from_record(profile).document_types() if doc_type]

    @staticmethod
    def _holds_required_docs(tender: Tender, owned_docs: list[str]) -> bool:
        return all(
            any(fuzzy_match(required, owned) for owned in owned_docs)
            for required in tender.required_docs
        )
