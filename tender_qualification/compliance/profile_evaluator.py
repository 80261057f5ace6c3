"""
Vendor profile evaluator for the tender marketplace.
Computes completeness, document coverage and risk metrics for a vendor profile
and decides the automatic incomplete -> draft promotion.
"""
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_camel

from ..config.settings import settings
from ..errors import RulesConfigError
from ..schemas.vendor import ProfileMetrics, ProfileStatus, VendorProfile
from ..utils.config_loader import load_or_create_config
from ..utils.constants import ProfileDefaults, RiskFlag
from ..utils.text import coerce_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationOutcome:
    """Result of evaluating a vendor profile."""
    metrics: ProfileMetrics
    status: ProfileStatus
    status_changed: bool


class ProfileEvaluator:
    """
    Evaluate vendor profiles against the completeness and document rules.

    Evaluation is pure: the input profile is never mutated. Use apply() or
    apply_to_record() to write the fresh metrics and status back.
    """

    def __init__(
        self,
        required_fields: list[str] | None = None,
        required_doc_types: list[str] | None = None,
        rules_path: str | Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the evaluator.

        Args:
            required_fields: Dotted field paths that count towards completeness
            required_doc_types: Document type keys that count towards coverage
            rules_path: Optional JSON file overriding the settings defaults
            clock: Source of the lastEvaluation timestamp
        """
        self.logger = logger
        self.clock = clock or (lambda: datetime.now(timezone.utc))

        rules = self._load_rules(rules_path)
        if required_fields is not None:
            rules["required_fields"] = self._validate_rule("required_fields", required_fields)
        if required_doc_types is not None:
            rules["required_doc_types"] = self._validate_rule("required_doc_types", required_doc_types)

        self.required_fields: tuple[str, ...] = tuple(rules["required_fields"])
        self.required_doc_types: tuple[str, ...] = tuple(rules["required_doc_types"])

    def _load_rules(self, rules_path: str | Path | None) -> dict[str, list[str]]:
        """Load rules from settings, overridden by the JSON rules file if given."""
        defaults = {
            "required_fields": list(settings.profile.required_fields),
            "required_doc_types": list(settings.profile.required_doc_types),
        }
        if rules_path is None:
            return defaults

        loaded = load_or_create_config(rules_path, defaults)
        rules = {}
        for key, default in defaults.items():
            try:
                rules[key] = self._validate_rule(key, loaded[key])
            except RulesConfigError as e:
                self.logger.warning(f"Ignoring {key} from {rules_path}: {e}")
                rules[key] = default
        return rules

    @staticmethod
    def _validate_rule(key: str, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
            raise RulesConfigError(f"{key} must be a list of strings")
        return list(value)

    def evaluate(self, profile: VendorProfile | Mapping[str, Any] | None) -> EvaluationOutcome:
        """
        Compute a fresh metrics snapshot and the resulting status.

        Args:
            profile: Vendor profile model or stored record

        Returns:
            EvaluationOutcome with the new metrics, status and whether it changed
        """
        profile = VendorProfile.from_record(profile)
        record = profile.model_dump(by_alias=True)

        missing_fields = [
            path for path in self.required_fields
            if self._is_missing(self._resolve(record, path))
        ]

        present_doc_types = set(profile.document_types())
        missing_docs = [
            doc_type for doc_type in self.required_doc_types
            if doc_type.lower() not in present_doc_types
        ]

        bodies = profile.registration_bodies()
        missing_registrations = [] if bodies else [ProfileDefaults.MISSING_REGISTRATIONS_KEY]

        experience_years = coerce_number(profile.years_experience)
        projects_completed = coerce_number(profile.completed_projects)

        risk_flags = []
        if not profile.directors:
            risk_flags.append(RiskFlag.NO_DIRECTORS)
        if missing_docs:
            risk_flags.append(RiskFlag.DOCS_INCOMPLETE)
        if missing_fields:
            risk_flags.append(RiskFlag.PROFILE_INCOMPLETE)
        if not bodies:
            risk_flags.append(RiskFlag.NO_PROFESSIONAL_REGISTRATIONS)
        if experience_years < 1:
            risk_flags.append(RiskFlag.LOW_EXPERIENCE)
        if projects_completed < 1:
            risk_flags.append(RiskFlag.LOW_PROJECT_COUNT)

        metrics = ProfileMetrics(
            completeness=self._ratio(len(self.required_fields), len(missing_fields)),
            document_coverage=self._ratio(len(self.required_doc_types), len(missing_docs)),
            missing_fields=tuple(missing_fields),
            missing_docs=tuple(missing_docs),
            missing_registrations=tuple(missing_registrations),
            risk_flags=tuple(risk_flags),
            experience_years=experience_years,
            projects_completed=projects_completed,
            professional_bodies=len(bodies),
            last_evaluation=self.clock(),
        )

        status = profile.status
        if not missing_fields and not missing_docs and status == ProfileStatus.INCOMPLETE:
            status = ProfileStatus.DRAFT
            self.logger.info(f"Profile {profile.id or profile.company_name or '<unsaved>'} promoted to draft")

        self.logger.debug(
            f"Evaluated profile {profile.id or '<unsaved>'}: completeness={metrics.completeness}, "
            f"coverage={metrics.document_coverage}, flags={list(risk_flags)}"
        )
        return EvaluationOutcome(metrics=metrics, status=status, status_changed=status != profile.status)

    def apply(self, profile: VendorProfile | Mapping[str, Any] | None) -> VendorProfile:
        """Return a copy of the profile with fresh metrics and status written back."""
        profile = VendorProfile.from_record(profile)
        outcome = self.evaluate(profile)
        return profile.model_copy(update={"metrics": outcome.metrics, "status": outcome.status})

    def apply_to_record(self, record: Mapping[str, Any] | None) -> dict[str, Any]:
        """
        Write fresh metrics and status onto a copy of a stored record.

        Every other key of the record, including ones the schema does not
        model, is carried over untouched. The status is only written when
        evaluation changed it, and an unrecognised stored status is kept.
        """
        updated = dict(record) if isinstance(record, Mapping) else {}
        outcome = self.evaluate(record)
        updated["metrics"] = outcome.metrics.to_record()

        stored_status = updated.get("status")
        if outcome.status_changed:
            if stored_status is None or ProfileStatus.parse(stored_status) is not None:
                updated["status"] = outcome.status.value
            else:
                self.logger.warning(
                    f"Keeping unrecognised status {stored_status!r} on profile {updated.get('_id', '<unsaved>')}"
                )
        return updated

    @staticmethod
    def _ratio(total: int, missing: int) -> float:
        if total == 0:
            return 1.0
        return round((total - missing) / total, ProfileDefaults.RATIO_PRECISION)

    @staticmethod
    def _resolve(record: Mapping[str, Any], path: str) -> Any:
        """Resolve a dotted path, accepting camelCase or snake_case segments."""
        current: Any = record
        for part in path.split("."):
            if not isinstance(current, Mapping):
                return None
            if part in current:
                current = current[part]
            else:
                current = current.get(to_camel(part))
        return current

    @staticmethod
    def _is_missing(value: Any) -> bool:
        if isinstance(value, (list, tuple, set, dict)):
            return len(value) == 0
        return value is None or value == ""
