from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.constants import ProfileDefaults, SuggestionDefaults


class ProfileSettings(BaseSettings):
    """Settings for the vendor profile evaluator."""
    required_fields: list[str] = Field(default_factory=lambda: list(ProfileDefaults.REQUIRED_FIELDS))
    required_doc_types: list[str] = Field(default_factory=lambda: list(ProfileDefaults.REQUIRED_DOC_TYPES))

    # Vendor edits to a verified/rejected profile send it back for review
    reverify_on_edit: bool = True


class QualificationSettings(BaseSettings):
    """Settings for tender qualification matching."""
    unverifiable_note: str = "Cannot be verified automatically"
    report_class_mismatch: bool = True


class SuggestionSettings(BaseSettings):
    """Settings for history-based tender suggestions."""
    history_limit: int = SuggestionDefaults.HISTORY_LIMIT
    top_preferences: int = SuggestionDefaults.TOP_PREFERENCES
    budget_tolerance: float = SuggestionDefaults.BUDGET_TOLERANCE
    candidate_limit: int = SuggestionDefaults.CANDIDATE_LIMIT
    fallback_pool: int = SuggestionDefaults.FALLBACK_POOL
    max_results: int = SuggestionDefaults.MAX_RESULTS


class Settings(BaseSettings):
    """Global engine settings."""
    profile: ProfileSettings = Field(default_factory=ProfileSettings)
    qualification: QualificationSettings = Field(default_factory=QualificationSettings)
    suggestions: SuggestionSettings = Field(default_factory=SuggestionSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

settings = Settings()
