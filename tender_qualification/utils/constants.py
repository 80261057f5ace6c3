"""
Constants and lookup tables for the qualification engine.
Centralizes required-field lists, label tables and keyword rules.
"""


# =============================================================================
# Profile Evaluation Constants
# =============================================================================
class ProfileDefaults:
    """Default completeness requirements for vendor profiles."""

    # Dotted paths into the profile record, evaluated in this order
    REQUIRED_FIELDS: tuple[str, ...] = (
        "companyName",
        "registrationNumber",
        "vatNumber",
        "csdNumber",
        "bbbeeLevel",
        "phone",
        "address.street",
        "address.city",
        "address.postalCode",
        "professionalRegistrations",
        "yearsExperience",
        "completedProjects",
    )

    REQUIRED_DOC_TYPES: tuple[str, ...] = ("cipc", "bbbee", "csd")

    # Placeholder reported when no professional body is registered
    MISSING_REGISTRATIONS_KEY: str = "professionalRegistrations"

    # Completeness and coverage precision (decimal places)
    RATIO_PRECISION: int = 2


class RiskFlag:
    """Risk tags attached to profile metrics, in reporting order."""

    NO_DIRECTORS = "no-directors"
    DOCS_INCOMPLETE = "docs-incomplete"
    PROFILE_INCOMPLETE = "profile-incomplete"
    NO_PROFESSIONAL_REGISTRATIONS = "no-professional-registrations"
    LOW_EXPERIENCE = "low-experience"
    LOW_PROJECT_COUNT = "low-project-count"


# =============================================================================
# Qualification Matching Constants
# =============================================================================

# Friendly labels keyed by normalized document type
DOCUMENT_LABELS: dict[str, str] = {
    "bbbee": "B-BBEE Certificate",
    "bee": "B-BBEE Certificate",
    "cipc": "CIPC Document",
    "csd": "CSD Report",
    "taxclearance": "Tax Clearance Certificate",
    "tax": "Tax Clearance Certificate",
    "sars": "SARS Tax PIN",
    "coida": "COIDA Letter",
}

# Normalized spellings that share a requirement key with a canonical type
DOCUMENT_ALIASES: dict[str, str] = {
    "bee": "bbbee",
    "tax": "taxclearance",
}

# Regex patterns recognised in free-text clauses, checked in order
DOCUMENT_KEYWORDS: list[tuple[str, str]] = [
    (r"\bb-?bbee\b|\bbee certificate\b", "bbbee"),
    (r"\bcipc\b|\bcompany registration\b", "cipc"),
    (r"\bcsd\b", "csd"),
    (r"\btax clearance\b|\bsars\b", "taxclearance"),
    (r"\bcoida\b", "coida"),
]

PROFESSIONAL_BODY_KEYWORDS: tuple[str, ...] = ("ecsa", "sacpcmp", "sacap", "saps")

CIDB_BODY: str = "cidb"

# Registered CIDB class-of-works codes (general and specialist)
CIDB_CLASS_CODES: tuple[str, ...] = (
    "GB", "CE", "EB", "EP", "ME",
    "SA", "SB", "SC", "SD", "SE", "SF", "SG", "SH", "SI",
    "SJ", "SK", "SL", "SM", "SN", "SO", "SQ", "SR",
)

# Bullet characters that separate clauses inside a requirements block
CLAUSE_BULLETS: str = "•·▪●◦‣⁃"


# =============================================================================
# Suggestion Constants
# =============================================================================
class SuggestionDefaults:
    """Default suggestion ranking values."""

    # Most recent applications considered for preferences
    HISTORY_LIMIT: int = 25

    # Categories/sectors kept from the application tally
    TOP_PREFERENCES: int = 3

    # Accepted distance of a tender's budget midpoint from the historical average
    BUDGET_TOLERANCE: float = 0.40

    # Soonest-deadline candidates taken before document/budget filters
    CANDIDATE_LIMIT: int = 50

    # Soonest-deadline tenders considered when the preference filters yield nothing
    FALLBACK_POOL: int = 25

    MAX_RESULTS: int = 10
