"""
Centralized scoring and matching thresholds -- single source of truth.

Every tuned constant used by the rejection filter, the dimension scorer, the
status decision and the near-duplicate detector is defined here. The values are
compiled in: they change only with a code change (and a scorer version bump),
never through the environment.

``validate_configuration()`` runs at import time so a mis-ordered threshold
pair or a non-positive weight fails the process at startup instead of quietly
skewing every score.
"""

from typing import Dict, Optional

from .errors import ConfigurationError

# Version tag stamped onto every QualityReport. Bump when any constant below
# that feeds the scorer changes.
SCORER_VERSION = "2.0.0"

# ---------------------------------------------------------------------------
# Rejection filter
# ---------------------------------------------------------------------------

# Bodies shorter than this never reach the content pattern banks
MIN_BODY_LENGTH = 100

# Low-effort title markers only apply when the body is shorter than this
LOW_EFFORT_BODY_THRESHOLD = 200

# Quick pre-check used before the full filter
OBVIOUS_LOW_QUALITY_MIN_BODY = 50
OBVIOUS_LOW_QUALITY_MIN_ALNUM_RATIO = 0.5

# ---------------------------------------------------------------------------
# Dimension scorer
# ---------------------------------------------------------------------------

# Relative importance of each dimension. Order is the report order.
DIMENSION_WEIGHTS: Dict[str, float] = {
    "evidence_strength": 1.2,
    "witness_credibility": 1.0,
    "description_detail": 1.3,
    "location_specificity": 1.1,
    "temporal_precision": 0.9,
    "source_reliability": 1.1,
    "corroboration_potential": 0.8,
    "narrative_coherence": 1.0,
    "content_originality": 0.8,
    "data_completeness": 0.8,
}

DIMENSION_MAX_SCORE = 10.0

# Letter grade floors on the 0-100 composite
GRADE_THRESHOLDS: Dict[str, int] = {
    "A": 80,
    "B": 65,
    "C": 50,
    "D": 35,
}

# Base reliability per source type (0-10 scale before boosts)
SOURCE_RELIABILITY: Dict[str, float] = {
    # Established research organisations and curated databases
    "bfro": 8.0,
    "mufon": 8.0,
    "nuforc": 7.5,
    # Research groups and historical archives
    "nderf": 7.0,
    "iands": 7.0,
    "historical_archive": 7.0,
    # Curated secondary sources
    "wikipedia": 6.0,
    # Direct submissions
    "user": 5.0,
    "user_submission": 5.0,
    # Community sites and social media
    "ghostsofamerica": 4.5,
    "reddit": 4.0,
    "shadowlands": 4.0,
}
UNKNOWN_SOURCE_RELIABILITY = 3.0

# BFRO report class boosts (class A = clear sighting)
BFRO_CLASS_BOOST: Dict[str, float] = {"A": 2.0, "B": 1.0}

# Reddit engagement boosts, highest band first
REDDIT_SCORE_BOOSTS = ((200, 2.0), (50, 1.0))

# Verifiable source URL present in metadata
SOURCE_URL_BOOST = 0.5

# ---------------------------------------------------------------------------
# Status decision
# ---------------------------------------------------------------------------

# Composite score at or above which a report is approved outright
APPROVE_THRESHOLD = 60

# Composite score at or above which a report goes to human review
REVIEW_THRESHOLD = 35

# Deprecated four-part scorer (kept for historical compatibility only)
LEGACY_APPROVE_THRESHOLD = 70
LEGACY_REVIEW_THRESHOLD = 40

# ---------------------------------------------------------------------------
# Near-duplicate detection
# ---------------------------------------------------------------------------

# Composite weights across the four similarity signals. Must sum to 1.0.
DEDUP_WEIGHTS: Dict[str, float] = {
    "title": 0.30,
    "location": 0.25,
    "date": 0.20,
    "content": 0.25,
}

# Pairs below this composite are discarded
DEDUP_MIN_OVERALL = 0.45

# Confidence tiers
DEDUP_LIKELY_THRESHOLD = 0.65
DEDUP_DEFINITE_THRESHOLD = 0.85

# Skip content comparison when both title and location are below this
DEDUP_EARLY_EXIT_SIMILARITY = 0.3

# Levenshtein comparison is truncated to this many characters
LEVENSHTEIN_MAX_CHARS = 200

# Strings whose lengths differ by more than this share of the longer one are
# treated as dissimilar without computing an edit distance
LEVENSHTEIN_MAX_LENGTH_RATIO = 0.5

# Bodies shorter than this fall back from shingles to token overlap
SHINGLE_MIN_CHARS = 100
SHINGLE_SIZE = 3

# Distance bands (km) -> location similarity when both records have coordinates
DISTANCE_BANDS = ((1.0, 1.0), (10.0, 0.8), (50.0, 0.5), (200.0, 0.2))

# Day-difference bands -> date similarity
DATE_BANDS = ((0, 1.0), (7, 0.8), (30, 0.5), (365, 0.2))

# Structured-location blend used when coordinates are missing
LOCATION_FIELD_WEIGHTS: Dict[str, float] = {
    "country": 0.2,
    "state_province": 0.3,
    "city": 0.3,
    "location_name": 0.2,
}

# Thresholds used to describe which signals drove a match
DETAIL_TITLE_THRESHOLD = 0.7
DETAIL_LOCATION_THRESHOLD = 0.5
DETAIL_DATE_THRESHOLD = 0.5
DETAIL_CONTENT_THRESHOLD = 0.4


def _require_positive(name: str, values: Dict[str, float]) -> None:
    for key, value in values.items():
        if not value > 0:
            raise ConfigurationError(f"{name}[{key}]", "must be positive", value)


def _require_ordered(name: str, higher: float, lower: float) -> None:
    if not higher > lower:
        raise ConfigurationError(name, f"expected {higher} > {lower}", (higher, lower))


def validate_configuration(
    dimension_weights: Optional[Dict[str, float]] = None,
    dedup_weights: Optional[Dict[str, float]] = None,
    approve_threshold: float = APPROVE_THRESHOLD,
    review_threshold: float = REVIEW_THRESHOLD,
    min_overall: float = DEDUP_MIN_OVERALL,
    likely_threshold: float = DEDUP_LIKELY_THRESHOLD,
    definite_threshold: float = DEDUP_DEFINITE_THRESHOLD,
) -> None:
    """Check ordering and positivity rules. Raises ConfigurationError."""
    dimension_weights = DIMENSION_WEIGHTS if dimension_weights is None else dimension_weights
    dedup_weights = DEDUP_WEIGHTS if dedup_weights is None else dedup_weights

    if not dimension_weights:
        raise ConfigurationError("DIMENSION_WEIGHTS", "must not be empty")
    _require_positive("DIMENSION_WEIGHTS", dimension_weights)
    _require_positive("DEDUP_WEIGHTS", dedup_weights)

    if abs(sum(dedup_weights.values()) - 1.0) > 1e-9:
        raise ConfigurationError("DEDUP_WEIGHTS", "must sum to 1.0", sum(dedup_weights.values()))

    _require_ordered("APPROVE_THRESHOLD > REVIEW_THRESHOLD", approve_threshold, review_threshold)
    if not (0 <= review_threshold and approve_threshold <= 100):
        raise ConfigurationError("status thresholds", "must lie within 0-100", (review_threshold, approve_threshold))
    _require_ordered("LEGACY_APPROVE_THRESHOLD > LEGACY_REVIEW_THRESHOLD",
                     LEGACY_APPROVE_THRESHOLD, LEGACY_REVIEW_THRESHOLD)

    _require_ordered("DEDUP_DEFINITE_THRESHOLD > DEDUP_LIKELY_THRESHOLD", definite_threshold, likely_threshold)
    _require_ordered("DEDUP_LIKELY_THRESHOLD > DEDUP_MIN_OVERALL", likely_threshold, min_overall)

    grades = list(GRADE_THRESHOLDS.values())
    for higher, lower in zip(grades, grades[1:]):
        _require_ordered("GRADE_THRESHOLDS", higher, lower)


validate_configuration()
