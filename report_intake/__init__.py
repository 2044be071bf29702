"""
Report intake quality gate.

Filters out posts that are not experience reports, scores the rest on ten
quality dimensions, recommends a publication status, tags known phenomena, and finds near-duplicate
reports across sources.
"""

__version__ = "2.0.0"

from .models import (
    AssessmentResult,
    DedupCandidate,
    DedupMatch,
    DedupResult,
    DimensionScore,
    Grade,
    MatchConfidence,
    PhenomenonMatch,
    PublicationStatus,
    QualityReport,
    ScoringInput,
)
from .services import (
    ConfigurationError,
    DuplicateScanner,
    IntakeError,
    PhenomenonMatcher,
    assess_quality,
    compare_candidates,
    find_duplicates,
    score_report,
    status_from_score,
)

__all__ = [
    "__version__",
    "AssessmentResult",
    "DedupCandidate",
    "DedupMatch",
    "DedupResult",
    "DimensionScore",
    "Grade",
    "MatchConfidence",
    "PhenomenonMatch",
    "PublicationStatus",
    "QualityReport",
    "ScoringInput",
    "ConfigurationError",
    "DuplicateScanner",
    "IntakeError",
    "PhenomenonMatcher",
    "assess_quality",
    "compare_candidates",
    "find_duplicates",
    "score_report",
    "status_from_score",
]
