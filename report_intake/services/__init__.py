"""Intake services: rejection filter, quality scoring, phenomenon tagging and duplicate detection."""

from .quality_assessment import assess_quality, assess_batch
from .quality_scorer import score_report, quick_score, grade_distribution
from .status import status_from_score, grade_for_score
from .rejection_filter import RejectionFilter, FilterOptions, classify, is_obviously_low_quality
from .duplicate_detection import (
    DedupConfig,
    DuplicateDetector,
    compare_candidates,
    find_exact_duplicates,
    generate_fingerprint,
    get_detector,
)
from .phenomenon_matcher import PatternCache, Phenomenon, PhenomenonMatcher, phenomena_from_rows
from .blocking import DuplicateScanner, scan, find_duplicates, cluster_matches, with_inferred_location
from .errors import IntakeError, ConfigurationError

__all__ = [
    "assess_quality",
    "assess_batch",
    "score_report",
    "quick_score",
    "grade_distribution",
    "status_from_score",
    "grade_for_score",
    "RejectionFilter",
    "FilterOptions",
    "classify",
    "is_obviously_low_quality",
    "PatternCache",
    "Phenomenon",
    "PhenomenonMatcher",
    "phenomena_from_rows",
    "DedupConfig",
    "DuplicateDetector",
    "compare_candidates",
    "find_exact_duplicates",
    "generate_fingerprint",
    "get_detector",
    "DuplicateScanner",
    "scan",
    "find_duplicates",
    "cluster_matches",
    "with_inferred_location",
    "IntakeError",
    "ConfigurationError",
]
