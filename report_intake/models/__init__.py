"""Data models for the intake quality gate."""

from .report import ScoringInput, PublicationStatus, Grade
from .quality import DimensionScore, QualityReport, AssessmentResult, PhenomenonMatch
from .dedup import DedupCandidate, DedupMatch, DedupResult, MatchConfidence

__all__ = [
    "ScoringInput",
    "PublicationStatus",
    "Grade",
    "DimensionScore",
    "QualityReport",
    "AssessmentResult",
    "PhenomenonMatch",
    "DedupCandidate",
    "DedupMatch",
    "DedupResult",
    "MatchConfidence",
]
