"""
Quality scoring result models.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .report import Grade, PublicationStatus


@dataclass(frozen=True)
class DimensionScore:
    """One scored dimension: raw 0-10 score, its weight and a short rationale."""
    score: float
    weight: float
    weighted: float
    details: str


@dataclass(frozen=True)
class QualityReport:
    """
    Composite quality assessment for one report.

    ``scored_at`` is informational and excluded from equality, so scoring the
    same input twice yields equal reports.
    """
    total_score: int
    grade: Grade
    recommended_status: PublicationStatus
    dimensions: Dict[str, DimensionScore]
    version: str
    scored_at: str = field(default="", compare=False)

    def dimension(self, name: str) -> DimensionScore:
        return self.dimensions[name]


@dataclass(frozen=True)
class PhenomenonMatch:
    """A known phenomenon named in a report, with where-it-matched confidence."""
    phenomenon_id: str
    confidence: float
    matched: str


@dataclass(frozen=True)
class AssessmentResult:
    """Outcome of the intake gate: filtered out with a reason, or scored and tagged."""
    passed: bool
    reason: Optional[str] = None
    rule: Optional[str] = None
    report: Optional[QualityReport] = None
    phenomena: List[PhenomenonMatch] = field(default_factory=list)
