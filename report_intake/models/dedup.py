"""
Near-duplicate detection models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from .report import coerce_date_text, coerce_float, coerce_text, is_placeholder_point


class MatchConfidence(str, Enum):
    """Confidence tier of a duplicate match."""
    POSSIBLE = "possible"
    LIKELY = "likely"
    DEFINITE = "definite"


class DedupCandidate(BaseModel):
    """The slice of a report needed to decide whether it duplicates another."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    title: str = ""
    description: str = ""
    location_name: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    event_date: Optional[str] = None
    source_type: Optional[str] = None
    original_report_id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        return coerce_text(v) or ""

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text_or_empty(cls, v):
        return coerce_text(v) or ""

    @field_validator(
        "location_name", "city", "state_province", "country",
        "source_type", "original_report_id",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, v):
        text = coerce_text(v)
        return (text.strip() or None) if text is not None else None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate(cls, v):
        return coerce_float(v)

    @field_validator("event_date", mode="before")
    @classmethod
    def _event_date(cls, v):
        return coerce_date_text(v)

    @property
    def has_coordinates(self) -> bool:
        return (
            self.latitude is not None and self.longitude is not None
            and not is_placeholder_point(self.latitude, self.longitude)
        )


@dataclass(frozen=True)
class DedupMatch:
    """A scored candidate pair that cleared the duplicate floor."""
    report_a: str
    report_b: str
    title_similarity: float
    location_similarity: float
    date_similarity: float
    content_similarity: float
    overall_score: float
    confidence: MatchConfidence
    details: str

    @property
    def pair_key(self) -> Tuple[str, str]:
        """Order-independent identity of the pair."""
        return (self.report_a, self.report_b) if self.report_a <= self.report_b else (self.report_b, self.report_a)


@dataclass
class DedupResult:
    """Matches from a batch scan plus run statistics."""
    matches: List[DedupMatch] = field(default_factory=list)
    total_compared: int = 0
    bucket_count: int = 0
    duration_ms: float = 0.0
    cancelled: bool = False

    @property
    def duplicates_found(self) -> int:
        return len(self.matches)

    def by_confidence(self, confidence: MatchConfidence) -> List[DedupMatch]:
        return [m for m in self.matches if m.confidence == confidence]
