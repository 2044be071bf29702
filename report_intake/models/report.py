"""
Report input models for the intake quality gate.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PublicationStatus(str, Enum):
    """Publication status recommended by the status decision."""
    APPROVED = "approved"
    PENDING_REVIEW = "pending_review"
    REJECTED = "rejected"


class Grade(str, Enum):
    """Letter grade for a composite quality score."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


def coerce_text(value: Any) -> Optional[str]:
    """None stays None; everything else becomes a string."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def coerce_float(value: Any) -> Optional[float]:
    """Finite float or None. Never raises."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_int(value: Any) -> Optional[int]:
    number = coerce_float(value)
    return int(number) if number is not None else None


def is_placeholder_point(latitude: float, longitude: float) -> bool:
    """(0, 0) is what scrapers emit for a missing geocode, not a real location."""
    return latitude == 0 and longitude == 0


def coerce_date_text(value: Any) -> Optional[str]:
    """ISO string for date objects, stripped string otherwise, None when blank."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    text = str(value).strip()
    return text or None


class ScoringInput(BaseModel):
    """
    A candidate report as seen by the rejection filter and dimension scorer.

    Built straight from scraped records or database rows: unknown keys are
    ignored and malformed values degrade to None/empty instead of raising.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    summary: str = ""
    description: str = ""
    category: Optional[str] = None

    location_name: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    event_date: Optional[str] = None
    event_time: Optional[str] = None

    witness_count: Optional[int] = None
    has_physical_evidence: bool = False
    has_photo_video: bool = False
    has_official_report: bool = False
    evidence_summary: Optional[str] = None

    source_type: Optional[str] = None
    credibility: Optional[str] = None
    tags: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", "summary", "description", mode="before")
    @classmethod
    def _text_or_empty(cls, v):
        return coerce_text(v) or ""

    @field_validator(
        "category", "location_name", "city", "state_province", "country",
        "event_time", "evidence_summary", "source_type", "credibility",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, v):
        return coerce_text(v)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate(cls, v):
        return coerce_float(v)

    @field_validator("event_date", mode="before")
    @classmethod
    def _event_date(cls, v):
        return coerce_date_text(v)

    @field_validator("witness_count", mode="before")
    @classmethod
    def _witness_count(cls, v):
        count = coerce_int(v)
        return count if count is not None and count >= 0 else None

    @field_validator("has_physical_evidence", "has_photo_video", "has_official_report", mode="before")
    @classmethod
    def _flag(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ("true", "yes", "1", "y")
        return bool(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v):
        if not v:
            return ()
        if isinstance(v, str):
            return tuple(t.strip() for t in v.split(",") if t.strip())
        if isinstance(v, (list, tuple, set)):
            return tuple(str(t) for t in v if t is not None)
        return ()

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata(cls, v):
        return dict(v) if isinstance(v, dict) else {}

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def full_text(self) -> str:
        """Title, summary and description joined for pattern matching."""
        return " ".join(part for part in (self.title, self.summary, self.description) if part)
