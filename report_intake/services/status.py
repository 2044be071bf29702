"""
Status decision: map a composite quality score to a publication status.
"""

import math

from ..models.report import Grade, PublicationStatus
from .thresholds import APPROVE_THRESHOLD, REVIEW_THRESHOLD, GRADE_THRESHOLDS


def clamp_score(score: float) -> float:
    """Clamp to the 0-100 composite range. NaN is treated as 0."""
    if score is None or math.isnan(score):
        return 0.0
    return max(0.0, min(100.0, float(score)))


def status_from_score(score: float) -> PublicationStatus:
    """
    Recommended publication status for a composite score.

    Total over the real line: the input is clamped to [0, 100] first, so
    out-of-range and NaN inputs are accepted.
    """
    score = clamp_score(score)
    if score >= APPROVE_THRESHOLD:
        return PublicationStatus.APPROVED
    if score >= REVIEW_THRESHOLD:
        return PublicationStatus.PENDING_REVIEW
    return PublicationStatus.REJECTED


def grade_for_score(score: float) -> Grade:
    """Letter grade for a composite score."""
    score = clamp_score(score)
    for letter, floor in GRADE_THRESHOLDS.items():
        if score >= floor:
            return Grade(letter)
    return Grade.F
