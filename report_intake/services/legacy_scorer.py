"""
Deprecated four-part quality score (length, detail, coherence, source; 0-25 each).

This was the first-generation scorer, with its own status thresholds of 70/40.
It is kept only so historical scores can be recomputed and compared; new code
uses ``quality_scorer.score_report`` and ``status.status_from_score``.
"""

import re
import warnings
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models.report import PublicationStatus, ScoringInput, coerce_float
from ..utils.text import split_paragraphs, split_sentences, word_count
from .thresholds import LEGACY_APPROVE_THRESHOLD, LEGACY_REVIEW_THRESHOLD

PART_MAX = 25

SOURCE_CREDIBILITY: Dict[str, int] = {
    "bfro": 22,
    "mufon": 22,
    "nuforc": 20,
    "wikipedia": 18,
    "reddit": 15,
    "shadowlands": 12,
    "ghostsofamerica": 12,
}
DEFAULT_SOURCE_CREDIBILITY = 10

LEGACY_BFRO_CLASS_BOOST: Dict[str, int] = {"A": 5, "B": 2, "C": 0}

_LOCATION_DETAIL = (
    re.compile(r"\b(near|at|in|by)\s+[A-Z][a-z]+"),
    re.compile(r"\b\d+\s*(mile|kilometer|km|ft|feet|yard|meter)s?\b", re.IGNORECASE),
    re.compile(r"\b(highway|road|street|avenue|route)\s*\d*", re.IGNORECASE),
    re.compile(r"\b(forest|woods|mountain|lake|river|creek|field|farm|park)\b", re.IGNORECASE),
)
_TIME_DETAIL = (
    re.compile(r"\b\d{1,2}:\d{2}\s*(am|pm)?", re.IGNORECASE),
    re.compile(r"\b(morning|afternoon|evening|night|midnight|dawn|dusk)\b", re.IGNORECASE),
)
_DATE_DETAIL = (
    re.compile(r"\b(january|february|march|april|may|june|july|august|september|october|november|december)\s+\d{1,2}", re.IGNORECASE),
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),
    re.compile(r"\b(last|this)\s+(week|month|year|summer|winter|spring|fall)\b", re.IGNORECASE),
)
_OBSERVED = re.compile(r"\b(witness|saw|observed|noticed|spotted)\b", re.IGNORECASE)
_COMPANION = re.compile(r"\b(my (wife|husband|friend|brother|sister|mother|father|son|daughter)|we both|together)\b", re.IGNORECASE)
_SIZE = re.compile(r"\b\d+\s*(foot|feet|ft|inch|meter|tall|high|wide|long)\b", re.IGNORECASE)
_FIRST_PERSON = re.compile(r"\b(I|we|my|our)\b")
_FIRST_PERSON_EXPERIENCE = re.compile(r"\b(I saw|I heard|I felt|I noticed|I remember|I was)\b", re.IGNORECASE)
_FLOW_WORDS = ("then", "after", "before", "suddenly", "when", "while", "as soon as", "next", "finally")


@dataclass(frozen=True)
class LegacyQualityScore:
    total: int
    length_score: int
    detail_score: int
    coherence_score: int
    source_score: int


def _length_score(description: str) -> int:
    words = word_count(description)
    if words < 50:
        return words // 5
    if words < 150:
        return 10 + (words - 50) // 10
    if words < 500:
        return 20 + (words - 150) // 70
    return PART_MAX


def _detail_score(text: str) -> int:
    score = min(sum(3 for p in _LOCATION_DETAIL if p.search(text)), 10)
    if any(p.search(text) for p in _TIME_DETAIL):
        score += 5
    if any(p.search(text) for p in _DATE_DETAIL):
        score += 3
    if _OBSERVED.search(text):
        score += 2
    if _COMPANION.search(text):
        score += 2
    if _SIZE.search(text):
        score += 3
    return min(score, PART_MAX)


def _coherence_score(description: str) -> int:
    score = 0
    sentences = split_sentences(description)
    if len(sentences) >= 3:
        score += 3
    if len(sentences) >= 5:
        score += 2

    if sentences:
        avg = sum(len(s.split()) for s in sentences) / len(sentences)
        if 8 <= avg <= 30:
            score += 5
        elif 5 <= avg <= 40:
            score += 3

    paragraphs = split_paragraphs(description, min_chars=50)
    if len(paragraphs) >= 2:
        score += 3
    if len(paragraphs) >= 3:
        score += 2

    if _FIRST_PERSON.search(description):
        score += 3
    if _FIRST_PERSON_EXPERIENCE.search(description):
        score += 2

    lowered = description.lower()
    score += min(sum(1 for w in _FLOW_WORDS if w in lowered), 5)
    return min(score, PART_MAX)


def _source_score(source_type: Optional[str], metadata: Dict[str, Any]) -> int:
    source = (source_type or "").lower()
    score = SOURCE_CREDIBILITY.get(source, DEFAULT_SOURCE_CREDIBILITY)

    if source == "bfro":
        raw = str(metadata.get("bfro_class") or metadata.get("bfroClass") or "")
        letter = raw.upper().replace("CLASS", "").strip()
        score += LEGACY_BFRO_CLASS_BOOST.get(letter, 0)

    if source == "reddit":
        upvotes = coerce_float(metadata.get("score")) or 0
        if upvotes > 100:
            score += 5
        elif upvotes > 50:
            score += 3
        elif upvotes > 20:
            score += 1

    return min(score, PART_MAX)


def calculate_legacy_score(inp: ScoringInput) -> LegacyQualityScore:
    """Recompute the deprecated four-part score for a report."""
    warnings.warn(
        "calculate_legacy_score is deprecated; use quality_scorer.score_report",
        DeprecationWarning,
        stacklevel=2,
    )
    text = f"{inp.title} {inp.description}"
    length = _length_score(inp.description)
    detail = _detail_score(text)
    coherence = _coherence_score(inp.description)
    source = _source_score(inp.source_type, inp.metadata)
    return LegacyQualityScore(
        total=length + detail + coherence + source,
        length_score=length,
        detail_score=detail,
        coherence_score=coherence,
        source_score=source,
    )


def legacy_status_from_score(score: float) -> PublicationStatus:
    """Status under the deprecated 70/40 thresholds."""
    warnings.warn(
        "legacy_status_from_score is deprecated; use status.status_from_score",
        DeprecationWarning,
        stacklevel=2,
    )
    if score >= LEGACY_APPROVE_THRESHOLD:
        return PublicationStatus.APPROVED
    if score >= LEGACY_REVIEW_THRESHOLD:
        return PublicationStatus.PENDING_REVIEW
    return PublicationStatus.REJECTED
