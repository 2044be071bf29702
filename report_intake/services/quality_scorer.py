"""Ten-dimension quality scorer for experience reports.

Each dimension scores a report 0-10 from independent signals in its text and
metadata. Dimension scores are weighted, summed and normalized to a 0-100
composite, which then maps to a letter grade and a recommended status.

=======================  ======  ==================================================
Dimension                Weight  Signals
=======================  ======  ==================================================
evidence_strength        1.2     physical/photo/official flags, evidence vocabulary
witness_credibility      1.0     witness count, named relations, professions
description_detail       1.3     length curve, sensory, measurement, behaviour
location_specificity     1.1     coordinates, structured fields, place markers
temporal_precision       0.9     exact date/time, durations, sequencing
source_reliability       1.1     per-source base plus engagement/class boosts
corroboration_potential  0.8     cross-referencable date+place, external data
narrative_coherence      1.0     sentences, paragraphs, voice, flow; rant penalty
content_originality      0.8     template penalty, specifics, emotional response
data_completeness        0.8     weighted share of populated fields
=======================  ======  ==================================================

Scoring is pure: the same input always produces the same report apart from
``scored_at``. Sparse or malformed input simply scores low.
"""

import logging
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.quality import DimensionScore, QualityReport
from ..models.report import ScoringInput, coerce_float
from ..utils.dates import is_full_iso_date
from ..utils.text import split_paragraphs, split_sentences, word_count
from .status import grade_for_score, status_from_score
from .thresholds import (
    BFRO_CLASS_BOOST,
    DIMENSION_MAX_SCORE,
    DIMENSION_WEIGHTS,
    REDDIT_SCORE_BOOSTS,
    SCORER_VERSION,
    SOURCE_RELIABILITY,
    SOURCE_URL_BOOST,
    UNKNOWN_SOURCE_RELIABILITY,
)

logger = logging.getLogger(__name__)

Factors = List[str]


def _count_matches(patterns: Sequence[re.Pattern], text: str) -> int:
    """Number of patterns that match somewhere in text."""
    return sum(1 for p in patterns if p.search(text))


def _terms(*terms: str) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(r"\b" + re.escape(t), re.IGNORECASE) for t in terms)


def _clamp(score: float) -> float:
    return max(0.0, min(score, DIMENSION_MAX_SCORE))


# ---------------------------------------------------------------------------
# Evidence strength
# ---------------------------------------------------------------------------

EVIDENCE_TERMS = _terms(
    "photograph", "photo", "video", "recording", "footage",
    "physical evidence", "trace", "imprint", "mark", "burn",
    "sample", "radiation", "electromagnetic", "radar",
    "police report", "military", "faa", "official",
)


def score_evidence_strength(inp: ScoringInput) -> Tuple[float, Factors]:
    score = 0.0
    factors = []

    if inp.has_physical_evidence:
        score += 3
        factors.append("physical evidence claimed")
    if inp.has_photo_video:
        score += 2.5
        factors.append("photo/video evidence")
    if inp.has_official_report:
        score += 2
        factors.append("official report filed")
    if inp.evidence_summary and len(inp.evidence_summary) > 20:
        score += 1.5
        factors.append("evidence summary provided")

    mentions = _count_matches(EVIDENCE_TERMS, inp.description)
    score += min(mentions * 0.5, 1)

    return score, factors or ["no evidence indicators"]


# ---------------------------------------------------------------------------
# Witness credibility
# ---------------------------------------------------------------------------

RELATION_WITNESS = re.compile(
    r"\bmy (wife|husband|partner|friend|brother|sister|mother|father|son|daughter|neighbor|colleague)\b",
    re.IGNORECASE,
)
CREDIBLE_TERMS = (
    "pilot", "officer", "police", "military", "scientist", "professor",
    "doctor", "engineer", "astronomer", "meteorologist", "ranger",
    "firefighter", "security", "air traffic",
)
_CREDIBLE_PATTERNS = _terms(*CREDIBLE_TERMS)
SELF_IDENTIFIED = re.compile(r"\b(?:(?i:my name is|identified|contact me)|I am [A-Z][a-z]+)\b")


def score_witness_credibility(inp: ScoringInput) -> Tuple[float, Factors]:
    # Someone reported something
    score = 2.0
    factors = []
    desc = inp.description

    count = inp.witness_count or 1
    if count >= 5:
        score += 3
        factors.append(f"{count} witnesses")
    elif count >= 3:
        score += 2.5
        factors.append(f"{count} witnesses")
    elif count >= 2:
        score += 1.5
        factors.append("multiple witnesses")

    if RELATION_WITNESS.search(desc):
        score += 1
        factors.append("named relation as witness")

    for term, pattern in zip(CREDIBLE_TERMS, _CREDIBLE_PATTERNS):
        if pattern.search(desc):
            score += 2
            factors.append(f"credible witness background: {term}")
            break

    if SELF_IDENTIFIED.search(desc):
        score += 1
        factors.append("witness self-identified")

    return score, factors or ["single anonymous witness"]


# ---------------------------------------------------------------------------
# Description detail
# ---------------------------------------------------------------------------

SENSORY_PATTERNS = (
    re.compile(r"\b(saw|seen|looked|appeared|visible|bright|dark|glowing|shining|luminous|colou?r|red|green|blue|white|orange)\b", re.IGNORECASE),
    re.compile(r"\b(heard|sound|noise|silent|loud|humming|buzzing|roaring|whisper|screech|bang|crack)\b", re.IGNORECASE),
    re.compile(r"\b(felt|feeling|sensation|cold|hot|warm|tingling|pressure|vibrat\w*|electric|numb)\b", re.IGNORECASE),
    re.compile(r"\b(smell|odor|stench|sulfur|ozone|burning|metallic)\b", re.IGNORECASE),
)
MEASURE_PATTERNS = (
    re.compile(r"\b\d+\s*(foot|feet|ft|inch|meter|metre|yard|mile|km)\b", re.IGNORECASE),
    re.compile(r"\b(size of|as big as|as large as|about \d+)\b", re.IGNORECASE),
    re.compile(r"\b(altitude|elevation|height|diameter|wingspan)\b", re.IGNORECASE),
    re.compile(r"\b(speed|mph|kph|knots|mach)\b", re.IGNORECASE),
)
BEHAVIOR_PATTERNS = (
    re.compile(r"\b(moved|hovered|flew|descended|ascended|zigzag|darted|glided|vanished|disappeared|materialized)\b", re.IGNORECASE),
    re.compile(r"\b(approached|retreated|circled|followed|chased|fled|ran|walked|crawled)\b", re.IGNORECASE),
)


def word_count_points(words: int) -> float:
    """Diminishing returns on length: 1 pt by 100 words, 2 by 200, 3 by 500."""
    if words >= 500:
        return 3.0
    if words >= 200:
        return 2.0 + (words - 200) / 300
    if words >= 100:
        return 1.0 + (words - 100) / 100
    return max(words, 0) / 100


def score_description_detail(inp: ScoringInput) -> Tuple[float, Factors]:
    desc = inp.description
    words = word_count(desc)
    score = word_count_points(words)

    if words >= 500:
        factors = [f"{words} words (detailed)"]
    elif words >= 200:
        factors = [f"{words} words (moderate)"]
    elif words >= 100:
        factors = [f"{words} words (brief)"]
    else:
        factors = [f"{words} words (thin)"]

    sensory = _count_matches(SENSORY_PATTERNS, desc)
    score += min(sensory * 0.5, 2)
    if sensory:
        factors.append(f"{sensory} sensory types")

    measures = _count_matches(MEASURE_PATTERNS, desc)
    score += min(measures, 2)
    if measures:
        factors.append("physical measurements")

    behaviors = _count_matches(BEHAVIOR_PATTERNS, desc)
    score += min(behaviors * 0.75, 1.5)
    if behaviors:
        factors.append("behavioral details")

    if inp.summary and 50 < len(inp.summary) < 500:
        score += 0.5

    return score, factors


# ---------------------------------------------------------------------------
# Location specificity
# ---------------------------------------------------------------------------

LOCATION_DETAIL_PATTERNS = (
    re.compile(r"\b(highway|route|interstate|road|street|avenue|boulevard|lane|drive)\s*(#?\d+|[A-Z])", re.IGNORECASE),
    re.compile(r"\b(mile marker|exit|junction|intersection)\b", re.IGNORECASE),
    re.compile(r"\b\d+\s*(miles?|km|kilometers?)?\s*(north|south|east|west)\s+of\b", re.IGNORECASE),
    re.compile(r"\b(near|outside|just past|approaching)\s+[A-Z][a-z]+"),
)


def score_location_specificity(inp: ScoringInput) -> Tuple[float, Factors]:
    score = 0.0
    factors = []

    if inp.has_coordinates:
        score += 3
        factors.append("GPS coordinates")
    if inp.country:
        score += 1
        factors.append(f"country: {inp.country}")
    if inp.state_province:
        score += 1.5
        factors.append("state/province")
    if inp.city:
        score += 1.5
        factors.append("city specified")
    if inp.location_name and len(inp.location_name) > 3:
        score += 1
        factors.append("named location")

    markers = _count_matches(LOCATION_DETAIL_PATTERNS, inp.description)
    score += min(markers, 2)
    if markers:
        factors.append("descriptive location markers")

    return score, factors or ["no location data"]


# ---------------------------------------------------------------------------
# Temporal precision
# ---------------------------------------------------------------------------

CLOCK_TIME = re.compile(r"\b\d{1,2}:\d{2}\s*(am|pm|a\.m\.|p\.m\.)?", re.IGNORECASE)
TIME_OF_DAY = re.compile(r"\b(morning|afternoon|evening|night|midnight|dawn|dusk|noon|sunrise|sunset)\b", re.IGNORECASE)
DURATION = re.compile(r"\b(lasted|for about|approximately|roughly)\s+\d+\s*(second|minute|hour|day)", re.IGNORECASE)
SEQUENCE_PATTERNS = _terms(
    "then", "after that", "next", "finally", "moments later", "shortly after", "before", "afterwards",
)


def score_temporal_precision(inp: ScoringInput) -> Tuple[float, Factors]:
    score = 0.0
    factors = []
    desc = inp.description

    if inp.event_date:
        if is_full_iso_date(inp.event_date):
            score += 3
            factors.append("specific date")
        else:
            score += 1.5
            factors.append("approximate date")

    if inp.event_time:
        score += 2
        factors.append("specific time")

    if CLOCK_TIME.search(desc):
        score += 1.5
        factors.append("time mentioned in text")
    elif TIME_OF_DAY.search(desc):
        score += 0.75
        factors.append("time of day referenced")

    if DURATION.search(desc) or coerce_float(inp.metadata.get("event_duration_minutes")):
        score += 1.5
        factors.append("duration specified")

    sequence = _count_matches(SEQUENCE_PATTERNS, desc)
    if sequence >= 3:
        score += 2
        factors.append("detailed temporal sequence")
    elif sequence >= 1:
        score += 1
        factors.append("basic temporal sequence")

    return score, factors or ["no temporal data"]


# ---------------------------------------------------------------------------
# Source reliability
# ---------------------------------------------------------------------------

SOURCE_TIER_LABELS = {
    "bfro": "established org",
    "mufon": "established org",
    "nuforc": "established database",
    "nderf": "research database",
    "iands": "research org",
    "historical_archive": "historical",
    "wikipedia": "curated secondary",
    "user": "user submitted",
    "user_submission": "user submitted",
    "ghostsofamerica": "community site",
    "shadowlands": "community site",
    "reddit": "social media",
}


def _bfro_class(metadata: Dict[str, Any]) -> Optional[str]:
    raw = metadata.get("bfro_class") or metadata.get("bfroClass")
    if not raw:
        return None
    letter = str(raw).strip().upper().replace("CLASS", "").strip()
    return letter or None


def score_source_reliability(inp: ScoringInput) -> Tuple[float, Factors]:
    source = (inp.source_type or "unknown").strip().lower()
    score = SOURCE_RELIABILITY.get(source, UNKNOWN_SOURCE_RELIABILITY)
    factors = [f"{SOURCE_TIER_LABELS.get(source, 'unknown')} ({source})"]

    if source == "bfro":
        letter = _bfro_class(inp.metadata)
        if letter in BFRO_CLASS_BOOST:
            score += BFRO_CLASS_BOOST[letter]
            factors.append(f"Class {letter} sighting")

    if source == "reddit":
        upvotes = coerce_float(inp.metadata.get("score"))
        if upvotes is not None:
            for floor, boost in REDDIT_SCORE_BOOSTS:
                if upvotes > floor:
                    score += boost
                    factors.append(f"engagement ({int(upvotes)} upvotes)")
                    break

    if inp.metadata.get("source_url"):
        score += SOURCE_URL_BOOST
        factors.append("source URL available")

    return score, factors


# ---------------------------------------------------------------------------
# Corroboration potential
# ---------------------------------------------------------------------------

OTHER_WITNESSES = re.compile(
    r"\b(other (people|witnesses|reports|sightings)|news|newspaper|reported by|also saw|others have seen)\b",
    re.IGNORECASE,
)
EXTERNAL_DATA = re.compile(
    r"\b(weather report|flight radar|satellite|seismic|police blotter|news article|local paper)\b",
    re.IGNORECASE,
)
SENSE_TYPES = (
    re.compile(r"\b(saw|visible|light|glow)", re.IGNORECASE),
    re.compile(r"\b(heard|sound|noise)", re.IGNORECASE),
    re.compile(r"\b(felt|sensation|temperature)", re.IGNORECASE),
    re.compile(r"\b(smell|odor)", re.IGNORECASE),
)


def score_corroboration_potential(inp: ScoringInput) -> Tuple[float, Factors]:
    score = 0.0
    factors = []
    desc = inp.description

    if inp.event_date and (inp.latitude is not None or inp.location_name):
        score += 3
        factors.append("date+location for cross-reference")
    if OTHER_WITNESSES.search(desc):
        score += 2
        factors.append("references other witnesses/reports")
    if EXTERNAL_DATA.search(desc):
        score += 2
        factors.append("references verifiable external data")
    if len(inp.tags) >= 2:
        score += 1
        factors.append(f"{len(inp.tags)} tags")
    if inp.city and inp.state_province:
        score += 1
        factors.append("city+state searchable")
    if _count_matches(SENSE_TYPES, desc) >= 3:
        score += 1
        factors.append("multi-sensory account")

    return score, factors or ["limited corroboration potential"]


# ---------------------------------------------------------------------------
# Narrative coherence
# ---------------------------------------------------------------------------

FIRST_PERSON = re.compile(r"\bI\b")
THIRD_PERSON = re.compile(r"\b(he|she|they|it)\b", re.IGNORECASE)
FLOW_PATTERNS = _terms(
    "then", "after", "before", "when", "while", "suddenly", "next",
    "finally", "at first", "eventually", "later", "meanwhile",
)


def score_narrative_coherence(inp: ScoringInput) -> Tuple[float, Factors]:
    score = 0.0
    factors = []
    desc = inp.description

    sentences = split_sentences(desc)
    if len(sentences) >= 5:
        score += 2
        factors.append(f"{len(sentences)} sentences")
    elif len(sentences) >= 3:
        score += 1
        factors.append(f"{len(sentences)} sentences (short)")

    if sentences:
        avg_words = sum(len(s.split()) for s in sentences) / len(sentences)
        if 10 <= avg_words <= 25:
            score += 2
            factors.append("good sentence length")
        elif 6 <= avg_words <= 35:
            score += 1
            factors.append("acceptable sentence length")
        else:
            factors.append(f"irregular sentence length (avg {round(avg_words)} words)")

    paragraphs = split_paragraphs(desc)
    if len(paragraphs) >= 3:
        score += 1.5
        factors.append("well-structured paragraphs")
    elif len(paragraphs) >= 2:
        score += 0.75

    first_person = len(FIRST_PERSON.findall(desc))
    third_person = len(THIRD_PERSON.findall(desc))
    if first_person > 5 and first_person > third_person * 2:
        score += 1.5
        factors.append("consistent first-person voice")
    elif first_person > 0:
        score += 0.5

    flow = _count_matches(FLOW_PATTERNS, desc)
    if flow >= 4:
        score += 2
        factors.append("strong narrative flow")
    elif flow >= 2:
        score += 1
        factors.append("basic narrative flow")

    # Ranting penalties
    caps_ratio = sum(1 for ch in desc if "A" <= ch <= "Z") / max(len(desc), 1)
    if caps_ratio > 0.4:
        score -= 2
        factors.append("excessive caps (penalty)")
    if desc.count("!") / max(len(sentences), 1) > 2:
        score -= 1
        factors.append("excessive exclamation (penalty)")

    return score, factors or ["minimal narrative"]


# ---------------------------------------------------------------------------
# Content originality
# ---------------------------------------------------------------------------

TEMPLATE_PATTERNS = (
    re.compile(r"\b(lorem ipsum|test report|sample data|example report)\b", re.IGNORECASE),
    re.compile(r"\b(copy and paste|copypasta|repost|x-post)\b", re.IGNORECASE),
    re.compile(r"\b(this is a test|testing 123|ignore this)\b", re.IGNORECASE),
)
PROPER_NAME = re.compile(r"\b[A-Z][a-z]+\s+[A-Z][a-z]+\b")
SPECIFIC_NUMBER = re.compile(r"\b\d{3,}\b")
UNIQUE_DETAIL = re.compile(r"\b(license plate|model|make|serial|badge)\b", re.IGNORECASE)
EMOTION_PATTERNS = (
    re.compile(r"\b(terrified|scared|frightened|shaking|couldn't sleep|nightmare|haunted me|still think about)\b", re.IGNORECASE),
    re.compile(r"\b(amazed|awestruck|speechless|couldn't believe|changed my life|never forget)\b", re.IGNORECASE),
    re.compile(r"\b(confused|puzzled|baffled|no explanation|makes no sense|rational person)\b", re.IGNORECASE),
)


def _halves_overlap(words: List[str]) -> float:
    half = len(words) // 2
    first = {w.lower() for w in words[:half]}
    second = [w.lower() for w in words[half:]]
    return sum(1 for w in second if w in first) / len(second)


def score_content_originality(inp: ScoringInput) -> Tuple[float, Factors]:
    # Neutral start: plagiarism can't be detected without a corpus
    score = 5.0
    factors = []
    desc = inp.description

    if _count_matches(TEMPLATE_PATTERNS, desc):
        score -= 3
        factors.append("template/boilerplate detected")

    if PROPER_NAME.search(desc):
        score += 1
        factors.append("specific names")
    if SPECIFIC_NUMBER.search(desc):
        score += 0.5
        factors.append("specific numbers")
    if UNIQUE_DETAIL.search(desc):
        score += 1
        factors.append("unique identifying details")

    emotions = _count_matches(EMOTION_PATTERNS, desc)
    if emotions >= 2:
        score += 2
        factors.append("authentic emotional response")
    elif emotions == 1:
        score += 1
        factors.append("emotional marker")

    words = desc.split()
    if len(words) > 50 and _halves_overlap(words) > 0.8:
        score -= 2
        factors.append("repetitive content detected")

    return score, factors or ["neutral originality"]


# ---------------------------------------------------------------------------
# Data completeness
# ---------------------------------------------------------------------------

COMPLETENESS_FIELDS: Tuple[Tuple[str, float, Callable[[ScoringInput], bool]], ...] = (
    ("title", 1.0, lambda i: bool(i.title.strip())),
    ("description", 1.0, lambda i: len(i.description) > 50),
    ("summary", 0.5, lambda i: len(i.summary) > 10),
    ("category", 0.5, lambda i: bool(i.category)),
    ("location_name", 1.0, lambda i: bool(i.location_name)),
    ("country", 0.5, lambda i: bool(i.country)),
    ("state_province", 0.75, lambda i: bool(i.state_province)),
    ("city", 0.75, lambda i: bool(i.city)),
    ("coordinates", 1.0, lambda i: i.has_coordinates),
    ("event_date", 1.0, lambda i: bool(i.event_date)),
    ("source_type", 0.5, lambda i: bool(i.source_type)),
    ("tags", 0.5, lambda i: len(i.tags) > 0),
    ("witness_count", 0.5, lambda i: bool(i.witness_count)),
    ("credibility", 0.5, lambda i: bool(i.credibility)),
)


def score_data_completeness(inp: ScoringInput) -> Tuple[float, Factors]:
    total_weight = sum(weight for _, weight, _ in COMPLETENESS_FIELDS)
    filled = [(name, weight) for name, weight, present in COMPLETENESS_FIELDS if present(inp)]
    filled_weight = sum(weight for _, weight in filled)
    score = round(filled_weight / total_weight * DIMENSION_MAX_SCORE, 1)
    return score, [f"{len(filled)}/{len(COMPLETENESS_FIELDS)} fields populated"]


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

DIMENSION_SCORERS: Dict[str, Callable[[ScoringInput], Tuple[float, Factors]]] = {
    "evidence_strength": score_evidence_strength,
    "witness_credibility": score_witness_credibility,
    "description_detail": score_description_detail,
    "location_specificity": score_location_specificity,
    "temporal_precision": score_temporal_precision,
    "source_reliability": score_source_reliability,
    "corroboration_potential": score_corroboration_potential,
    "narrative_coherence": score_narrative_coherence,
    "content_originality": score_content_originality,
    "data_completeness": score_data_completeness,
}

assert list(DIMENSION_SCORERS) == list(DIMENSION_WEIGHTS), "every weighted dimension needs a scorer"


def _dimension(name: str, inp: ScoringInput) -> DimensionScore:
    raw, factors = DIMENSION_SCORERS[name](inp)
    score = _clamp(raw)
    weight = DIMENSION_WEIGHTS[name]
    return DimensionScore(
        score=score,
        weight=weight,
        weighted=round(score * weight, 1),
        details="; ".join(factors),
    )


def score_report(inp: ScoringInput) -> QualityReport:
    """
    Score a report on all ten dimensions.

    Args:
        inp: The report to score

    Returns:
        QualityReport with the 0-100 composite, grade, recommended status and
        per-dimension breakdown
    """
    dimensions = {name: _dimension(name, inp) for name in DIMENSION_SCORERS}

    total_weights = sum(d.weight for d in dimensions.values())
    # DimensionScore.weighted is rounded for display; the composite uses exact products
    total_weighted = sum(d.score * d.weight for d in dimensions.values())
    total_score = int(round(total_weighted / (total_weights * DIMENSION_MAX_SCORE) * 100))

    report = QualityReport(
        total_score=total_score,
        grade=grade_for_score(total_score),
        recommended_status=status_from_score(total_score),
        dimensions=dimensions,
        version=SCORER_VERSION,
        scored_at=datetime.now(timezone.utc).isoformat(),
    )
    logger.debug(
        "Scored %r: %d (%s, %s)",
        inp.title[:60], report.total_score, report.grade.value, report.recommended_status.value,
    )
    return report


def quick_score(inp: ScoringInput) -> int:
    """Just the composite, for batch callers that don't need the breakdown."""
    return score_report(inp).total_score


def grade_distribution(reports: Iterable[QualityReport]) -> Dict[str, Any]:
    """Grade and status counts plus the average composite for a batch."""
    grades: Counter = Counter()
    statuses: Counter = Counter()
    total = 0
    count = 0
    for report in reports:
        grades[report.grade.value] += 1
        statuses[report.recommended_status.value] += 1
        total += report.total_score
        count += 1

    return {
        "count": count,
        "average_score": round(total / count, 1) if count else 0.0,
        "grades": {letter: grades.get(letter, 0) for letter in ("A", "B", "C", "D", "F")},
        "statuses": dict(statuses),
    }
