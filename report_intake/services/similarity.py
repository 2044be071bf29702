"""Similarity primitives for near-duplicate detection.

Each function maps a pair of field values to a score in [0, 1] and is
symmetric in its arguments. Missing or unparsable values score 0 rather than
raising, so a candidate with sparse metadata simply matches less.

- ``title_similarity`` -- max of normalized edit distance and stop-word
  filtered token overlap. Edit distance catches typos and reordering of short
  titles; token overlap catches rewordings of longer ones.
- ``location_similarity`` -- great-circle distance bands when both sides have
  coordinates, otherwise a weighted blend of country/state/city/place-name
  agreement.
- ``date_similarity`` -- day-difference bands.
- ``content_similarity`` -- word 3-shingle Jaccard for bodies long enough to
  shingle, token overlap below that.
"""

import math
from typing import Optional, Set, Tuple

from rapidfuzz.distance import Levenshtein

from ..models.report import is_placeholder_point
from ..utils.dates import days_between
from ..utils.state_normalizer import normalize_country, normalize_state
from ..utils.text import normalize_text, tokenize
from .thresholds import (
    DATE_BANDS,
    DISTANCE_BANDS,
    LEVENSHTEIN_MAX_CHARS,
    LEVENSHTEIN_MAX_LENGTH_RATIO,
    LOCATION_FIELD_WEIGHTS,
    SHINGLE_MIN_CHARS,
    SHINGLE_SIZE,
)

EARTH_RADIUS_KM = 6371


def jaccard_similarity(set1: set, set2: set) -> float:
    """Calculate Jaccard similarity between two sets."""
    if not set1 or not set2:
        return 0.0
    intersection = len(set1 & set2)
    union = len(set1 | set2)
    return intersection / union if union > 0 else 0.0


def levenshtein_similarity(s1: Optional[str], s2: Optional[str]) -> float:
    """
    1 - edit distance / longer length, on lowercased trimmed strings.

    Strings whose lengths differ by more than half the longer one score 0
    without computing a distance, and both sides are truncated to
    LEVENSHTEIN_MAX_CHARS characters.
    """
    a = (s1 or "").lower().strip()
    b = (s2 or "").lower().strip()
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    longer = max(len(a), len(b))
    if abs(len(a) - len(b)) > longer * LEVENSHTEIN_MAX_LENGTH_RATIO:
        return 0.0

    return Levenshtein.normalized_similarity(a[:LEVENSHTEIN_MAX_CHARS], b[:LEVENSHTEIN_MAX_CHARS])


def token_similarity(s1: Optional[str], s2: Optional[str]) -> float:
    """Jaccard overlap of stop-word filtered word tokens."""
    tokens1 = tokenize(s1)
    tokens2 = tokenize(s2)
    if not tokens1 and not tokens2:
        # Nothing but stop words on both sides: only identical text counts
        return 1.0 if normalize_text(s1) == normalize_text(s2) and normalize_text(s1) else 0.0
    return jaccard_similarity(tokens1, tokens2)


def title_similarity(t1: Optional[str], t2: Optional[str]) -> float:
    """Best of edit-distance and token-overlap similarity. Empty titles score 0."""
    if not (t1 or "").strip() or not (t2 or "").strip():
        return 0.0
    return max(levenshtein_similarity(t1, t2), token_similarity(t1, t2))


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance in kilometers between two points
    on the earth (specified in decimal degrees).
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push sqrt(a) a hair past 1.0 near antipodal points
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return c * EARTH_RADIUS_KM


def distance_band_score(distance_km: float) -> float:
    for limit, score in DISTANCE_BANDS:
        if distance_km <= limit:
            return score
    return 0.0


def _field(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _point(record) -> Optional[Tuple[float, float]]:
    """Record coordinates, or None when missing or the (0, 0) scraper placeholder."""
    if record.latitude is None or record.longitude is None:
        return None
    if is_placeholder_point(record.latitude, record.longitude):
        return None
    return record.latitude, record.longitude


def location_similarity(a, b) -> float:
    """
    Similarity of two located records (anything with location_name, city,
    state_province, country, latitude and longitude attributes).

    Without usable coordinates on both sides, each field present on both
    records contributes its weight times its agreement, and the sum is divided
    by the weights of those fields alone. States and countries are compared in
    canonical form, so "CO" agrees with "Colorado".
    """
    point_a, point_b = _point(a), _point(b)
    if point_a and point_b:
        return distance_band_score(haversine_km(*point_a, *point_b))

    pairs = (
        ("country", _field(normalize_country(a.country)), _field(normalize_country(b.country))),
        ("state_province", _field(normalize_state(a.state_province)), _field(normalize_state(b.state_province))),
        ("city", _field(a.city), _field(b.city)),
        ("location_name", _field(a.location_name), _field(b.location_name)),
    )

    score = 0.0
    compared_weight = 0.0
    for name, value_a, value_b in pairs:
        if not (value_a and value_b):
            continue
        weight = LOCATION_FIELD_WEIGHTS[name]
        compared_weight += weight
        if name in ("country", "state_province"):
            score += weight if value_a == value_b else 0.0
        else:
            score += levenshtein_similarity(value_a, value_b) * weight

    if compared_weight == 0:
        return 0.0
    return min(score / compared_weight, 1.0)


def date_similarity(d1, d2) -> float:
    """Banded similarity on the day difference between two event dates."""
    days = days_between(d1, d2)
    if days is None:
        return 0.0
    for limit, score in DATE_BANDS:
        if days <= limit:
            return score
    return 0.0


def create_shingles(text: Optional[str], shingle_size: int = SHINGLE_SIZE) -> Set[Tuple[str, ...]]:
    """Create word n-grams (shingles) from text. Too-short text has none."""
    words = normalize_text(text).split()
    if len(words) < shingle_size:
        return set()
    return {tuple(words[i:i + shingle_size]) for i in range(len(words) - shingle_size + 1)}


def content_similarity(c1: Optional[str], c2: Optional[str]) -> float:
    """Shingle overlap for full bodies, token overlap when either is short."""
    if not (c1 or "").strip() or not (c2 or "").strip():
        return 0.0
    if len(c1) < SHINGLE_MIN_CHARS or len(c2) < SHINGLE_MIN_CHARS:
        return token_similarity(c1, c2)
    return jaccard_similarity(create_shingles(c1), create_shingles(c2))
