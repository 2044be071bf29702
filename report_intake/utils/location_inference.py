"""
Location inference from report narrative text.

Unlocated reports all land in one blocking bucket, which is the expensive case
for duplicate scans. This module recovers a region from the text itself using a
fixed gazetteer (paranormal hotspots, parks, bodies of water, regions) and a
handful of regex triggers:

1. Coordinates written in the text (0.95)
2. Known landmarks (0.85)
3. "in/near City, ST" mentions (0.80)
4. Directional state references, e.g. "northern California" (0.60)
5. Regional references, e.g. "the Pacific Northwest" (0.55)
6. Highway references (0.35, country only)

The highest-confidence candidate wins. A candidate whose state disagrees with
the state already on the record has its confidence halved.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .state_normalizer import STATE_NAME_TO_CODE, VALID_STATE_CODES

logger = logging.getLogger(__name__)

US = 'United States'

# name -> (city, state, country, lat, lng)
LANDMARKS: Dict[str, Tuple[Optional[str], Optional[str], str, float, float]] = {
    'area 51': (None, 'NV', US, 37.2350, -115.8111),
    'groom lake': (None, 'NV', US, 37.2350, -115.8111),
    'roswell': ('Roswell', 'NM', US, 33.3943, -104.5230),
    'skinwalker ranch': (None, 'UT', US, 40.2589, -109.8880),
    'point pleasant': ('Point Pleasant', 'WV', US, 38.8448, -82.1371),
    'pine barrens': (None, 'NJ', US, 39.7836, -74.5906),
    'marfa lights': ('Marfa', 'TX', US, 30.3087, -104.0213),
    'brown mountain': (None, 'NC', US, 35.8640, -81.7310),
    'loch ness': (None, None, 'United Kingdom', 57.3229, -4.4244),
    'rendlesham forest': (None, None, 'United Kingdom', 52.0833, 1.4333),
    'wright-patterson': ('Dayton', 'OH', US, 39.8261, -84.0484),
    'dulce base': (None, 'NM', US, 36.9336, -106.9992),
    'mount shasta': (None, 'CA', US, 41.4092, -122.1949),
    'sedona': ('Sedona', 'AZ', US, 34.8697, -111.7610),
    'gettysburg': ('Gettysburg', 'PA', US, 39.8309, -77.2311),
    'yellowstone': (None, 'WY', US, 44.4280, -110.5885),
    'yosemite': (None, 'CA', US, 37.8651, -119.5383),
    'everglades': (None, 'FL', US, 25.2867, -80.8987),
    'olympic national': (None, 'WA', US, 47.8021, -123.6044),
    'great smoky': (None, 'TN', US, 35.6118, -83.4895),
    'denali': (None, 'AK', US, 63.0695, -151.0074),
    'grand canyon': (None, 'AZ', US, 36.1069, -112.1129),
    'death valley': (None, 'CA', US, 36.5054, -117.0794),
    'big bend': (None, 'TX', US, 29.2498, -103.2502),
    'crater lake': (None, 'OR', US, 42.8684, -122.1685),
    'black hills': (None, 'SD', US, 43.8554, -103.4590),
    'lake tahoe': (None, 'CA', US, 39.0968, -120.0324),
    'lake champlain': (None, 'VT', US, 44.5335, -73.3370),
    'chesapeake bay': (None, 'MD', US, 37.8000, -76.1000),
    'puget sound': (None, 'WA', US, 47.5000, -122.5000),
}

# name -> (state, country)
REGIONAL_REFERENCES: Dict[str, Tuple[Optional[str], str]] = {
    'pacific northwest': (None, US),
    'new england': (None, US),
    'deep south': (None, US),
    'the midwest': (None, US),
    'great plains': (None, US),
    'four corners': (None, US),
    'appalachia': (None, US),
    'rocky mountains': (None, US),
    'blue ridge mountains': (None, US),
    'the bayou': ('LA', US),
    'the ozarks': ('MO', US),
    'texas hill country': ('TX', US),
    'florida keys': ('FL', US),
    'outer banks': ('NC', US),
    'hudson valley': ('NY', US),
    'central valley': ('CA', US),
    'mojave desert': ('CA', US),
}

_STATE_NAMES = "|".join(
    sorted((name.replace(" ", r"\s+") for name, code in STATE_NAME_TO_CODE.items() if code not in ("DC", "PR", "GU")),
           key=len, reverse=True)
)

_DIRECTIONAL = re.compile(
    r'\b(northern|southern|eastern|western|central|northeast|northwest|southeast|southwest'
    r'|rural|upstate|downstate)\s+(' + _STATE_NAMES + r')\b',
    re.IGNORECASE,
)

_CITY_STATE = re.compile(
    r'\b(?:in|near|outside|around|from|visiting|at)\s+'
    r'([A-Z][a-zA-Z]+(?:\s[A-Z][a-zA-Z]+)?),\s*([A-Z]{2})\b'
)

_DECIMAL_COORDINATES = re.compile(
    r'(-?\d{1,3}\.\d{2,8})\s*°?\s*([NS])?\s*[,\s]\s*(-?\d{1,3}\.\d{2,8})\s*°?\s*([EW])?'
)

_HIGHWAYS = (
    (re.compile(r'\b(?:along|on|near|off)\s+(?:I-|Interstate\s+)(\d+)\b', re.IGNORECASE), 'Interstate {}'),
    (re.compile(r'\b(?:along|on|near|off)\s+(?:US-?|US Route\s+|Route\s+)(\d+)\b', re.IGNORECASE), 'US Route {}'),
    (re.compile(r'\b(?:along|on|near|off)\s+(?:Highway|Hwy)\s+(\d+)\b', re.IGNORECASE), 'Highway {}'),
)


@dataclass(frozen=True)
class InferredLocation:
    """A location recovered from free text."""
    location_name: str
    confidence: float
    source: str
    raw_match: str
    city: Optional[str] = None
    state_province: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


def _title_case(text: str) -> str:
    return ' '.join(w[:1].upper() + w[1:].lower() for w in text.split())


def _word_pattern(phrase: str) -> re.Pattern:
    return re.compile(r'\b' + re.escape(phrase) + r'\b', re.IGNORECASE)


_LANDMARK_PATTERNS = [(_word_pattern(name), name, info) for name, info in LANDMARKS.items()]
_REGION_PATTERNS = [(_word_pattern(name), name, info) for name, info in REGIONAL_REFERENCES.items()]


def extract_coordinates(text: str) -> Optional[InferredLocation]:
    """Decimal-degree coordinates written in the text, e.g. "37.2350, -115.8111"."""
    if not text:
        return None
    match = _DECIMAL_COORDINATES.search(text)
    if not match:
        return None

    lat = float(match.group(1))
    lng = float(match.group(3))
    if match.group(2) == 'S':
        lat = -abs(lat)
    if match.group(4) == 'W':
        lng = -abs(lng)
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None

    return InferredLocation(
        location_name=f"{lat:.4f}, {lng:.4f}",
        latitude=lat,
        longitude=lng,
        confidence=0.95,
        source='coordinate_mention',
        raw_match=match.group(0),
    )


def match_landmark(text: str) -> Optional[InferredLocation]:
    for pattern, name, (city, state, country, lat, lng) in _LANDMARK_PATTERNS:
        if pattern.search(text):
            label = city or _title_case(name)
            return InferredLocation(
                location_name=f"{label}, {state or country}",
                city=city,
                state_province=state,
                country=country,
                latitude=lat,
                longitude=lng,
                confidence=0.85,
                source='landmark',
                raw_match=name,
            )
    return None


def match_city_state(text: str) -> Optional[InferredLocation]:
    """Explicit "near Phoenix, AZ" mentions with a valid US state code."""
    for match in _CITY_STATE.finditer(text):
        city, code = match.group(1).strip(), match.group(2)
        if code in VALID_STATE_CODES:
            return InferredLocation(
                location_name=f"{city}, {code}",
                city=city,
                state_province=code,
                country=US,
                confidence=0.80,
                source='explicit_place',
                raw_match=match.group(0),
            )
    return None


def match_directional(text: str) -> Optional[InferredLocation]:
    match = _DIRECTIONAL.search(text)
    if not match:
        return None
    state_name = re.sub(r'\s+', ' ', match.group(2).lower())
    code = STATE_NAME_TO_CODE.get(state_name)
    if not code:
        return None
    return InferredLocation(
        location_name=f"{_title_case(match.group(1))} {_title_case(state_name)}",
        state_province=code,
        country=US,
        confidence=0.60,
        source='directional_reference',
        raw_match=match.group(0),
    )


def match_region(text: str) -> Optional[InferredLocation]:
    for pattern, name, (state, country) in _REGION_PATTERNS:
        if pattern.search(text):
            label = _title_case(name[4:] if name.startswith('the ') else name)
            return InferredLocation(
                location_name=f"{label}, {state}" if state else label,
                state_province=state,
                country=country,
                confidence=0.55,
                source='regional_reference',
                raw_match=name,
            )
    return None


def match_highway(text: str) -> Optional[InferredLocation]:
    for pattern, label in _HIGHWAYS:
        match = pattern.search(text)
        if match:
            return InferredLocation(
                location_name=label.format(match.group(1)),
                country=US,
                confidence=0.35,
                source='road_highway',
                raw_match=match.group(0),
            )
    return None


def infer_location(
    title: Optional[str],
    summary: Optional[str],
    description: Optional[str],
    existing_state: Optional[str] = None,
    has_coordinates: bool = False,
) -> Optional[InferredLocation]:
    """
    Infer the most likely location of a report from its text.

    Args:
        title, summary, description: Report text fields (any may be empty)
        existing_state: State already on the record, used to penalize conflicts
        has_coordinates: When True there is nothing to infer

    Returns:
        The best InferredLocation, or None if nothing matched
    """
    if has_coordinates:
        return None

    texts = [t for t in (title, summary, description) if t]
    full_text = ' '.join(texts)
    if len(full_text.strip()) < 10:
        return None

    candidates: List[InferredLocation] = []
    for text in texts:
        coords = extract_coordinates(text)
        if coords:
            candidates.append(coords)
            break

    for matcher in (match_landmark, match_city_state, match_directional, match_region, match_highway):
        found = matcher(full_text)
        if found:
            candidates.append(found)

    if not candidates:
        return None

    if existing_state:
        existing = existing_state.strip().upper()
        candidates = [
            replace(c, confidence=c.confidence * 0.5)
            if c.state_province and c.state_province != existing else c
            for c in candidates
        ]

    best = max(candidates, key=lambda c: c.confidence)
    logger.debug("Inferred location %r via %s (%.2f)", best.location_name, best.source, best.confidence)
    return best


