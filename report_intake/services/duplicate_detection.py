"""Near-duplicate detection for incoming reports.

The same sighting regularly arrives from several sources: a forum post, a
database entry and an encyclopedic summary, each worded differently and with
different amounts of metadata. Two detection passes are provided:

1. **Exact fingerprint** -- ``generate_fingerprint()`` collapses title, date
   and location into a short key. Identical keys are certain duplicates and
   cost one dict lookup each.
2. **Fuzzy comparison** -- ``compare_candidates()`` scores a pair on four
   signals and combines them:

   ============  ======
   title         0.30
   location      0.25
   date          0.20
   content       0.25
   ============  ======

   Pairs whose title *and* location are both weak are discarded before body
   text is compared. Pairs below 0.45 overall are discarded; the rest are
   tiered as possible (>= 0.45), likely (>= 0.65) or definite (>= 0.85).

Output contract:
    - ``compare_candidates()`` returns ``None`` or a ``DedupMatch``. Swapping
      the arguments yields the same scores.
    - ``DuplicateDetector.check_candidate()`` compares one new candidate
      against existing records in its location bucket (ingestion-time mode)
      and returns matches best-first.
    - Batch reconciliation lives in ``blocking``.

Known limitations:
    - Title edit distance is capped at 200 characters and skipped outright for
      titles of very different length.
    - Content similarity is lexical. Paraphrased accounts of the same event
      with no shared phrasing score low on content.
    - Records that share a source type and a source-local id are never
      matched, even if their text differs; they are revisions, not duplicates.
"""

import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..models.dedup import DedupCandidate, DedupMatch, MatchConfidence
from ..utils.state_normalizer import region_key
from .similarity import (
    content_similarity,
    date_similarity,
    location_similarity,
    title_similarity,
)
from .thresholds import (
    DEDUP_WEIGHTS,
    DEDUP_MIN_OVERALL,
    DEDUP_LIKELY_THRESHOLD,
    DEDUP_DEFINITE_THRESHOLD,
    DEDUP_EARLY_EXIT_SIMILARITY,
    DETAIL_TITLE_THRESHOLD,
    DETAIL_LOCATION_THRESHOLD,
    DETAIL_DATE_THRESHOLD,
    DETAIL_CONTENT_THRESHOLD,
)

logger = logging.getLogger(__name__)


@dataclass
class DedupConfig:
    """Composite weights and tier thresholds for fuzzy comparison.

    Defaults come from ``thresholds``; override only in tests or offline
    experiments.
    """

    title_weight: float = DEDUP_WEIGHTS["title"]
    location_weight: float = DEDUP_WEIGHTS["location"]
    date_weight: float = DEDUP_WEIGHTS["date"]
    content_weight: float = DEDUP_WEIGHTS["content"]

    # Below this composite a pair is not reported at all
    min_overall: float = DEDUP_MIN_OVERALL
    likely_threshold: float = DEDUP_LIKELY_THRESHOLD
    definite_threshold: float = DEDUP_DEFINITE_THRESHOLD

    # Title and location both under this: skip the body comparison
    early_exit_similarity: float = DEDUP_EARLY_EXIT_SIMILARITY


DEFAULT_CONFIG = DedupConfig()


def _same_source_record(a: DedupCandidate, b: DedupCandidate) -> bool:
    return bool(
        a.source_type and a.original_report_id
        and a.source_type == b.source_type
        and a.original_report_id == b.original_report_id
    )


def _describe_match(title: float, location: float, date: float, content: float) -> str:
    parts = []
    if title >= DETAIL_TITLE_THRESHOLD:
        parts.append(f"similar titles ({round(title * 100)}%)")
    if location >= DETAIL_LOCATION_THRESHOLD:
        parts.append("same area")
    if date >= DETAIL_DATE_THRESHOLD:
        parts.append("similar dates")
    if content >= DETAIL_CONTENT_THRESHOLD:
        parts.append("similar content")
    return ", ".join(parts) if parts else "moderate cross-signal similarity"


def compare_candidates(
    a: DedupCandidate,
    b: DedupCandidate,
    config: DedupConfig = DEFAULT_CONFIG,
) -> Optional[DedupMatch]:
    """Score a candidate pair. Returns a DedupMatch, or None if not a duplicate."""
    if a is b or (a.id and a.id == b.id):
        return None
    if _same_source_record(a, b):
        return None

    title_sim = title_similarity(a.title, b.title)
    location_sim = location_similarity(a, b)

    if title_sim < config.early_exit_similarity and location_sim < config.early_exit_similarity:
        return None

    date_sim = date_similarity(a.event_date, b.event_date)
    content_sim = content_similarity(a.description, b.description)

    overall = (
        title_sim * config.title_weight
        + location_sim * config.location_weight
        + date_sim * config.date_weight
        + content_sim * config.content_weight
    )

    if overall < config.min_overall:
        return None

    if overall >= config.definite_threshold:
        confidence = MatchConfidence.DEFINITE
    elif overall >= config.likely_threshold:
        confidence = MatchConfidence.LIKELY
    else:
        confidence = MatchConfidence.POSSIBLE

    return DedupMatch(
        report_a=a.id,
        report_b=b.id,
        title_similarity=round(title_sim, 2),
        location_similarity=round(location_sim, 2),
        date_similarity=round(date_sim, 2),
        content_similarity=round(content_sim, 2),
        overall_score=round(overall, 2),
        confidence=confidence,
        details=_describe_match(title_sim, location_sim, date_sim, content_sim),
    )


def bucket_key(candidate: DedupCandidate) -> Optional[str]:
    """Blocking key: canonical state/province, else country, else None (unlocated)."""
    return region_key(candidate.state_province, candidate.country)


def generate_fingerprint(title: Optional[str], event_date: Optional[str], location: Optional[str]) -> str:
    """
    Short exact-match key for a report.

    Alphanumeric title prefix, day of the event and alphanumeric location
    prefix joined with ``|``; missing dates become ``nodate``.
    """
    title_part = re.sub(r"[^a-z0-9]", "", (title or "").lower())[:40]
    date_part = (event_date or "")[:10] or "nodate"
    location_part = re.sub(r"[^a-z0-9]", "", (location or "").lower())[:20]
    return f"{title_part}|{date_part}|{location_part}"


def candidate_fingerprint(candidate: DedupCandidate) -> str:
    location = candidate.location_name or candidate.city or candidate.state_province or candidate.country
    return generate_fingerprint(candidate.title, candidate.event_date, location)


def find_exact_duplicates(candidates: Iterable[DedupCandidate]) -> List[List[str]]:
    """Groups of candidate ids (two or more) that share a fingerprint."""
    groups: Dict[str, List[str]] = defaultdict(list)
    for candidate in candidates:
        groups[candidate_fingerprint(candidate)].append(candidate.id)
    return [ids for ids in groups.values() if len(ids) > 1]


class DuplicateDetector:
    """Ingestion-time duplicate checks for single candidates."""

    def __init__(self, config: Optional[DedupConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def compare(self, a: DedupCandidate, b: DedupCandidate) -> Optional[DedupMatch]:
        return compare_candidates(a, b, self.config)

    def check_candidate(
        self,
        candidate: DedupCandidate,
        existing: Iterable[DedupCandidate],
        same_bucket_only: bool = True,
    ) -> List[DedupMatch]:
        """
        Compare one new candidate against existing records.

        Args:
            candidate: The incoming record
            existing: Records already in the corpus
            same_bucket_only: Only compare records sharing the candidate's
                blocking key (the unlocated bucket included)

        Returns:
            Matches sorted best-first
        """
        key = bucket_key(candidate)
        matches = []
        compared = 0
        for other in existing:
            if same_bucket_only and bucket_key(other) != key:
                continue
            compared += 1
            match = self.compare(candidate, other)
            if match:
                matches.append(match)

        matches.sort(key=lambda m: m.overall_score, reverse=True)
        logger.debug(
            "Checked %s against %d existing records: %d matches",
            candidate.id, compared, len(matches),
        )
        return matches

    def best_match(
        self,
        candidate: DedupCandidate,
        existing: Iterable[DedupCandidate],
    ) -> Optional[DedupMatch]:
        """Highest-scoring match for the candidate, or None."""
        matches = self.check_candidate(candidate, existing)
        return matches[0] if matches else None

    def get_config(self) -> Dict[str, float]:
        """Get current configuration as dict."""
        return {
            "title_weight": self.config.title_weight,
            "location_weight": self.config.location_weight,
            "date_weight": self.config.date_weight,
            "content_weight": self.config.content_weight,
            "min_overall": self.config.min_overall,
            "likely_threshold": self.config.likely_threshold,
            "definite_threshold": self.config.definite_threshold,
        }


# Singleton instance
_detector: Optional[DuplicateDetector] = None


def get_detector() -> DuplicateDetector:
    """Get the singleton duplicate detector instance."""
    global _detector
    if _detector is None:
        _detector = DuplicateDetector()
    return _detector
