"""
Batch duplicate reconciliation with location blocking.

Comparing every pair in a corpus is O(n^2). Candidates are first grouped into
buckets by their canonical state/province (falling back to country), and only
pairs inside a bucket are compared. Records with no usable location share a
single unlocated bucket, which is still quadratic; run location inference on
them first to keep it small.

Buckets are independent, so a scan can fan them out to worker processes.
Cancellation is checked between buckets, never in the middle of one.
"""

import concurrent.futures
import logging
import threading
import time
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..models.dedup import DedupCandidate, DedupMatch, DedupResult, MatchConfidence
from ..utils.location_inference import infer_location
from .duplicate_detection import DEFAULT_CONFIG, DedupConfig, bucket_key, compare_candidates

logger = logging.getLogger(__name__)

_CONFIDENCE_RANK = {
    MatchConfidence.POSSIBLE: 0,
    MatchConfidence.LIKELY: 1,
    MatchConfidence.DEFINITE: 2,
}


def build_buckets(candidates: Iterable[DedupCandidate]) -> Dict[Optional[str], List[DedupCandidate]]:
    """Group candidates by blocking key. The None key holds unlocated records."""
    buckets: Dict[Optional[str], List[DedupCandidate]] = defaultdict(list)
    for candidate in candidates:
        buckets[bucket_key(candidate)].append(candidate)
    return dict(buckets)


def compare_bucket(
    bucket: Sequence[DedupCandidate],
    config: DedupConfig = DEFAULT_CONFIG,
) -> Tuple[List[DedupMatch], int]:
    """All-pairs comparison inside one bucket. Returns (matches, pairs compared)."""
    matches = []
    compared = 0
    for i in range(len(bucket)):
        for j in range(i + 1, len(bucket)):
            compared += 1
            match = compare_candidates(bucket[i], bucket[j], config)
            if match:
                matches.append(match)
    return matches, compared


def _sort_matches(matches: List[DedupMatch]) -> List[DedupMatch]:
    return sorted(matches, key=lambda m: (-m.overall_score, m.pair_key))


class DuplicateScanner:
    """Blocked all-pairs duplicate scan over a batch of candidates."""

    def __init__(
        self,
        config: Optional[DedupConfig] = None,
        max_workers: int = 1,
        use_processes: bool = True,
    ):
        self.config = config or DEFAULT_CONFIG
        self.max_workers = max(1, max_workers)
        self.use_processes = use_processes

    def scan(
        self,
        candidates: Iterable[DedupCandidate],
        cancel_event: Optional[threading.Event] = None,
    ) -> DedupResult:
        """
        Find near-duplicate pairs within location buckets.

        Args:
            candidates: Records to reconcile
            cancel_event: When set, the scan stops before the next bucket and
                returns what it has

        Returns:
            DedupResult with matches sorted best-first and run statistics
        """
        started = time.monotonic()
        candidates = list(candidates)
        buckets = build_buckets(candidates)
        # Singletons have nothing to compare
        work = [
            bucket for _, bucket in sorted(buckets.items(), key=lambda kv: (kv[0] is None, kv[0] or ""))
            if len(bucket) > 1
        ]

        result = DedupResult(bucket_count=len(buckets))
        if self.max_workers > 1 and len(work) > 1:
            self._scan_parallel(work, result, cancel_event)
        else:
            self._scan_sequential(work, result, cancel_event)

        result.matches = _sort_matches(result.matches)
        result.duration_ms = round((time.monotonic() - started) * 1000, 1)

        if result.cancelled:
            logger.warning(
                "Dedup scan cancelled: %d matches from %d comparisons before stopping",
                result.duplicates_found, result.total_compared,
            )
        else:
            logger.info(
                f"Dedup scan: {len(candidates)} candidates, {result.bucket_count} buckets, "
                f"{result.total_compared} comparisons, {result.duplicates_found} matches "
                f"in {result.duration_ms}ms"
            )
        return result

    def _scan_sequential(self, work, result: DedupResult, cancel_event) -> None:
        for bucket in work:
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                return
            matches, compared = compare_bucket(bucket, self.config)
            result.matches.extend(matches)
            result.total_compared += compared

    def _scan_parallel(self, work, result: DedupResult, cancel_event) -> None:
        executor_cls = (
            concurrent.futures.ProcessPoolExecutor if self.use_processes
            else concurrent.futures.ThreadPoolExecutor
        )
        with executor_cls(max_workers=self.max_workers) as executor:
            futures = [executor.submit(compare_bucket, bucket, self.config) for bucket in work]
            for future in concurrent.futures.as_completed(futures):
                matches, compared = future.result()
                result.matches.extend(matches)
                result.total_compared += compared
                if cancel_event is not None and cancel_event.is_set():
                    result.cancelled = True
                    for pending in futures:
                        pending.cancel()
                    break


def scan(
    candidates: Iterable[DedupCandidate],
    max_workers: int = 1,
    cancel_event: Optional[threading.Event] = None,
) -> DedupResult:
    """Blocked scan with the default config; matches plus run stats."""
    return DuplicateScanner(max_workers=max_workers).scan(candidates, cancel_event)


def find_duplicates(
    candidates: Iterable[DedupCandidate],
    max_workers: int = 1,
    cancel_event: Optional[threading.Event] = None,
) -> List[DedupMatch]:
    """Near-duplicate pairs in a batch, best-first."""
    return scan(candidates, max_workers, cancel_event).matches


def with_inferred_location(candidate: DedupCandidate, min_confidence: float = 0.5) -> DedupCandidate:
    """
    Fill a candidate's missing state/country from its text so it leaves the
    unlocated bucket. Candidates that already have a region are returned as-is.
    """
    if bucket_key(candidate) is not None:
        return candidate

    inferred = infer_location(candidate.title, None, candidate.description, has_coordinates=candidate.has_coordinates)
    if inferred is None or inferred.confidence < min_confidence:
        return candidate
    if not (inferred.state_province or inferred.country):
        return candidate

    update = {
        "state_province": candidate.state_province or inferred.state_province,
        "country": candidate.country or inferred.country,
    }
    if not candidate.location_name:
        update["location_name"] = inferred.location_name
    if not candidate.city and inferred.city:
        update["city"] = inferred.city
    logger.debug("Candidate %s placed via %s: %s", candidate.id, inferred.source, inferred.location_name)
    return candidate.model_copy(update=update)


def cluster_matches(
    matches: Iterable[DedupMatch],
    min_confidence: MatchConfidence = MatchConfidence.LIKELY,
) -> List[List[str]]:
    """
    Merge matched pairs into duplicate groups (union-find over report ids).

    Only matches at or above ``min_confidence`` link records. Groups are
    returned sorted, largest first.
    """
    parent: Dict[str, str] = {}

    def find(x: str) -> str:
        parent.setdefault(x, x)
        if parent[x] != x:
            parent[x] = find(parent[x])
        return parent[x]

    def union(x: str, y: str):
        px, py = find(x), find(y)
        if px != py:
            parent[max(px, py)] = min(px, py)

    threshold = _CONFIDENCE_RANK[min_confidence]
    for match in matches:
        if _CONFIDENCE_RANK[match.confidence] >= threshold:
            union(match.report_a, match.report_b)

    groups: Dict[str, Set[str]] = defaultdict(set)
    for node in list(parent):
        groups[find(node)].add(node)

    return sorted((sorted(g) for g in groups.values()), key=lambda g: (-len(g), g[0]))
