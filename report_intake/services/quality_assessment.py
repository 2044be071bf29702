"""
Intake quality gate: rejection filter, dimension scoring, phenomenon tagging.

``assess_quality()`` is the single entry point ingestion calls for each
candidate report. A post that is not a first-hand experience (meta post,
merchandise, fiction, spam) is turned away with a reason before any scoring
work; everything else gets a full QualityReport whose recommended status the
caller persists, plus phenomenon tags when the caller supplies a matcher.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Union

from ..models.quality import AssessmentResult
from ..models.report import ScoringInput
from .phenomenon_matcher import PhenomenonMatcher
from .quality_scorer import score_report
from .rejection_filter import FilterOptions, classify

logger = logging.getLogger(__name__)

ReportLike = Union[ScoringInput, Mapping[str, Any]]


def to_scoring_input(record: ReportLike) -> ScoringInput:
    """Validate a raw record (scraped dict, DB row) into a ScoringInput."""
    if isinstance(record, ScoringInput):
        return record
    return ScoringInput.model_validate(dict(record))


def assess_quality(
    record: ReportLike,
    options: Optional[FilterOptions] = None,
    matcher: Optional[PhenomenonMatcher] = None,
) -> AssessmentResult:
    """
    Filter, score and tag one candidate report.

    Args:
        record: ScoringInput or a mapping with the same keys
        options: Rejection filter overrides (defaults otherwise)
        matcher: Phenomenon matcher; reports are left untagged without one

    Returns:
        AssessmentResult: passed=False with reason and rule when filtered out,
        otherwise passed=True with the QualityReport and any phenomenon matches
    """
    candidate = to_scoring_input(record)

    verdict = classify(candidate.title, candidate.description, options)
    if not verdict.passed:
        return AssessmentResult(
            passed=False,
            reason=verdict.reason,
            rule=verdict.rule.value if verdict.rule else None,
        )

    phenomena = []
    if matcher is not None:
        phenomena = matcher.identify(
            candidate.title, candidate.summary, candidate.description, candidate.category,
        )
    return AssessmentResult(passed=True, report=score_report(candidate), phenomena=phenomena)


def assess_batch(
    records: Iterable[ReportLike],
    options: Optional[FilterOptions] = None,
    matcher: Optional[PhenomenonMatcher] = None,
) -> Iterator[AssessmentResult]:
    """Assess records lazily, logging a pass/reject summary at the end."""
    stats: Dict[str, int] = {"passed": 0, "rejected": 0, "tagged": 0}
    for record in records:
        result = assess_quality(record, options, matcher)
        stats["passed" if result.passed else "rejected"] += 1
        if result.phenomena:
            stats["tagged"] += 1
        yield result
    logger.info(
        f"Quality gate: {stats['passed']} passed, {stats['rejected']} filtered out, "
        f"{stats['tagged']} tagged with phenomena"
    )
