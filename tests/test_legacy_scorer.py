"""Tests for the deprecated four-part scorer."""

import pytest

from conftest import RICH_DESCRIPTION
from report_intake.models import PublicationStatus, ScoringInput
from report_intake.services.legacy_scorer import calculate_legacy_score, legacy_status_from_score


class TestLegacyScore:
    def test_emits_deprecation_warning(self, rich_report):
        with pytest.deprecated_call():
            calculate_legacy_score(rich_report)

    def test_parts_sum_to_total(self, rich_report):
        with pytest.deprecated_call():
            score = calculate_legacy_score(rich_report)
        assert score.total == score.length_score + score.detail_score + score.coherence_score + score.source_score
        for part in (score.length_score, score.detail_score, score.coherence_score, score.source_score):
            assert 0 <= part <= 25

    def test_bfro_class_a_source(self):
        inp = ScoringInput(description=RICH_DESCRIPTION, source_type="bfro", metadata={"bfro_class": "A"})
        with pytest.deprecated_call():
            score = calculate_legacy_score(inp)
        assert score.source_score == 25

    def test_unknown_source(self):
        with pytest.deprecated_call():
            score = calculate_legacy_score(ScoringInput(description="short"))
        assert score.source_score == 10
        assert score.length_score == 0


class TestLegacyStatus:
    @pytest.mark.parametrize("score,expected", [
        (70, PublicationStatus.APPROVED),
        (69, PublicationStatus.PENDING_REVIEW),
        (40, PublicationStatus.PENDING_REVIEW),
        (39, PublicationStatus.REJECTED),
    ])
    def test_legacy_thresholds(self, score, expected):
        with pytest.deprecated_call():
            assert legacy_status_from_score(score) == expected
