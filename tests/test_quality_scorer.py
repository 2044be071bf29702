"""Tests for the ten-dimension quality scorer."""

import pytest

from conftest import words_body
from report_intake.models import Grade, PublicationStatus, ScoringInput
from report_intake.services.quality_scorer import (
    DIMENSION_SCORERS,
    grade_distribution,
    quick_score,
    score_description_detail,
    score_location_specificity,
    score_narrative_coherence,
    score_report,
    score_source_reliability,
    score_temporal_precision,
    word_count_points,
)
from report_intake.services.thresholds import DIMENSION_WEIGHTS, SCORER_VERSION


class TestScoreReport:
    def test_rich_report_is_approved(self, rich_report):
        report = score_report(rich_report)
        assert report.total_score >= 60
        assert report.recommended_status == PublicationStatus.APPROVED
        assert report.grade in (Grade.A, Grade.B)
        assert report.version == SCORER_VERSION

    def test_all_dimensions_present(self, rich_report):
        report = score_report(rich_report)
        assert list(report.dimensions) == list(DIMENSION_WEIGHTS)
        for name, dim in report.dimensions.items():
            assert 0 <= dim.score <= 10
            assert dim.weight == DIMENSION_WEIGHTS[name]
            assert dim.weighted == round(dim.score * dim.weight, 1)
            assert dim.details

    def test_composite_uses_exact_products(self, rich_report):
        report = score_report(rich_report)
        exact = sum(d.score * d.weight for d in report.dimensions.values())
        expected = int(round(exact / (sum(DIMENSION_WEIGHTS.values()) * 10) * 100))
        assert report.total_score == expected

    def test_idempotent(self, rich_report):
        first = score_report(rich_report)
        second = score_report(rich_report)
        assert first == second
        assert first.scored_at

    def test_empty_input_scores_low(self):
        report = score_report(ScoringInput())
        assert 0 <= report.total_score < 35
        assert report.recommended_status == PublicationStatus.REJECTED
        assert report.grade == Grade.F

    def test_thin_community_report(self):
        inp = ScoringInput(
            title="Shadow in the hallway",
            description=words_body(40),
            source_type="shadowlands",
        )
        report = score_report(inp)
        assert report.grade in (Grade.D, Grade.F)
        assert report.recommended_status in (PublicationStatus.REJECTED, PublicationStatus.PENDING_REVIEW)

    def test_quick_score_matches(self, rich_report):
        assert quick_score(rich_report) == score_report(rich_report).total_score

    def test_malformed_metadata_does_not_raise(self):
        inp = ScoringInput.model_validate({
            "title": "Lights",
            "description": "Saw lights.",
            "latitude": "not a number",
            "witness_count": "many",
            "tags": 42,
            "metadata": ["unexpected"],
            "source_type": "reddit",
        })
        report = score_report(inp)
        assert report.total_score >= 0
        assert inp.latitude is None
        assert inp.witness_count is None
        assert inp.tags == ()
        assert inp.metadata == {}


class TestDescriptionDetail:
    def test_monotonic_in_length(self):
        scores = [
            score_description_detail(ScoringInput(description=words_body(n)))[0]
            for n in (40, 80, 100, 150, 200, 300, 450, 500, 600)
        ]
        assert scores == sorted(scores)
        assert scores[-1] > scores[0]

    @pytest.mark.parametrize("words,points", [
        (0, 0.0),
        (50, 0.5),
        (100, 1.0),
        (150, 1.5),
        (200, 2.0),
        (350, 2.5),
        (500, 3.0),
        (2000, 3.0),
    ])
    def test_word_count_curve(self, words, points):
        assert word_count_points(words) == pytest.approx(points)

    def test_sensory_and_behavior_signals(self):
        plain, _ = score_description_detail(ScoringInput(description=words_body(120)))
        vivid, factors = score_description_detail(ScoringInput(
            description=words_body(120) + " It was glowing and humming, then it hovered and vanished.",
        ))
        assert vivid > plain
        assert any("sensory" in f for f in factors)
        assert "behavioral details" in factors


class TestLocationSpecificity:
    def test_coordinates_count(self):
        score, factors = score_location_specificity(ScoringInput(latitude=39.7, longitude=-104.9))
        assert score == 3
        assert "GPS coordinates" in factors

    def test_zero_coordinates_ignored(self):
        score, factors = score_location_specificity(ScoringInput(latitude=0, longitude=0))
        assert score == 0
        assert factors == ["no location data"]

    def test_zero_coordinates_not_counted_as_populated(self):
        assert not ScoringInput(latitude=0, longitude=0).has_coordinates
        assert ScoringInput(latitude=0, longitude=-104.9).has_coordinates

    def test_structured_fields(self):
        score, _ = score_location_specificity(ScoringInput(
            country="United States", state_province="CO", city="Denver", location_name="Cherry Creek",
        ))
        assert score == pytest.approx(5.0)


class TestTemporalPrecision:
    def test_full_date_beats_year(self):
        exact, _ = score_temporal_precision(ScoringInput(event_date="2019-08-02"))
        approx, factors = score_temporal_precision(ScoringInput(event_date="1978"))
        assert exact == 3
        assert approx == 1.5
        assert "approximate date" in factors

    def test_duration_from_metadata(self):
        score, factors = score_temporal_precision(ScoringInput(metadata={"event_duration_minutes": 12}))
        assert "duration specified" in factors
        assert score == 1.5


class TestSourceReliability:
    @pytest.mark.parametrize("source,expected", [
        ("bfro", 8.0),
        ("nuforc", 7.5),
        ("reddit", 4.0),
        ("somewhere-else", 3.0),
        (None, 3.0),
    ])
    def test_base_scores(self, source, expected):
        score, _ = score_source_reliability(ScoringInput(source_type=source))
        assert score == expected

    def test_bfro_class_boost(self):
        score, factors = score_source_reliability(ScoringInput(source_type="bfro", metadata={"bfroClass": "B"}))
        assert score == 9.0
        assert "Class B sighting" in factors

    def test_reddit_engagement(self):
        high, _ = score_source_reliability(ScoringInput(source_type="reddit", metadata={"score": 450}))
        mid, _ = score_source_reliability(ScoringInput(source_type="reddit", metadata={"score": "75"}))
        junk, _ = score_source_reliability(ScoringInput(source_type="reddit", metadata={"score": "lots"}))
        assert (high, mid, junk) == (6.0, 5.0, 4.0)

    def test_source_url_boost(self):
        score, _ = score_source_reliability(ScoringInput(source_type="nuforc", metadata={"source_url": "https://x"}))
        assert score == 8.0


class TestNarrativeCoherence:
    def test_caps_rant_penalized(self):
        calm_text = "I heard a knock at the door and then it stopped. " * 6
        calm, _ = score_narrative_coherence(ScoringInput(description=calm_text))
        rant, factors = score_narrative_coherence(ScoringInput(description=calm_text.upper()))
        assert rant < calm
        assert "excessive caps (penalty)" in factors


class TestGradeDistribution:
    def test_distribution(self, rich_report):
        reports = [score_report(rich_report), score_report(ScoringInput())]
        dist = grade_distribution(reports)
        assert dist["count"] == 2
        assert sum(dist["grades"].values()) == 2
        assert dist["grades"]["F"] >= 1
        assert dist["statuses"]["approved"] == 1
        assert dist["statuses"]["rejected"] == 1

    def test_empty(self):
        dist = grade_distribution([])
        assert dist == {
            "count": 0,
            "average_score": 0.0,
            "grades": {"A": 0, "B": 0, "C": 0, "D": 0, "F": 0},
            "statuses": {},
        }


def test_every_dimension_has_a_scorer():
    assert set(DIMENSION_SCORERS) == set(DIMENSION_WEIGHTS)
