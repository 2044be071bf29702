"""Tests for tuned constants and their startup validation."""

import pytest

from report_intake.services import thresholds
from report_intake.services.errors import ConfigurationError, IntakeError


class TestShippedConfiguration:
    def test_validates_cleanly(self):
        thresholds.validate_configuration()

    def test_ten_dimensions(self):
        assert len(thresholds.DIMENSION_WEIGHTS) == 10
        assert all(w > 0 for w in thresholds.DIMENSION_WEIGHTS.values())

    def test_dedup_weights_sum_to_one(self):
        assert sum(thresholds.DEDUP_WEIGHTS.values()) == pytest.approx(1.0)

    def test_status_thresholds(self):
        assert thresholds.APPROVE_THRESHOLD == 60
        assert thresholds.REVIEW_THRESHOLD == 35


class TestValidationFailures:
    def test_non_positive_dimension_weight(self):
        weights = dict(thresholds.DIMENSION_WEIGHTS, evidence_strength=0)
        with pytest.raises(ConfigurationError) as exc_info:
            thresholds.validate_configuration(dimension_weights=weights)
        assert "evidence_strength" in str(exc_info.value)

    def test_empty_dimension_weights(self):
        with pytest.raises(ConfigurationError):
            thresholds.validate_configuration(dimension_weights={})

    def test_dedup_weights_must_sum_to_one(self):
        weights = dict(thresholds.DEDUP_WEIGHTS, title=0.5)
        with pytest.raises(ConfigurationError):
            thresholds.validate_configuration(dedup_weights=weights)

    def test_status_thresholds_out_of_order(self):
        with pytest.raises(ConfigurationError):
            thresholds.validate_configuration(approve_threshold=30, review_threshold=35)

    def test_status_threshold_out_of_range(self):
        with pytest.raises(ConfigurationError):
            thresholds.validate_configuration(approve_threshold=120, review_threshold=35)

    def test_duplicate_tiers_out_of_order(self):
        with pytest.raises(ConfigurationError):
            thresholds.validate_configuration(likely_threshold=0.9, definite_threshold=0.85)
        with pytest.raises(ConfigurationError):
            thresholds.validate_configuration(min_overall=0.7, likely_threshold=0.65)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            thresholds.validate_configuration(approve_threshold=10, review_threshold=20)
        assert issubclass(ConfigurationError, IntakeError)
