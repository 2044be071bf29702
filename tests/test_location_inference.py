"""Tests for location inference and state normalization."""

import pytest

from report_intake.utils.location_inference import (
    extract_coordinates,
    infer_location,
    match_city_state,
    match_directional,
    match_region,
)
from report_intake.utils.state_normalizer import (
    normalize_country,
    normalize_state,
    region_key,
)


class TestMatchers:
    def test_coordinates_in_text(self):
        found = extract_coordinates("GPS showed 37.2350, -115.8111 when the lights appeared")
        assert found.latitude == pytest.approx(37.235)
        assert found.longitude == pytest.approx(-115.8111)
        assert found.confidence == 0.95

    def test_hemisphere_letters(self):
        found = extract_coordinates("Position 33.86 S, 151.21 E")
        assert found.latitude == pytest.approx(-33.86)
        assert found.longitude == pytest.approx(151.21)

    def test_out_of_range_coordinates(self):
        assert extract_coordinates("Readings of 123.456, 200.123 on the meter") is None

    def test_city_state(self):
        found = match_city_state("It happened outside Flagstaff, AZ last summer")
        assert found.city == "Flagstaff"
        assert found.state_province == "AZ"
        assert found.confidence == 0.80

    def test_city_state_requires_valid_code(self):
        assert match_city_state("We were near Springfield, ZZ") is None

    def test_directional(self):
        found = match_directional("Deep in the woods of northern California")
        assert found.state_province == "CA"
        assert found.location_name == "Northern California"

    def test_directional_two_word_state(self):
        assert match_directional("a farm in rural north dakota").state_province == "ND"

    def test_region(self):
        found = match_region("Driving through the Ozarks at night")
        assert found.state_province == "MO"
        assert found.location_name == "Ozarks, MO"


class TestInferLocation:
    def test_highest_confidence_wins(self):
        found = infer_location(
            "Lights over Area 51",
            None,
            "We watched from a ridge in southern Nevada, near Rachel, NV.",
        )
        assert found.source == "landmark"
        assert found.state_province == "NV"

    def test_conflicting_state_penalized(self):
        found = infer_location("Glowing orbs", None, "We camped near Roswell and saw three of them.", existing_state="TX")
        assert found.confidence == pytest.approx(0.425)

    def test_skips_when_coordinates_known(self):
        assert infer_location("Lights over Area 51", None, None, has_coordinates=True) is None

    def test_nothing_found(self):
        assert infer_location("Footsteps", "", "Something walked around the house all night.") is None

    def test_too_little_text(self):
        assert infer_location("Orbs", None, None) is None


class TestStateNormalizer:
    @pytest.mark.parametrize("raw,expected", [
        ("Colorado", "CO"),
        ("co", "CO"),
        ("New York State", "NY"),
        ("british columbia", "BC"),
        ("Atlantis", "Atlantis"),
        ("  ", None),
        (None, None),
    ])
    def test_normalize_state(self, raw, expected):
        assert normalize_state(raw) == expected

    def test_normalize_country(self):
        assert normalize_country("USA") == "United States"
        assert normalize_country("England") == "United Kingdom"
        assert normalize_country("Peru") == "Peru"
        assert normalize_country("") is None

    def test_region_key(self):
        assert region_key("Texas", "US") == "tx"
        assert region_key(None, "america") == "united states"
        assert region_key(None, None) is None
