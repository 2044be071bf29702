"""Tests for the similarity primitives."""

import pytest

from report_intake.models import DedupCandidate
from report_intake.services.similarity import (
    content_similarity,
    create_shingles,
    date_similarity,
    distance_band_score,
    haversine_km,
    jaccard_similarity,
    levenshtein_similarity,
    location_similarity,
    title_similarity,
    token_similarity,
)


def _loc(**fields) -> DedupCandidate:
    return DedupCandidate(id="x", **fields)


class TestLevenshtein:
    def test_identical(self):
        assert levenshtein_similarity("Bigfoot crossing", "bigfoot crossing ") == 1.0

    def test_both_empty(self):
        assert levenshtein_similarity("", None) == 1.0

    def test_one_empty(self):
        assert levenshtein_similarity("abc", "") == 0.0

    def test_single_edit(self):
        assert levenshtein_similarity("kitten", "sitten") == pytest.approx(5 / 6)

    def test_length_ratio_cutoff(self):
        assert levenshtein_similarity("ab", "abcdefghij") == 0.0

    def test_symmetric(self):
        a, b = "lights over the lake", "light above the lakes"
        assert levenshtein_similarity(a, b) == levenshtein_similarity(b, a)


class TestTokenAndTitle:
    def test_stop_words_ignored(self):
        assert token_similarity("The sighting at the lake", "Lake") == 1.0

    def test_stop_words_only(self):
        assert token_similarity("the a of", "the a of") == 1.0
        assert token_similarity("the a of", "an it") == 0.0

    def test_empty_title_scores_zero(self):
        assert title_similarity("", "Strange lights") == 0.0
        assert title_similarity("   ", "   ") == 0.0

    def test_reworded_title(self):
        score = title_similarity("Bigfoot seen crossing Route 9 at night", "Night crossing of Route 9 by Bigfoot")
        assert score >= 0.6

    def test_unrelated_titles(self):
        assert title_similarity("Ghost in the attic", "Triangle craft hovering over the desert highway") == 0.0


class TestJaccard:
    def test_empty(self):
        assert jaccard_similarity(set(), {"a"}) == 0.0

    def test_partial(self):
        assert jaccard_similarity({"a", "b", "c"}, {"b", "c", "d"}) == pytest.approx(0.5)


class TestDistance:
    def test_haversine_known_distance(self):
        # Denver to Boulder is roughly 40 km
        assert haversine_km(39.7392, -104.9903, 40.0150, -105.2705) == pytest.approx(39, abs=3)

    def test_antipodal_does_not_raise(self):
        assert haversine_km(0, 0, 0, 180) == pytest.approx(20015, rel=0.01)

    @pytest.mark.parametrize("km,expected", [
        (0.5, 1.0),
        (1, 1.0),
        (8, 0.8),
        (40, 0.5),
        (150, 0.2),
        (500, 0.0),
    ])
    def test_bands(self, km, expected):
        assert distance_band_score(km) == expected


class TestLocation:
    def test_coordinates_take_precedence(self):
        a = _loc(latitude=39.7392, longitude=-104.9903, state_province="CO")
        b = _loc(latitude=39.7400, longitude=-104.9910, state_province="TX")
        assert location_similarity(a, b) == 1.0

    def test_field_blend(self):
        a = _loc(country="US", state_province="CO", city="Denver", location_name="City Park")
        b = _loc(country="us", state_province="co", city="Denver", location_name="City Park")
        assert location_similarity(a, b) == pytest.approx(1.0)

    def test_partial_fields(self):
        a = _loc(country="US", state_province="CO")
        b = _loc(country="US", state_province="WY")
        # country agrees (0.2) out of country + state compared (0.5)
        assert location_similarity(a, b) == pytest.approx(0.4)

    def test_only_shared_state(self):
        a = _loc(state_province="CO")
        b = _loc(state_province="CO", city="Denver")
        assert location_similarity(a, b) == pytest.approx(1.0)

    def test_canonical_state_and_country(self):
        a = _loc(country="US", state_province="CO", city="Denver")
        b = _loc(country="United States", state_province="Colorado", city="Denver")
        assert location_similarity(a, b) == pytest.approx(1.0)

    def test_placeholder_coordinates_ignored(self):
        a = _loc(latitude=0, longitude=0)
        b = _loc(latitude=0.0, longitude=0.0)
        assert location_similarity(a, b) == 0.0

    def test_placeholder_falls_back_to_fields(self):
        a = _loc(latitude=0, longitude=0, state_province="CO", city="Denver")
        b = _loc(latitude=39.7392, longitude=-104.9903, state_province="CO", city="Denver")
        assert location_similarity(a, b) == pytest.approx(1.0)

    def test_nothing_to_compare(self):
        assert location_similarity(_loc(city="Denver"), _loc(country="US")) == 0.0

    def test_symmetric(self):
        a = _loc(country="US", city="Fort Collins", location_name="Horsetooth Reservoir")
        b = _loc(country="US", city="Ft Collins", location_name="Horsetooth")
        assert location_similarity(a, b) == location_similarity(b, a)


class TestDate:
    @pytest.mark.parametrize("d1,d2,expected", [
        ("2022-06-01", "2022-06-01", 1.0),
        ("2022-06-01", "2022-06-05", 0.8),
        ("2022-06-01", "2022-06-20", 0.5),
        ("2022-06-01", "2023-01-15", 0.2),
        ("2022-06-01", "2024-06-01", 0.0),
        ("2022-06-01T23:10:00Z", "2022-06-01", 1.0),
        ("2022-06-01", None, 0.0),
        ("sometime in june", "2022-06-01", 0.0),
    ])
    def test_bands(self, d1, d2, expected):
        assert date_similarity(d1, d2) == expected


class TestContent:
    def test_shingles(self):
        assert create_shingles("one two three four") == {("one", "two", "three"), ("two", "three", "four")}
        assert create_shingles("too short") == set()

    def test_shingle_overlap(self):
        shared = " ".join(f"shared{i}" for i in range(50))
        a = shared + " " + " ".join(f"left{i}" for i in range(16))
        b = shared + " " + " ".join(f"right{i}" for i in range(16))
        assert content_similarity(a, b) == pytest.approx(0.6)

    def test_short_bodies_use_tokens(self):
        assert content_similarity("Glowing orbs by the creek", "glowing orbs by creek") == pytest.approx(1.0)

    def test_empty(self):
        assert content_similarity("", "anything at all") == 0.0
