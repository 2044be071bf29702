"""Tests for phenomenon tagging and its pattern cache."""

from report_intake.services.phenomenon_matcher import (
    PatternCache,
    Phenomenon,
    PhenomenonMatcher,
    is_category_match,
    phenomena_from_rows,
)

PHENOMENA = [
    Phenomenon(id="p1", name="Bigfoot", category="cryptids", aliases=("Sasquatch", "skunk ape")),
    Phenomenon(id="p2", name="Shadow person", category="ghosts_hauntings", aliases=("shadow people",)),
    Phenomenon(id="p3", name="Black triangle", category="ufos_aliens"),
]


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class CountingLoader:
    def __init__(self, phenomena):
        self.phenomena = phenomena
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return list(self.phenomena)


def _matcher():
    return PhenomenonMatcher(PatternCache(lambda: PHENOMENA))


class TestIdentify:
    def test_title_match(self):
        matches = _matcher().identify("Sasquatch by the river", "", "It was huge.")
        assert len(matches) == 1
        assert matches[0].phenomenon_id == "p1"
        assert matches[0].confidence == 0.85
        assert matches[0].matched == "sasquatch"

    def test_summary_and_body_confidence(self):
        matcher = _matcher()
        summary = matcher.identify("Night walk", "A shadow person at the door", "")
        body = matcher.identify("Night walk", "", "We saw a black triangle overhead.")
        assert summary[0].confidence == 0.75
        assert body[0].confidence == 0.6

    def test_category_bonus_and_cap(self):
        matches = _matcher().identify("Bigfoot on the ridge", "", "", category="Cryptid sighting")
        assert matches[0].confidence == 0.95

    def test_word_boundary(self):
        assert _matcher().identify("Bigfooted tracks", "", "") == []

    def test_sorted_and_one_per_phenomenon(self):
        matches = _matcher().identify(
            "Black triangle over the woods", "", "Later a skunk ape and a Bigfoot crossed the road.",
        )
        assert [m.phenomenon_id for m in matches] == ["p3", "p1"]

    def test_no_text(self):
        assert _matcher().identify(None, None, None) == []


class TestPatternCache:
    def test_loads_once_within_ttl(self):
        clock = FakeClock()
        loader = CountingLoader(PHENOMENA)
        cache = PatternCache(loader, ttl_seconds=300, clock=clock)
        cache.get()
        clock.now = 299
        cache.get()
        assert loader.calls == 1

    def test_reloads_after_ttl(self):
        clock = FakeClock()
        loader = CountingLoader(PHENOMENA)
        cache = PatternCache(loader, ttl_seconds=300, clock=clock)
        cache.get()
        clock.now = 300
        cache.get()
        assert loader.calls == 2

    def test_invalidate(self):
        loader = CountingLoader(PHENOMENA)
        cache = PatternCache(loader, clock=FakeClock())
        matcher = PhenomenonMatcher(cache)
        assert matcher.identify("Mothman at the bridge", "", "") == []

        loader.phenomena = PHENOMENA + [Phenomenon(id="p4", name="Mothman", category="cryptids")]
        assert matcher.identify("Mothman at the bridge", "", "") == []
        cache.invalidate()
        assert matcher.identify("Mothman at the bridge", "", "")[0].phenomenon_id == "p4"
        assert loader.calls == 2


def test_category_match():
    assert is_category_match("UFO / UAP", "ufos_aliens")
    assert is_category_match("ghosts_hauntings", "ghosts_hauntings")
    assert not is_category_match(None, "cryptids")
    assert not is_category_match("cryptid", "ufos_aliens")


def test_phenomena_from_rows():
    rows = [
        {"id": 7, "name": "Mothman", "category": "cryptids", "aliases": ["moth man", None]},
        {"id": 8, "name": "", "category": "cryptids"},
        {"id": 9, "name": "Orbs", "aliases": None},
    ]
    result = phenomena_from_rows(rows)
    assert [p.id for p in result] == ["7", "9"]
    assert result[0].aliases == ("moth man",)
    assert result[1].category == ""
