"""
Shared pytest fixtures.

Builders return fresh model instances so each test can override only the
fields it cares about.
"""

import pytest

from report_intake.models import DedupCandidate, ScoringInput


RICH_TITLE = "Orange light hovering over the ridge west of Fairplay"

RICH_DESCRIPTION = (
    "On the night of March 14 my wife and I were driving home on Highway 285 about "
    "10 miles west of Fairplay. At 10:45 pm I noticed a bright orange light hovering "
    "low above the tree line to the north. I pulled over near Mile Marker 180 and we "
    "both got out of the truck to watch it.\n\n"
    "The light was roughly the size of a small car and made a low humming sound that I "
    "felt in my chest. It hovered for a minute, then it moved slowly east without any "
    "wind noise. After that it descended behind a ridge and the whole valley lit up "
    "white for a moment. I took a photo with my phone, and I could smell something "
    "metallic in the air. The event lasted 5 minutes in total.\n\n"
    "Moments later a second light appeared and circled the ridge twice before it "
    "vanished. Finally we drove to Fairplay and I filed a police report with Deputy "
    "Sarah Collins that same night. I was terrified and I still think about it every "
    "time I drive that road. I am a retired engineer and I have no explanation for "
    "what we saw."
)


def words_body(count: int) -> str:
    """A plain narrative body of exactly ``count`` words."""
    base = (
        "we walked along the old logging trail while the light faded behind the hills "
        "and the air grew cold around us"
    ).split()
    return " ".join(base[i % len(base)] for i in range(count))


@pytest.fixture
def make_report():
    """Factory for ScoringInput with sensible experience-report defaults."""
    def _make(**overrides) -> ScoringInput:
        data = {
            "title": RICH_TITLE,
            "summary": "Two witnesses watched an orange light hover and descend behind a ridge near Fairplay.",
            "description": RICH_DESCRIPTION,
        }
        data.update(overrides)
        return ScoringInput(**data)
    return _make


@pytest.fixture
def rich_report(make_report) -> ScoringInput:
    """A detailed, fully populated report from an established source."""
    return make_report(
        category="ufos_aliens",
        location_name="Highway 285 near Fairplay",
        city="Fairplay",
        state_province="CO",
        country="United States",
        latitude=39.2247,
        longitude=-106.0020,
        event_date="2021-03-14",
        event_time="22:45",
        witness_count=2,
        has_photo_video=True,
        has_official_report=True,
        evidence_summary="Phone photo of the light and a sheriff's office report number",
        source_type="bfro",
        credibility="high",
        tags=["orange light", "hovering", "ridge"],
        metadata={"bfro_class": "Class A", "source_url": "https://example.org/reports/1"},
    )


@pytest.fixture
def make_candidate():
    """Factory for DedupCandidate. ``id`` is required, everything else optional."""
    def _make(id, **fields) -> DedupCandidate:
        return DedupCandidate(id=id, **fields)
    return _make
