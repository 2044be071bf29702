"""Tests for the command-line interface."""

import json

import pytest

from conftest import RICH_DESCRIPTION, RICH_TITLE
from report_intake.cli import load_records, main


@pytest.fixture
def reports_file(tmp_path):
    records = [
        {"id": "1", "title": RICH_TITLE, "description": RICH_DESCRIPTION, "state_province": "CO",
         "country": "US", "event_date": "2021-03-14", "source_type": "bfro"},
        {"id": "2", "title": RICH_TITLE, "description": RICH_DESCRIPTION, "state_province": "CO",
         "country": "US", "event_date": "2021-03-14", "source_type": "reddit"},
        {"id": "3", "title": "Share your scariest ghost story", "description": "Go!"},
    ]
    path = tmp_path / "reports.json"
    path.write_text(json.dumps(records))
    return path


class TestAssessCommand:
    def test_summary(self, reports_file, capsys):
        assert main(["assess", str(reports_file)]) == 0
        out = capsys.readouterr().out
        assert "Assessing 3 reports" in out
        assert "Passed filter: 2" in out
        assert "meta_post: 1" in out

    def test_output_file(self, reports_file, tmp_path):
        output = tmp_path / "scored.json"
        assert main(["assess", str(reports_file), "--output", str(output)]) == 0
        results = json.loads(output.read_text())
        assert len(results) == 3
        assert results[0]["passed"] is True
        assert results[0]["report"]["recommended_status"] in ("approved", "pending_review", "rejected")
        assert "description_detail" in results[0]["report"]["dimensions"]
        assert results[2]["rule"] == "meta_post"


class TestPhenomenaOption:
    def test_tags_passing_reports(self, reports_file, tmp_path, capsys):
        phenomena = tmp_path / "phenomena.json"
        phenomena.write_text(json.dumps([
            {"id": "orb", "name": "Orange orb", "aliases": ["orange light"], "category": "ufos_aliens"},
        ]))
        output = tmp_path / "scored.json"
        assert main(["assess", str(reports_file), "--phenomena", str(phenomena), "--output", str(output)]) == 0
        out = capsys.readouterr().out
        assert "Loaded 1 phenomena" in out
        assert "Phenomenon tags: 2" in out
        results = json.loads(output.read_text())
        assert results[0]["phenomena"][0]["phenomenon_id"] == "orb"
        assert results[0]["phenomena"][0]["confidence"] == 0.85
        assert results[2]["phenomena"] == []

    def test_missing_phenomena_file(self, reports_file, tmp_path):
        assert main(["assess", str(reports_file), "--phenomena", str(tmp_path / "none.json")]) == 1


class TestDedupCommand:
    def test_finds_pair(self, reports_file, tmp_path, capsys):
        output = tmp_path / "matches.json"
        assert main(["dedup", str(reports_file), "--output", str(output)]) == 0
        out = capsys.readouterr().out
        assert "Exact fingerprint groups: 1" in out
        payload = json.loads(output.read_text())
        assert payload["exact_groups"] == [["1", "2"]]
        assert payload["matches"][0]["confidence"] == "definite"
        assert payload["groups"] == [["1", "2"]]

    def test_infer_locations(self, reports_file, capsys):
        assert main(["dedup", str(reports_file), "--infer-locations"]) == 0
        assert "Location inference placed" in capsys.readouterr().out


class TestStatsCommand:
    def test_distribution(self, reports_file, capsys):
        assert main(["stats", str(reports_file)]) == 0
        out = capsys.readouterr().out
        assert "Scored: 2" in out
        assert "Filtered out:" in out


class TestErrors:
    def test_missing_file(self, tmp_path, capsys):
        assert main(["assess", str(tmp_path / "nope.json")]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text('{"title": "x"}')
        assert load_records(str(path)) is None

    def test_bad_json(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("[{")
        assert main(["stats", str(path)]) == 1
        assert "Error reading" in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 1
