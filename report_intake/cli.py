#!/usr/bin/env python3
"""
Command-line interface for the report intake quality gate.

Usage:
    python -m report_intake assess reports.json                 # Filter + score
    python -m report_intake assess reports.json --output out.json
    python -m report_intake assess reports.json --phenomena phenomena.json
    python -m report_intake dedup reports.json --workers 4      # Near-duplicate scan
    python -m report_intake dedup reports.json --infer-locations
    python -m report_intake stats reports.json                  # Grade distribution

Input files are JSON arrays of report objects using the ScoringInput field
names (title, description, city, state_province, event_date, source_type, ...).
Dedup input additionally needs an ``id`` per record.
"""

import argparse
import json
import logging
import sys
from collections import Counter
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .models.dedup import DedupCandidate, MatchConfidence
from .services.blocking import DuplicateScanner, cluster_matches, with_inferred_location
from .services.duplicate_detection import find_exact_duplicates
from .services.phenomenon_matcher import PatternCache, PhenomenonMatcher, phenomena_from_rows
from .services.quality_assessment import assess_quality
from .services.quality_scorer import grade_distribution


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_records(filepath: str) -> Optional[List[dict]]:
    """Read a JSON array of report objects. Prints the problem and returns None on failure."""
    path = Path(filepath)
    if not path.exists():
        print(f"File not found: {filepath}")
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading {path.name}: {e}")
        return None

    if not isinstance(data, list):
        print(f"Error: {path.name} must contain a JSON array")
        return None

    records = [r for r in data if isinstance(r, dict)]
    if len(records) < len(data):
        print(f"  Skipped {len(data) - len(records)} non-object entries")
    return records


def write_output(filepath: str, payload: Any) -> bool:
    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, default=str)
    except OSError as e:
        print(f"Error writing {filepath}: {e}")
        return False
    print(f"\nWrote {filepath}")
    return True


def cmd_assess(args):
    """Filter and score a file of reports."""
    records = load_records(args.file)
    if records is None:
        return 1

    matcher = None
    if args.phenomena:
        rows = load_records(args.phenomena)
        if rows is None:
            return 1
        phenomena = phenomena_from_rows(rows)
        matcher = PhenomenonMatcher(PatternCache(lambda: phenomena))
        print(f"Loaded {len(phenomena)} phenomena")

    print(f"Assessing {len(records)} reports...")
    results = []
    statuses: Counter = Counter()
    rules: Counter = Counter()
    tags: Counter = Counter()

    for index, record in enumerate(records):
        result = assess_quality(record, matcher=matcher)
        if result.passed:
            statuses[result.report.recommended_status.value] += 1
            tags.update(m.phenomenon_id for m in result.phenomena)
        else:
            rules[result.rule] += 1
        results.append({"index": index, "title": record.get("title"), **asdict(result)})

    passed = sum(statuses.values())
    print(f"\nPassed filter: {passed}")
    for status, count in sorted(statuses.items()):
        print(f"  {status}: {count}")

    print(f"Filtered out: {sum(rules.values())}")
    for rule, count in rules.most_common():
        print(f"  {rule}: {count}")

    if matcher is not None:
        print(f"Phenomenon tags: {sum(tags.values())}")
        for phenomenon_id, count in tags.most_common(10):
            print(f"  {phenomenon_id}: {count}")

    if args.output and not write_output(args.output, results):
        return 1
    return 0


def _load_candidates(records: List[dict]) -> List[DedupCandidate]:
    candidates = []
    for index, record in enumerate(records):
        if record.get("id") in (None, ""):
            record = {**record, "id": str(index)}
        try:
            candidates.append(DedupCandidate.model_validate(record))
        except ValidationError as e:
            print(f"  Skipping record {index}: {e.error_count()} validation errors")
    return candidates


def cmd_dedup(args):
    """Find near-duplicate reports in a file."""
    records = load_records(args.file)
    if records is None:
        return 1

    candidates = _load_candidates(records)
    print(f"Loaded {len(candidates)} candidates")

    exact = find_exact_duplicates(candidates)
    print(f"\nExact fingerprint groups: {len(exact)}")
    for group in exact[:10]:
        print(f"  {', '.join(group)}")

    if args.infer_locations:
        before = sum(1 for c in candidates if not (c.state_province or c.country))
        candidates = [with_inferred_location(c) for c in candidates]
        after = sum(1 for c in candidates if not (c.state_province or c.country))
        print(f"\nLocation inference placed {before - after} of {before} unlocated candidates")

    scanner = DuplicateScanner(max_workers=args.workers)
    result = scanner.scan(candidates)

    print(f"\nFuzzy scan:")
    print(f"  Buckets: {result.bucket_count}")
    print(f"  Comparisons: {result.total_compared}")
    print(f"  Matches: {result.duplicates_found}")
    for confidence in MatchConfidence:
        print(f"    {confidence.value}: {len(result.by_confidence(confidence))}")
    print(f"  Duration: {result.duration_ms}ms")

    groups = cluster_matches(result.matches)
    if groups:
        print(f"\nLikely duplicate groups: {len(groups)}")
        for group in groups[:10]:
            print(f"  {', '.join(group)}")

    if args.output:
        payload = {
            "exact_groups": exact,
            "groups": groups,
            "matches": [asdict(m) for m in result.matches],
            "total_compared": result.total_compared,
            "bucket_count": result.bucket_count,
            "duration_ms": result.duration_ms,
        }
        if not write_output(args.output, payload):
            return 1
    return 0


def cmd_stats(args):
    """Show grade and status distribution for a file of reports."""
    records = load_records(args.file)
    if records is None:
        return 1

    reports = []
    rules: Counter = Counter()
    for record in records:
        result = assess_quality(record)
        if result.passed:
            reports.append(result.report)
        else:
            rules[result.rule] += 1

    dist = grade_distribution(reports)

    print("Quality Distribution")
    print("=" * 50)
    print(f"\nReports: {len(records)}")
    print(f"Scored: {dist['count']}")
    print(f"Average score: {dist['average_score']}")

    print(f"\nGrades:")
    for letter, count in dist['grades'].items():
        print(f"  {letter}: {count}")

    print(f"\nRecommended status:")
    for status, count in sorted(dist['statuses'].items()):
        print(f"  {status}: {count}")

    if rules:
        print(f"\nFiltered out:")
        for rule, count in rules.most_common():
            print(f"  {rule}: {count}")

    return 0


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Report Intake Quality Gate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('-v', '--verbose', action='store_true', help="Verbose output")

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # assess command
    assess_parser = subparsers.add_parser('assess', help='Filter and score reports')
    assess_parser.add_argument('file', help='JSON array of reports')
    assess_parser.add_argument('--output', type=str, help='Write per-report results to this JSON file')
    assess_parser.add_argument('--phenomena', type=str,
                               help='JSON array of phenomena (id, name, aliases, category) to tag reports with')

    # dedup command
    dedup_parser = subparsers.add_parser('dedup', help='Find near-duplicate reports')
    dedup_parser.add_argument('file', help='JSON array of reports with ids')
    dedup_parser.add_argument('--workers', type=int, default=1, help='Worker processes for the scan')
    dedup_parser.add_argument('--infer-locations', action='store_true',
                              help='Infer state/country from text for unlocated reports')
    dedup_parser.add_argument('--output', type=str, help='Write matches to this JSON file')

    # stats command
    stats_parser = subparsers.add_parser('stats', help='Show grade distribution')
    stats_parser.add_argument('file', help='JSON array of reports')

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        'assess': cmd_assess,
        'dedup': cmd_dedup,
        'stats': cmd_stats,
    }

    return commands[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
