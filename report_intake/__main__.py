#!/usr/bin/env python3
"""
Run the report intake CLI.

Usage:
    python -m report_intake <command> [options]

Commands:
    assess    - Filter and score a JSON file of reports
    dedup     - Find near-duplicate reports
    stats     - Show grade and status distribution

Examples:
    python -m report_intake assess reports.json
    python -m report_intake assess reports.json --output scored.json
    python -m report_intake dedup reports.json --workers 4 --infer-locations
    python -m report_intake stats reports.json -v
"""

import sys

from .cli import main

if __name__ == '__main__':
    sys.exit(main())
