#!/usr/bin/env python3
"""CLI entry point for computing tournament points standings.

Usage:
    python process_standings.py --data results.xlsx --output ./output/ --pdf \\
        --title "2024 Season Standings"
"""

import argparse
import os
import sys

# Add parent directory to path for imports (skip when frozen by PyInstaller)
if not getattr(sys, 'frozen', False):
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tournament_points.core.models import ScoringRules
from tournament_points.core.standings import score_records, build_standings
from tournament_points.core.expander import print_expansion_report
from tournament_points.core.output_generator import (
    format_standings_text, generate_standings_csv, generate_standings_text
)
from tournament_points.core.pdf_generator import generate_standings_pdf
from tournament_points.core.school_normalizer import normalize as normalize_schools, print_school_report
from tournament_points.adapters.xlsx_adapter import XlsxAdapter
from tournament_points.adapters.delimited_adapter import DelimitedAdapter


SOURCE_EXTENSIONS = {
    '.xlsx': 'xlsx',
    '.xlsm': 'xlsx',
    '.csv': 'csv',
    '.tsv': 'tsv',
    '.txt': 'tsv',
}


def infer_source(data_path: str) -> str | None:
    """Guess the source type from a data file's extension.

    A directory holds .csv/.tsv exports, so it reads as delimited text.
    """
    if os.path.isdir(data_path):
        return 'csv'
    return SOURCE_EXTENSIONS.get(os.path.splitext(data_path)[1].lower())


def make_adapter(source: str):
    if source == 'xlsx':
        return XlsxAdapter()
    elif source in ('csv', 'tsv'):
        # Delimiter is detected per file, so mixed directories parse correctly
        return DelimitedAdapter()
    raise ValueError(f"Unknown source type: {source}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Compute tournament points standings')
    parser.add_argument('--source', default=None, choices=['xlsx', 'csv', 'tsv'],
                        help='Data source type (default: from the first data file extension)')
    parser.add_argument('--data', nargs='+', required=True, help='Input results file(s)')
    parser.add_argument('--output', default=None,
                        help='Output directory for CSV/text/PDF files (default: print only)')
    parser.add_argument('--pdf', action='store_true',
                        help='Also write standings.pdf to the output directory')
    parser.add_argument('--title', default='Tournament Standings', help='PDF title line')
    parser.add_argument('--normalize-schools', action='store_true',
                        help='Merge spelling variants of school names before scoring')
    parser.add_argument('--school-map', default=None,
                        help='Path to JSON file mapping school name aliases to canonical names')

    args = parser.parse_args(argv)

    source = args.source or infer_source(args.data[0])
    if source is None:
        print(f"Cannot infer source type from {args.data[0]}; pass --source")
        sys.exit(1)
    adapter = make_adapter(source)

    # Parse data (supports multiple files via nargs='+')
    rows = []
    for data_path in args.data:
        try:
            batch = adapter.parse(data_path)
        except FileNotFoundError:
            print(f"File not found: {data_path}")
            sys.exit(1)
        if len(args.data) > 1:
            print(f"Parsed {data_path}: {len(batch)} rows")
        rows.extend(batch)

    # Normalize school names
    if args.normalize_schools or args.school_map:
        result = normalize_schools(rows, school_map_path=args.school_map)
        rows = result['normalized_rows']
        print_school_report(result['school_report'])

    rules = ScoringRules()
    scored = score_records(rows, rules)
    print_expansion_report(scored['expansion_report'])
    standings = build_standings(scored['records'], rules)

    print()
    print(format_standings_text(standings), end='')

    if args.output:
        os.makedirs(args.output, exist_ok=True)

        student_path = os.path.join(args.output, 'student_scores.csv')
        generate_standings_csv(standings.entrant_table(), student_path)
        print(f"Generated {student_path}")

        school_path = os.path.join(args.output, 'school_scores.csv')
        generate_standings_csv(standings.school_table(), school_path)
        print(f"Generated {school_path}")

        text_path = os.path.join(args.output, 'standings.txt')
        generate_standings_text(standings, text_path)
        print(f"Generated {text_path}")

        if args.pdf:
            pdf_path = os.path.join(args.output, 'standings.pdf')
            generate_standings_pdf(standings, pdf_path, title=args.title)
            print(f"Generated {pdf_path}")

    print("\nDone!")


if __name__ == '__main__':
    main()
