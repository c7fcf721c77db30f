"""Expand raw result rows into per-entrant scoring records.

A row whose entry names several people ("Alice & Bob") becomes one record
per person, each scored identically for that appearance.
"""

import re
from .models import RawResultRow, ScoringRecord, ScoringRules


REQUIRED_FIELDS = ('tournament', 'year', 'entry', 'school')

_COUNT_RE = re.compile(r'\+?[0-9]+')


def _parse_count(raw: str) -> int:
    """Parse a place or points value. Returns 0 for blank, invalid or negative."""
    s = (raw or '').strip()
    if not _COUNT_RE.fullmatch(s):
        return 0
    return int(s)


def missing_fields(row: RawResultRow) -> list[str]:
    """Names of the required text fields that are blank in this row."""
    return [name for name in REQUIRED_FIELDS
            if not (getattr(row, name) or '').strip()]


def expand_row(row: RawResultRow,
               rules: ScoringRules = ScoringRules()) -> list[ScoringRecord]:
    """Turn one raw row into zero or more scoring records."""
    if missing_fields(row):
        return []

    tournament = row.tournament.strip()
    year = row.year.strip()
    school = row.school.strip()
    place = _parse_count(row.place)
    elimination_points = _parse_count(row.elimination_points)

    records = []
    for name in row.entry.split('&'):
        name = name.strip()
        if not name:
            continue
        records.append(ScoringRecord(
            entrant_id=f'{school}:{name}',
            school=school,
            tournament=tournament,
            year=year,
            place=place,
            elimination_points=elimination_points,
            points=rules.participation_points + elimination_points,
        ))
    return records


def expand_rows(rows, rules: ScoringRules = ScoringRules()) -> dict:
    """Expand a sequence of raw rows.

    Returns:
        Dict with:
          records: list of ScoringRecord, in row order
          expansion_report: {rows_read, records_created, skipped_rows}
            where skipped_rows is a list of (row_number, reason)
    """
    records = []
    skipped = []
    rows_read = 0
    for row_number, row in enumerate(rows, start=1):
        rows_read += 1
        missing = missing_fields(row)
        if missing:
            skipped.append((row_number, f"missing {', '.join(missing)}"))
            continue
        expanded = expand_row(row, rules)
        if not expanded:
            skipped.append((row_number, 'no names in entry'))
            continue
        records.extend(expanded)

    return {
        'records': records,
        'expansion_report': {
            'rows_read': rows_read,
            'records_created': len(records),
            'skipped_rows': skipped,
        },
    }


def print_expansion_report(report: dict) -> None:
    """Print a short summary of the expansion step to stdout."""
    skipped = report['skipped_rows']
    print(f"Read {report['rows_read']} rows: {report['records_created']} entrant records, "
          f"{len(skipped)} rows skipped")

    if skipped:
        lines = [f"  row {num}: {reason}" for num, reason in skipped]
        if len(lines) > 15:
            print(f"Skipped rows (showing 15 of {len(lines)}):")
            print('\n'.join(lines[:15]))
        else:
            print("Skipped rows:")
            print('\n'.join(lines))
