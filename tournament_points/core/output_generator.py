"""Output generator for computed standings.

Generates two output types from a Standings object:
  - Plain-text listing (student scores, then school scores, comma-joined)
  - One CSV file per leaderboard table
"""

import csv

from .models import Standings


def _join(row) -> str:
    return ', '.join(str(v) for v in row)


def format_standings_text(standings: Standings) -> str:
    """Render both leaderboards as comma-joined text lines."""
    lines = ['Student Scores:']
    lines.extend(_join(row) for row in standings.entrant_table())
    lines.append('')
    lines.append('School Scores:')
    lines.extend(_join(row) for row in standings.school_table())
    return '\n'.join(lines) + '\n'


def generate_standings_text(standings: Standings, output_path: str):
    """Write the plain-text listing of both leaderboards."""
    with open(output_path, 'w') as f:
        f.write(format_standings_text(standings))


def generate_standings_csv(table: list[list], output_path: str):
    """Write one leaderboard table (header row first) as CSV.

    Args:
        table: Standings.entrant_table() or Standings.school_table().
        output_path: Where to write the CSV.
    """
    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerows(table)
