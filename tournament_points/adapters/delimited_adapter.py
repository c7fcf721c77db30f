"""Adapter for CSV or TSV exports of a results sheet.

The first line is always a header. Columns are matched by name
(case-insensitive, see COLUMN_ALIASES); when the header does not name the
tournament, entry and school columns, the standard results workbook's column
positions are used instead. Missing columns read as ''.
"""

import csv
import glob
import io
import os
from .base import BaseAdapter


class DelimitedAdapter(BaseAdapter):
    """Parse comma- or tab-separated results files."""

    def __init__(self, delimiter: str | None = None):
        self.delimiter = delimiter

    def parse(self, data_path: str):
        """Parse one file, a directory of .csv/.tsv files, or a glob pattern.

        Multiple files are loaded in sorted order and concatenated.
        """
        if os.path.isdir(data_path):
            paths = sorted(glob.glob(os.path.join(data_path, '*.csv')) +
                           glob.glob(os.path.join(data_path, '*.tsv')))
            return self._parse_many(paths)

        if '*' in data_path or '?' in data_path:
            return self._parse_many(sorted(glob.glob(data_path)))

        return self._parse_single_file(data_path)

    def _parse_many(self, paths: list[str]):
        rows = []
        for path in paths:
            rows.extend(self._parse_single_file(path))
        return rows

    def _parse_single_file(self, data_path: str):
        """Parse a single data file."""
        # utf-8-sig drops the BOM spreadsheet programs put on CSV exports
        with open(data_path, 'r', encoding='utf-8-sig', newline='') as f:
            content = f.read()

        if not content.strip():
            return []

        delimiter = self.delimiter or self._detect_delimiter(content)
        reader = csv.reader(io.StringIO(content), delimiter=delimiter)
        lines = list(reader)
        if not lines:
            return []

        col_map = self.map_columns(lines[0])
        return self.build_rows(col_map, lines[1:])

    @staticmethod
    def _detect_delimiter(content: str) -> str:
        """Tab if the header line has one, otherwise comma."""
        header = content.split('\n', 1)[0]
        return '\t' if '\t' in header else ','
