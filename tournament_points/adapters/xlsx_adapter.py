"""Adapter for Excel results workbooks (.xlsx)."""

import math
import os

import pandas as pd

from .base import BaseAdapter


class XlsxAdapter(BaseAdapter):
    """Parse results from one worksheet of an Excel workbook.

    Row 1 is the header. Cells are read as displayed text: blanks become ''
    and whole-number numeric cells become integer text ("3", not "3.0").
    Text such as "NA" or "None" is kept as written, not treated as missing.

    Args:
        sheet: Worksheet name or 0-based index (default: first sheet).
    """

    def __init__(self, sheet: str | int = 0):
        self.sheet = sheet

    def parse(self, data_path: str):
        """Parse the worksheet and return its rows."""
        if not os.path.exists(data_path):
            raise FileNotFoundError(data_path)

        frame = pd.read_excel(data_path, sheet_name=self.sheet, header=None,
                              dtype=object, keep_default_na=False,
                              engine='openpyxl')
        if frame.empty:
            return []

        lines = [[self._cell_text(v) for v in row]
                 for row in frame.itertuples(index=False, name=None)]

        col_map = self.map_columns(lines[0])
        return self.build_rows(col_map, lines[1:])

    @staticmethod
    def _cell_text(value) -> str:
        """Render a cell value the way the spreadsheet displays it."""
        if value is None:
            return ''
        if isinstance(value, float):
            if math.isnan(value):
                return ''
            if value.is_integer():
                return str(int(value))
        return str(value).strip()
