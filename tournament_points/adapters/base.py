"""Abstract base adapter for reading tournament results from various sources."""

from abc import ABC, abstractmethod

from tournament_points.core.models import RawResultRow


# Map common column name variations to RawResultRow field names
COLUMN_ALIASES = {
    'tournament': 'tournament',
    'tournamentname': 'tournament',
    'event': 'tournament',
    'year': 'year',
    'season': 'year',
    'place': 'place',
    'rank': 'place',
    'finish': 'place',
    'entry': 'entry',
    'entrant': 'entry',
    'entrants': 'entry',
    'name': 'entry',
    'names': 'entry',
    'competitor': 'entry',
    'school': 'school',
    'team': 'school',
    'club': 'school',
    'elimpoints': 'elimination_points',
    'eliminationpoints': 'elimination_points',
    'elims': 'elimination_points',
    'elim': 'elimination_points',
}

# Column positions of the standard results workbook:
# A=Tournament, C=Year, D=Place, E=Entry, F=School, I=ElimPoints
FALLBACK_COLUMNS = {
    'tournament': 0,
    'year': 2,
    'place': 3,
    'entry': 4,
    'school': 5,
    'elimination_points': 8,
}

# Without these the header is not trusted and FALLBACK_COLUMNS is used
_KEY_COLUMNS = ('tournament', 'entry', 'school')


class BaseAdapter(ABC):
    @abstractmethod
    def parse(self, data_path: str) -> list[RawResultRow]:
        """Parse a results file and return its rows in source order.

        Every field of each RawResultRow is text; blank cells become ''.
        Rows are not validated here (the expander drops incomplete ones).
        """
        pass

    @staticmethod
    def map_columns(header: list[str]) -> dict:
        """Return {field_name: column_index} for a header row."""
        col_map = {}
        for i, col in enumerate(header):
            key = str(col).lower().strip().replace(' ', '').replace('_', '')
            canonical = COLUMN_ALIASES.get(key)
            if canonical and canonical not in col_map:
                col_map[canonical] = i

        if not all(name in col_map for name in _KEY_COLUMNS):
            return dict(FALLBACK_COLUMNS)
        return col_map

    @staticmethod
    def build_rows(col_map: dict, lines) -> list[RawResultRow]:
        """Build RawResultRows from lists of cell text using a column map."""
        rows = []
        for parts in lines:
            if not any(str(p).strip() for p in parts):
                continue

            def get_col(name: str) -> str:
                idx = col_map.get(name)
                if idx is not None and idx < len(parts):
                    return str(parts[idx]).strip()
                return ''

            rows.append(RawResultRow(
                tournament=get_col('tournament'),
                year=get_col('year'),
                place=get_col('place'),
                entry=get_col('entry'),
                school=get_col('school'),
                elimination_points=get_col('elimination_points'),
            ))
        return rows
