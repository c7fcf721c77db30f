"""End-to-end standings computation: rows -> records -> bonus -> leaderboards."""

from .aggregator import aggregate_entrants, aggregate_schools, tournament_order
from .bonus import apply_bonuses
from .expander import expand_rows
from .models import ScoringRules, Standings


def score_records(rows, rules: ScoringRules = ScoringRules()) -> dict:
    """Expand rows and apply placement bonuses.

    Returns:
        Dict with:
          records: bonus-adjusted ScoringRecords
          expansion_report: see expander.expand_rows
    """
    expanded = expand_rows(rows, rules)
    return {
        'records': apply_bonuses(expanded['records'], rules),
        'expansion_report': expanded['expansion_report'],
    }


def build_standings(records, rules: ScoringRules = ScoringRules()) -> Standings:
    """Rank entrants and schools from bonus-adjusted records."""
    tournaments = tournament_order(records)
    return Standings(
        tournaments=tournaments,
        entrants=aggregate_entrants(records, tournaments),
        schools=aggregate_schools(records, tournaments, rules),
    )


def compute_standings(rows, rules: ScoringRules = ScoringRules()) -> Standings:
    """Compute both leaderboards from raw result rows."""
    return build_standings(score_records(rows, rules)['records'], rules)
