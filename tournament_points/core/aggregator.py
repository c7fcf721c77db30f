"""Entrant and school aggregation over bonus-adjusted scoring records.

Both passes read the same record list and share one tournament column
order, computed once by tournament_order().
"""

from .models import EntrantStanding, SchoolStanding, ScoringRules


def tournament_order(records) -> tuple:
    """Distinct tournament names in first-seen order."""
    seen = {}
    for r in records:
        seen.setdefault(r.tournament, None)
    return tuple(seen)


def aggregate_entrants(records, tournaments: tuple) -> list[EntrantStanding]:
    """Sum points per entrant, ranked by total desc then entrant id asc."""
    groups: dict[str, list] = {}
    for r in records:
        groups.setdefault(r.entrant_id, []).append(r)

    standings = []
    for entrant_id, group in groups.items():
        per_tournament: dict[str, int] = {}
        for r in group:
            per_tournament[r.tournament] = per_tournament.get(r.tournament, 0) + r.points

        standings.append(EntrantStanding(
            entrant_id=entrant_id,
            school=group[0].school,
            total_tournaments=len(per_tournament),
            tournament_points={t: per_tournament[t] for t in tournaments if t in per_tournament},
            total_points=sum(r.points for r in group),
        ))

    standings.sort(key=lambda s: (-s.total_points, s.entrant_id))
    return standings


def capped_sum(points, limit: int) -> int:
    """Sum of the `limit` largest values."""
    return sum(sorted(points, reverse=True)[:limit])


def aggregate_schools(records, tournaments: tuple,
                      rules: ScoringRules = ScoringRules()) -> list[SchoolStanding]:
    """Sum each school's best entries per tournament.

    Only the top `rules.school_counting_entries` records of a school in a
    tournament count. Ranked by total desc, then school name asc.
    """
    # school -> tournament -> [points]
    by_school: dict[str, dict[str, list]] = {}
    for r in records:
        by_school.setdefault(r.school, {}).setdefault(r.tournament, []).append(r.points)

    standings = []
    for school, by_tournament in by_school.items():
        tournament_points = {
            t: capped_sum(by_tournament.get(t, []), rules.school_counting_entries)
            for t in tournaments
        }
        standings.append(SchoolStanding(
            school=school,
            tournament_points=tournament_points,
            total_points=sum(tournament_points.values()),
        ))

    standings.sort(key=lambda s: (-s.total_points, s.school))
    return standings
