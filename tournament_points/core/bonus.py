"""Placement bonus calculation.

Bonus tiers depend on the size of the tournament field, counted in
individual entrants (after team entries are expanded):

  - Small fields (12 or fewer): the top half, rounded up, earns 1 point.
  - Larger fields: 1st earns 2 points, 2nd through 8th earn 1.

A blank or unparsable place is stored as 0. In a small field that 0 is
always inside the top half and so earns the bonus; in a large field it
earns nothing.
"""

from collections import Counter
from dataclasses import replace
from .models import ScoringRecord, ScoringRules


def tournament_bonus(place: int, field_size: int,
                     rules: ScoringRules = ScoringRules()) -> int:
    """Bonus for one record given its place and the size of its tournament."""
    if field_size <= rules.small_field_max:
        cutoff = -(-field_size // 2)  # ceil(field_size / 2)
        return rules.small_field_bonus if place <= cutoff else 0

    if place == 1:
        return rules.winner_bonus
    if 2 <= place <= rules.last_placer:
        return rules.placer_bonus
    return 0


def field_sizes(records) -> dict:
    """Number of records per tournament."""
    return dict(Counter(r.tournament for r in records))


def apply_bonuses(records: list[ScoringRecord],
                  rules: ScoringRules = ScoringRules()) -> list[ScoringRecord]:
    """Return new records with the placement bonus added to their points.

    Field sizes are taken from the complete record list before any bonus is
    computed. Output order matches input order.
    """
    sizes = field_sizes(records)
    adjusted = []
    for r in records:
        bonus = tournament_bonus(r.place, sizes[r.tournament], rules)
        adjusted.append(replace(r, points=r.points + bonus, bonus=bonus))
    return adjusted
