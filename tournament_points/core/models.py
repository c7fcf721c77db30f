"""Data models for the tournament points standings system."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawResultRow:
    """One row of a results sheet, exactly as read (all text)."""
    tournament: str           # "Fall Invitational"
    year: str                 # "2024"
    place: str                # "3", "" or anything unparsable
    entry: str                # "Alice Smith" or "Alice Smith & Bob Jones"
    school: str               # "Central High"
    elimination_points: str = ''


@dataclass(frozen=True)
class ScoringRecord:
    """One entrant's appearance at one tournament."""
    entrant_id: str           # "Central High:Alice Smith"
    school: str
    tournament: str
    year: str
    place: int                # 0 when the place was blank or unparsable
    elimination_points: int
    points: int               # participation + elimination points (+ bonus once applied)
    bonus: int = 0


@dataclass(frozen=True)
class ScoringRules:
    """Scoring constants used by the bonus calculator and school aggregator."""
    participation_points: int = 1
    small_field_max: int = 12       # fields of this size or less award the top-half bonus
    small_field_bonus: int = 1
    winner_bonus: int = 2
    placer_bonus: int = 1
    last_placer: int = 8            # places 2..last_placer earn placer_bonus in large fields
    school_counting_entries: int = 2


@dataclass
class EntrantStanding:
    entrant_id: str
    school: str
    total_tournaments: int
    tournament_points: dict = field(default_factory=dict)  # tournament -> points
    total_points: int = 0


@dataclass
class SchoolStanding:
    school: str
    tournament_points: dict = field(default_factory=dict)  # tournament -> capped points
    total_points: int = 0


ENTRANT_HEADER_PREFIX = ('Entry', 'School', 'Tournaments')
SCHOOL_HEADER_PREFIX = ('School',)
TOTAL_HEADER = 'Total Points'


@dataclass
class Standings:
    """Both ranked leaderboards plus the shared tournament column order."""
    tournaments: tuple = ()
    entrants: list = field(default_factory=list)   # list[EntrantStanding]
    schools: list = field(default_factory=list)    # list[SchoolStanding]

    def entrant_table(self) -> list[list]:
        """Header row followed by one row per entrant, in ranked order."""
        rows = [[*ENTRANT_HEADER_PREFIX, *self.tournaments, TOTAL_HEADER]]
        for e in self.entrants:
            rows.append([
                e.entrant_id, e.school, e.total_tournaments,
                *(e.tournament_points.get(t, 0) for t in self.tournaments),
                e.total_points,
            ])
        return rows

    def school_table(self) -> list[list]:
        """Header row followed by one row per school, in ranked order."""
        rows = [[*SCHOOL_HEADER_PREFIX, *self.tournaments, TOTAL_HEADER]]
        for s in self.schools:
            rows.append([
                s.school,
                *(s.tournament_points.get(t, 0) for t in self.tournaments),
                s.total_points,
            ])
        return rows
