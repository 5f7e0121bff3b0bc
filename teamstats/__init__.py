"""Core module for the team-stats dashboard."""

from dataclasses import dataclass, field
from typing import Optional


class LoadError(Exception):
    """Raised when a source table is unreachable or cannot be parsed."""


@dataclass(frozen=True)
class MatchRecord:
    """One played fixture with its officially recorded goal tally."""

    match_id: str
    date: str
    opponent: str
    goals_for: float
    goals_against: float = 0.0


@dataclass(frozen=True)
class PlayerRecord:
    """Per-player season totals from the players table."""

    name: str
    position: str
    matches: float
    goals: float
    assists: float


@dataclass(frozen=True)
class PresenceRecord:
    """One player's participation in one match."""

    match_id: str
    player: str
    minutes: float
    starter: str  # raw text, e.g. "Titular", "true", ""


@dataclass(frozen=True)
class GoalEvent:
    """One scored goal."""

    match_id: str
    scorer: str


@dataclass(frozen=True)
class AssistEvent:
    """One assist."""

    match_id: str
    player: str


@dataclass(frozen=True)
class AttendanceRecord:
    """Declared attendance of a player, independent of presence data."""

    player: str
    flag: Optional[str]       # 'SI', 'NO' or None when unresolved
    match_id: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False)

    @property
    def declared_present(self) -> bool:
        return self.flag == 'SI'


@dataclass(frozen=True)
class Fixture:
    """A home/away result from the legacy JSON match list."""

    date: str
    home: str
    home_goals: float
    away: str
    away_goals: float


@dataclass(frozen=True)
class Scorer:
    """Entry of the scorer ranking."""

    name: str
    goals: float
    matches: float = 0
    assists: float = 0


@dataclass(frozen=True)
class Totals:
    """Summary cards computed from the match table."""

    matches: int
    goals_for: float
    goals_against: float

    @property
    def goal_difference(self) -> float:
        return self.goals_for - self.goals_against


@dataclass(frozen=True)
class MatchSeries:
    """Goal counts per match, aligned to the order of the match table."""

    labels: list[str]
    from_events: list[int]
    official: list[float]


@dataclass(frozen=True)
class Discrepancy:
    """Disagreement between declared attendance and presence data."""

    player: str
    declared: str                  # flag token or 'N/D'
    minutes: float | str           # number or NOT_REGISTERED
    starter: str                   # raw starter text, 'N/D' or NOT_REGISTERED
    match_id: Optional[str] = None
    confidence: str = 'SUBSTRING'  # EXACT, SUBSTRING, NONE
    suggestion: Optional[str] = None
