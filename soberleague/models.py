"""Data models for the Sober League."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple


def _player_flags() -> Dict[str, bool]:
    return {'player1': False, 'player2': False}


def _player_points() -> Dict[str, int]:
    return {'player1': 0, 'player2': 0}


@dataclass
class Participant:
    """Identity record for a rostered player."""
    player_name: str
    user_id: str
    name: str = ''


@dataclass
class Fixture:
    """A single head-to-head pairing within a week."""
    player1: str
    player2: str
    week_number: int
    season: int
    start_date: date
    end_date: date  # exclusive
    player1_points: Optional[float] = None  # None until scored
    player2_points: Optional[float] = None
    clean_sheets: Dict[str, bool] = field(default_factory=_player_flags)
    winner: Optional[str] = None  # 'player1', 'player2', 'draw' or None
    league_points: Dict[str, int] = field(default_factory=_player_points)
    is_processed: bool = False

    @property
    def key(self) -> Tuple[int, int, str, str]:
        """(season, week_number, player1, player2) identity used as the store key."""
        return (self.season, self.week_number, self.player1, self.player2)

    @property
    def fixture_id(self) -> str:
        # Display label only; not unique when names contain '-'
        return f'S{self.season}-W{self.week_number}-{self.player1}-{self.player2}'

    def involves(self, player: str) -> bool:
        return player in (self.player1, self.player2)


@dataclass
class ScheduleWeek:
    """One round of the schedule: a date window and its fixtures."""
    week_number: int
    season: int
    start_date: date
    end_date: date
    fixtures: List[Fixture] = field(default_factory=list)


@dataclass
class SubstanceLog:
    """A dated consumption entry reported by a player."""
    user_id: str
    substance: str
    date: date
    points: float


@dataclass
class ProcessedFixtureSummary:
    """Outcome of processing one fixture."""
    fixture_id: str
    week: int
    player1: str
    player2: str
    player1_points: float
    player2_points: float
    winner: str  # player name or 'Draw'
    clean_sheets: Dict[str, bool] = field(default_factory=_player_flags)


@dataclass
class StandingsRow:
    """A player's line in the league table."""
    player_name: str
    name: str = ''
    points: int = 0
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    substance_points: float = 0.0
    rank: int = 0
