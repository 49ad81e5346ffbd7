from .models import (
    Participant,
    Fixture,
    ScheduleWeek,
    SubstanceLog,
    ProcessedFixtureSummary,
    StandingsRow,
)
from .exceptions import (
    LeagueError,
    ScheduleError,
    OddRosterError,
    FixtureAlreadyProcessedError,
    FixtureNotFoundError,
    SeasonExistsError,
)
from .schedule import (
    generate_match_schedule,
    week_start,
    analyze_schedule,
    get_week_range,
    format_schedule,
    parse_schedule_file,
    schedule_from_pairings,
)
from .validators import (
    validate_match_schedule,
    find_schedule_errors,
    validate_roster,
    bye_counts,
)
from .scoring import (
    determine_winner,
    league_points_for,
    apply_clean_sheet,
    score_fixture,
)
from .logs import SubstanceLogStore, summarize_window
from .store import FixtureStore, load_participants
from .processor import WeekProcessor
from .standings import compute_standings, standings_to_dicts

__all__ = [
    # Models
    'Participant',
    'Fixture',
    'ScheduleWeek',
    'SubstanceLog',
    'ProcessedFixtureSummary',
    'StandingsRow',
    # Errors
    'LeagueError',
    'ScheduleError',
    'OddRosterError',
    'FixtureAlreadyProcessedError',
    'FixtureNotFoundError',
    'SeasonExistsError',
    # Schedule
    'generate_match_schedule',
    'week_start',
    'analyze_schedule',
    'get_week_range',
    'format_schedule',
    'parse_schedule_file',
    'schedule_from_pairings',
    # Validation
    'validate_match_schedule',
    'find_schedule_errors',
    'validate_roster',
    'bye_counts',
    # Scoring
    'determine_winner',
    'league_points_for',
    'apply_clean_sheet',
    'score_fixture',
    # Storage and processing
    'SubstanceLogStore',
    'summarize_window',
    'FixtureStore',
    'load_participants',
    'WeekProcessor',
    # Standings
    'compute_standings',
    'standings_to_dicts',
]
