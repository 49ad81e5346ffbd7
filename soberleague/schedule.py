"""Round-robin schedule generation for the Sober League.

A season is a double round robin built with the circle method:
- Weeks 1..n-1: every pair of players meets once
- Weeks n..2(n-1): the same pairings again with player1/player2 swapped
- Every week is a 7-day window; weeks run back-to-back from the start date

Odd rosters only get a schedule when the caller allows byes. The BYE
placeholder then rotates through the roster and the player drawn against it
sits the week out.
"""

import logging
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

from .constants import BYE, WEEK_LENGTH_DAYS
from .exceptions import OddRosterError, ScheduleError
from .models import Fixture, ScheduleWeek

logger = logging.getLogger('soberleague.schedule')


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    day = _as_date(day)
    return day - timedelta(days=day.weekday())


def _rotate(order: list[str]) -> list[str]:
    # Slot 0 stays put; the last player moves into slot 1
    return [order[0], order[-1]] + order[1:-1]


def generate_match_schedule(
    start_date: date,
    players: list[str],
    season: int = 1,
    allow_byes: bool = False,
) -> list[ScheduleWeek]:
    """Generate a double round-robin schedule.

    Args:
        start_date: First day of week 1
        players: Player names (order decides the pairings)
        season: Season number stamped on every week and fixture
        allow_byes: Pad an odd roster with a BYE instead of rejecting it

    Returns:
        List of 2*(n-1) ScheduleWeek objects, where n counts the BYE if added

    Raises:
        ScheduleError: Fewer than 2 players or duplicate names
        OddRosterError: Odd roster and allow_byes is False
    """
    if len(players) < 2:
        raise ScheduleError(f'At least 2 players are required, got {len(players)}')
    if len(set(players)) != len(players):
        raise ScheduleError('Player names must be unique')
    if BYE in players:
        raise ScheduleError(f'{BYE!r} is reserved and cannot be a player name')

    order = list(players)
    if len(order) % 2 != 0:
        if not allow_byes:
            raise OddRosterError(len(order))
        order.append(BYE)

    start_date = _as_date(start_date)
    window = timedelta(days=WEEK_LENGTH_DAYS)
    num_weeks = len(order) - 1
    half = len(order) // 2

    schedule: list[ScheduleWeek] = []

    for week in range(num_weeks):
        week_start_date = start_date + week * window
        week_end_date = week_start_date + window
        fixtures = []

        for slot in range(half):
            home = order[slot]
            away = order[-1 - slot]
            if home == BYE or away == BYE:
                continue
            fixtures.append(
                Fixture(
                    player1=home,
                    player2=away,
                    week_number=week + 1,
                    season=season,
                    start_date=week_start_date,
                    end_date=week_end_date,
                )
            )

        schedule.append(
            ScheduleWeek(
                week_number=week + 1,
                season=season,
                start_date=week_start_date,
                end_date=week_end_date,
                fixtures=fixtures,
            )
        )
        order = _rotate(order)

    # Second half: same pairings with roles reversed
    for offset, base in enumerate(schedule[:num_weeks]):
        return_start = base.start_date + num_weeks * window
        return_end = return_start + window
        week_number = num_weeks + offset + 1

        schedule.append(
            ScheduleWeek(
                week_number=week_number,
                season=season,
                start_date=return_start,
                end_date=return_end,
                fixtures=[
                    Fixture(
                        player1=f.player2,
                        player2=f.player1,
                        week_number=week_number,
                        season=season,
                        start_date=return_start,
                        end_date=return_end,
                    )
                    for f in base.fixtures
                ],
            )
        )

    logger.debug(
        f'Generated season {season}: {len(schedule)} weeks for {len(players)} players '
        f'starting {start_date.isoformat()}'
    )
    return schedule


def analyze_schedule(schedule: list[ScheduleWeek], players: list[str]) -> dict:
    """Count how often each pair of players meets.

    Args:
        schedule: Weeks to analyze
        players: Roster the schedule was built for

    Returns:
        Dict with 'matchups' (player -> opponent -> count), 'missing_matchups'
        ('A vs B' strings for pairs that never meet), 'total_weeks' and
        'matches_per_week' (fixture count of the first week)
    """
    matchups: dict[str, dict[str, int]] = {
        p1: {p2: 0 for p2 in players if p2 != p1} for p1 in players
    }

    for week in schedule:
        for fixture in week.fixtures:
            p1, p2 = fixture.player1, fixture.player2
            matchups.setdefault(p1, {})
            matchups.setdefault(p2, {})
            matchups[p1][p2] = matchups[p1].get(p2, 0) + 1
            matchups[p2][p1] = matchups[p2].get(p1, 0) + 1

    missing = [
        f'{p1} vs {p2}'
        for p1 in players
        for p2 in players
        if p1 != p2 and matchups[p1].get(p2, 0) == 0
    ]

    return {
        'matchups': matchups,
        'missing_matchups': missing,
        'total_weeks': len(schedule),
        'matches_per_week': len(schedule[0].fixtures) if schedule else 0,
    }


def get_week_range(
    fixtures: list[Fixture], season: int, week_number: int
) -> Optional[tuple[date, date]]:
    """Return the (start, end) window of a season week, or None if it has no fixtures."""
    week_fixtures = [
        f for f in fixtures if f.season == season and f.week_number == week_number
    ]
    if not week_fixtures:
        return None
    first = min(week_fixtures, key=lambda f: f.start_date)
    return first.start_date, first.end_date


def format_schedule(schedule: list[ScheduleWeek]) -> str:
    """Render a schedule in the plain-text schedule format.

    Example line:
        Week 1 (2024-01-01 - 2024-01-08): A versus D, B versus C
    """
    lines = []
    for week in schedule:
        matchups = ', '.join(f'{f.player1} versus {f.player2}' for f in week.fixtures)
        lines.append(
            f'Week {week.week_number} ({week.start_date.isoformat()} - '
            f'{week.end_date.isoformat()}): {matchups}'
        )
    return '\n'.join(lines) + '\n'


def parse_schedule_file(schedule_path: str | Path) -> list[list[tuple[str, str]]]:
    """Parse a schedule text file into weekly pairings.

    Supports format:
        Week 1 (2024-01-01 - 2024-01-08): A versus D, B versus C
        Week 2: A vs C, D vs B

    Args:
        schedule_path: Path to the schedule file

    Returns:
        List of weeks, each containing list of (player1, player2) tuples
    """
    schedule_path = Path(schedule_path)
    if not schedule_path.exists():
        raise FileNotFoundError(f'Schedule file not found: {schedule_path}')

    with open(schedule_path, encoding='utf-8') as f:
        content = f.read()

    weeks: list[list[tuple[str, str]]] = []

    for line in content.split('\n'):
        line = line.strip()

        if not line or line.startswith('#'):
            continue

        week_match = re.match(r'^Week\s+(\d+)\s*(?:\([^)]*\))?\s*:\s*(.*)$', line, re.IGNORECASE)
        if not week_match:
            continue

        week_num = int(week_match.group(1))
        pairings = []
        for matchup in week_match.group(2).split(','):
            players_match = re.match(r'^(.+?)\s+(?:versus|vs)\s+(.+)$', matchup.strip(), re.IGNORECASE)
            if players_match:
                pairings.append((players_match.group(1).strip(), players_match.group(2).strip()))

        while len(weeks) < week_num:
            weeks.append([])
        weeks[week_num - 1] = pairings

    return weeks


def schedule_from_pairings(
    pairings: list[list[tuple[str, str]]],
    start_date: date,
    season: int = 1,
) -> list[ScheduleWeek]:
    """Turn parsed weekly pairings into back-to-back 7-day weeks.

    Used to validate a hand-written schedule with the same checks as a
    generated one.

    Args:
        pairings: Output of parse_schedule_file()
        start_date: First day of week 1
        season: Season number stamped on every week and fixture
    """
    start_date = _as_date(start_date)
    window = timedelta(days=WEEK_LENGTH_DAYS)
    schedule = []

    for index, week_pairings in enumerate(pairings):
        week_number = index + 1
        week_start_date = start_date + index * window
        week_end_date = week_start_date + window
        schedule.append(
            ScheduleWeek(
                week_number=week_number,
                season=season,
                start_date=week_start_date,
                end_date=week_end_date,
                fixtures=[
                    Fixture(p1, p2, week_number, season, week_start_date, week_end_date)
                    for p1, p2 in week_pairings
                ],
            )
        )

    return schedule
