"""Validation functions for rosters and generated schedules."""

import logging
from collections import Counter

from .constants import BYE
from .models import ScheduleWeek

logger = logging.getLogger('soberleague.validators')


def validate_roster(players: list[str], allow_odd: bool = False) -> list[str]:
    """
    Check that a roster can be turned into a schedule.

    Checks:
    - At least 2 players
    - Even player count (unless allow_odd)
    - No blank or duplicate names
    - The BYE placeholder is not used as a name

    Args:
        players: Player names
        allow_odd: Accept an odd roster (byes will be scheduled)

    Returns:
        List of problem messages (empty if valid)
    """
    errors = []

    if len(players) < 2:
        errors.append(f'Not enough players registered ({len(players)}, need at least 2)')
    elif len(players) % 2 != 0 and not allow_odd:
        errors.append(f'Number of players must be even (got {len(players)})')

    if any(not p or not p.strip() for p in players):
        errors.append('Roster contains blank player names')

    duplicates = {p for p, count in Counter(players).items() if count > 1}
    if duplicates:
        errors.append(f'Roster has duplicate players: {", ".join(sorted(duplicates))}')

    if BYE in players:
        errors.append(f'{BYE} is reserved and cannot be used as a player name')

    return errors


def find_schedule_errors(schedule: list[ScheduleWeek], players: list[str]) -> list[str]:
    """
    List every week in which a player does not appear exactly once.

    Names that are not on the roster (other than the BYE placeholder) are
    reported too.

    Args:
        schedule: Weeks to check
        players: Roster the schedule should cover

    Returns:
        List of diagnostic messages (empty if the schedule is valid)
    """
    errors = []
    roster = set(players)

    for week in schedule:
        counts: Counter[str] = Counter()
        for fixture in week.fixtures:
            counts[fixture.player1] += 1
            counts[fixture.player2] += 1

        for player in players:
            if counts[player] != 1:
                errors.append(
                    f'Week {week.week_number}: Player {player} appears '
                    f'{counts[player]} times (expected 1)'
                )

        for name in sorted(set(counts) - roster - {BYE}):
            errors.append(f'Week {week.week_number}: Unknown player {name} in fixtures')

    return errors


def validate_match_schedule(schedule: list[ScheduleWeek], players: list[str]) -> bool:
    """Return True if every player appears exactly once in every week.

    Diagnostics for a failing schedule are logged, not raised.
    """
    errors = find_schedule_errors(schedule, players)
    for error in errors:
        logger.error(error)
    return not errors


def bye_counts(schedule: list[ScheduleWeek], players: list[str]) -> dict[str, int]:
    """Count the weeks in which each player has no fixture."""
    counts = {player: 0 for player in players}
    for week in schedule:
        playing = {p for f in week.fixtures for p in (f.player1, f.player2)}
        for player in players:
            if player not in playing:
                counts[player] += 1
    return counts
