"""League table built from processed fixtures."""

from typing import Iterable, Optional

from .constants import WINNER_DRAW
from .models import Fixture, Participant, StandingsRow


def compute_standings(
    fixtures: Iterable[Fixture],
    players: Iterable[str],
    roster: Optional[dict[str, Participant]] = None,
) -> list[StandingsRow]:
    """Build the league table for a set of fixtures.

    Only processed fixtures count. Rows are ordered by league points
    (descending), then by substance points (ascending, fewer is better).

    Args:
        fixtures: Fixtures of one season
        players: Every player who should get a row, including those yet to play
        roster: Optional identity records used for display names

    Returns:
        Ranked list of StandingsRow (rank starts at 1)
    """
    roster = roster or {}
    rows = {
        p: StandingsRow(player_name=p, name=roster[p].name if p in roster else '')
        for p in players
    }

    for fixture in fixtures:
        if not fixture.is_processed:
            continue

        for side, other in (('player1', 'player2'), ('player2', 'player1')):
            player = getattr(fixture, side)
            row = rows.get(player)
            if row is None:
                continue

            row.points += fixture.league_points.get(side, 0)
            row.substance_points += getattr(fixture, f'{side}_points') or 0
            row.played += 1

            if fixture.winner == WINNER_DRAW:
                row.draws += 1
            elif fixture.winner == side:
                row.wins += 1
            elif fixture.winner == other:
                row.losses += 1

    table = sorted(rows.values(), key=lambda r: (-r.points, r.substance_points))
    for rank, row in enumerate(table, 1):
        row.rank = rank
    return table


def standings_to_dicts(table: list[StandingsRow]) -> list[dict]:
    """Convert a table to JSON-ready dicts."""
    return [
        {
            'rank': row.rank,
            'player_name': row.player_name,
            'name': row.name,
            'points': row.points,
            'played': row.played,
            'wins': row.wins,
            'draws': row.draws,
            'losses': row.losses,
            'substance_points': row.substance_points,
        }
        for row in table
    ]
