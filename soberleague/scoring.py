"""Fixture scoring: winners, league points and the clean-sheet bonus."""

from typing import Dict, Optional, Tuple

from .constants import (
    DRAW_POINTS,
    LOSS_POINTS,
    WIN_POINTS,
    WINNER_DRAW,
    WINNER_PLAYER1,
    WINNER_PLAYER2,
)
from .exceptions import FixtureAlreadyProcessedError
from .models import Fixture


def determine_winner(player1_points: float, player2_points: float) -> str:
    """
    Decide a fixture from the two point totals.

    Lower totals are better: points are earned by consuming harmful
    substances, so the player who consumed less wins.

    Returns:
        'player1', 'player2' or 'draw'
    """
    if player1_points < player2_points:
        return WINNER_PLAYER1
    if player1_points > player2_points:
        return WINNER_PLAYER2
    return WINNER_DRAW


def league_points_for(winner: str) -> Dict[str, int]:
    """
    League points awarded for a result.

    Scoring:
        - Win: 3 pts
        - Draw: 1 pt each
        - Loss: 0 pts
    """
    if winner == WINNER_PLAYER1:
        return {'player1': WIN_POINTS, 'player2': LOSS_POINTS}
    if winner == WINNER_PLAYER2:
        return {'player1': LOSS_POINTS, 'player2': WIN_POINTS}
    return {'player1': DRAW_POINTS, 'player2': DRAW_POINTS}


def apply_clean_sheet(raw_points: float, used_harmful: bool, bonus: float) -> Tuple[float, bool]:
    """
    Apply the clean-sheet bonus to a player's weekly total.

    A player with no harmful logs in the window gets ``bonus`` added (the
    bonus is normally negative, which improves the total).

    Returns:
        Tuple of (adjusted_points, clean_sheet)
    """
    if used_harmful:
        return raw_points, False
    return raw_points + bonus, True


def score_fixture(
    fixture: Fixture,
    player1_points: float,
    player2_points: float,
    clean_sheets: Optional[Dict[str, bool]] = None,
) -> Fixture:
    """
    Record the totals on a fixture and move it to the processed state.

    Args:
        fixture: Unprocessed fixture, updated in place
        player1_points: Final total for player1 (bonus already applied)
        player2_points: Final total for player2 (bonus already applied)
        clean_sheets: Optional clean-sheet flags to store with the result

    Returns:
        The same fixture, now processed

    Raises:
        FixtureAlreadyProcessedError: The fixture was already processed
    """
    if fixture.is_processed:
        raise FixtureAlreadyProcessedError(fixture.fixture_id)

    winner = determine_winner(player1_points, player2_points)

    fixture.player1_points = player1_points
    fixture.player2_points = player2_points
    if clean_sheets is not None:
        fixture.clean_sheets = dict(clean_sheets)
    fixture.winner = winner
    fixture.league_points = league_points_for(winner)
    fixture.is_processed = True

    return fixture
