"""Weekly processing: turns substance logs into fixture results."""

import logging
from datetime import date
from typing import Optional

from .config import get_config
from .constants import WINNER_DRAW, WINNER_PLAYER1
from .exceptions import LeagueError
from .logs import SubstanceLogStore, summarize_window
from .models import Fixture, Participant, ProcessedFixtureSummary
from .schemas import LeagueConfig
from .scoring import apply_clean_sheet, score_fixture
from .store import FixtureStore

logger = logging.getLogger('soberleague.processor')


class WeekProcessor:
    """
    Scores the unprocessed fixtures of a season.

    For every fixture the processor resolves both players, totals their logs
    inside the fixture window, applies the clean-sheet bonus, scores the
    fixture and writes it back to the store.
    """

    def __init__(
        self,
        store: FixtureStore,
        logs: SubstanceLogStore,
        roster: dict[str, Participant],
        clean_sheet_bonus: float,
    ):
        """
        Initialize processor.

        Args:
            store: Fixture store to read from and write results to
            logs: Substance log supplier
            roster: Player name -> Participant identity record
            clean_sheet_bonus: Points added for a week without harmful use
        """
        self.store = store
        self.logs = logs
        self.roster = roster
        self.clean_sheet_bonus = clean_sheet_bonus

    @classmethod
    def from_config(
        cls,
        store: FixtureStore,
        logs: SubstanceLogStore,
        roster: dict[str, Participant],
        config: Optional[LeagueConfig] = None,
    ) -> 'WeekProcessor':
        """Build a processor using the clean-sheet bonus from league config."""
        config = config or get_config()
        return cls(store, logs, roster, config.clean_sheet_bonus)

    def candidate_fixtures(
        self, season: int, week_number: Optional[int] = None, today: Optional[date] = None
    ) -> list[Fixture]:
        """
        Get the fixtures a processing run should score.

        With a week number, every unprocessed fixture of that week. Without
        one, every unprocessed fixture of the season whose window has ended
        by ``today`` (end dates are exclusive, so end_date <= today).
        """
        if week_number is not None:
            return self.store.find(season=season, week_number=week_number, processed=False)

        today = today or date.today()
        return [
            f for f in self.store.find(season=season, processed=False)
            if f.end_date <= today
        ]

    def player_total(self, fixture: Fixture, participant: Participant) -> tuple[float, bool]:
        """
        Total a player's points for a fixture window.

        Returns:
            Tuple of (points_with_bonus, clean_sheet)
        """
        window = self.logs.fetch(participant.user_id, fixture.start_date, fixture.end_date)
        raw_points, used_harmful = summarize_window(window)
        return apply_clean_sheet(raw_points, used_harmful, self.clean_sheet_bonus)

    def process_fixture(self, fixture: Fixture) -> Optional[ProcessedFixtureSummary]:
        """
        Score a single fixture and write the result to the store.

        Returns:
            Summary of the result, or None if either player is not on the roster

        Raises:
            FixtureAlreadyProcessedError: The fixture was processed elsewhere first
        """
        participant1 = self.roster.get(fixture.player1)
        participant2 = self.roster.get(fixture.player2)
        if participant1 is None or participant2 is None:
            missing = [p for p in (fixture.player1, fixture.player2) if p not in self.roster]
            logger.warning(
                f'Skipping {fixture.fixture_id}: no participant record for {", ".join(missing)}'
            )
            return None

        player1_points, clean1 = self.player_total(fixture, participant1)
        player2_points, clean2 = self.player_total(fixture, participant2)

        score_fixture(
            fixture,
            player1_points,
            player2_points,
            clean_sheets={'player1': clean1, 'player2': clean2},
        )
        self.store.mark_processed(fixture)

        if fixture.winner == WINNER_DRAW:
            winner = 'Draw'
        elif fixture.winner == WINNER_PLAYER1:
            winner = fixture.player1
        else:
            winner = fixture.player2

        logger.debug(
            f'{fixture.fixture_id}: {fixture.player1} {player1_points} - '
            f'{player2_points} {fixture.player2} ({winner})'
        )

        return ProcessedFixtureSummary(
            fixture_id=fixture.fixture_id,
            week=fixture.week_number,
            player1=fixture.player1,
            player2=fixture.player2,
            player1_points=player1_points,
            player2_points=player2_points,
            winner=winner,
            clean_sheets=dict(fixture.clean_sheets),
        )

    def process_round(
        self, season: int, week_number: Optional[int] = None, today: Optional[date] = None
    ) -> list[ProcessedFixtureSummary]:
        """
        Process a week, or every elapsed week of a season.

        A fixture that fails is logged and skipped; the rest of the run
        continues.

        Args:
            season: Season number
            week_number: Week to process (default: all elapsed weeks)
            today: Reference date for "elapsed" (default: date.today())

        Returns:
            One summary per fixture processed in this run
        """
        fixtures = self.candidate_fixtures(season, week_number, today)
        if not fixtures:
            logger.info(f'No unprocessed matches found for season {season}')
            return []

        results = []
        seen = set()

        for fixture in fixtures:
            if fixture.key in seen:
                continue
            seen.add(fixture.key)

            try:
                summary = self.process_fixture(fixture)
            except LeagueError as e:
                logger.error(f'Could not process {fixture.fixture_id}: {e}')
                continue

            if summary is not None:
                results.append(summary)

        logger.info(f'Processed {len(results)} of {len(fixtures)} match(es) for season {season}')
        return results
