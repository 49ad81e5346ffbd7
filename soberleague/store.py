"""Fixture storage with a one-way processed transition."""

import copy
import logging
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .exceptions import FixtureAlreadyProcessedError, FixtureNotFoundError, SeasonExistsError
from .models import Fixture, Participant, ScheduleWeek
from .schemas import FixturesFile, ParticipantsFile
from .utils import load_json, save_json

logger = logging.getLogger('soberleague.store')

FixtureKey = Tuple[int, int, str, str]


class FixtureStore:
    """
    In-memory fixture store with JSON snapshots.

    Reads hand out copies, so changing a fixture has no effect until it is
    written back with mark_processed(). That write only succeeds while the
    stored fixture is still unprocessed; two processors racing on the same
    fixture cannot both record a result.
    """

    def __init__(self, fixtures: Optional[Iterable[Fixture]] = None):
        self._fixtures: dict[FixtureKey, Fixture] = {}
        self._lock = threading.Lock()
        for fixture in fixtures or []:
            self._fixtures[fixture.key] = copy.deepcopy(fixture)

    @classmethod
    def from_json(cls, path: str | Path) -> 'FixtureStore':
        """Load fixtures from a fixtures.json file."""
        fixtures_file = load_json(path, schema=FixturesFile)
        logger.info(f'Loaded {len(fixtures_file.fixtures)} fixtures from {path}')
        return cls(Fixture(**record.model_dump()) for record in fixtures_file.fixtures)

    def save(self, path: str | Path) -> None:
        """Write every fixture to a fixtures.json file."""
        with self._lock:
            records = [asdict(f) for f in self._sorted(self._fixtures.values())]
        save_json(path, FixturesFile.model_validate({'fixtures': records}))

    def __len__(self) -> int:
        return len(self._fixtures)

    @staticmethod
    def _sorted(fixtures: Iterable[Fixture]) -> list[Fixture]:
        return sorted(fixtures, key=lambda f: (f.season, f.start_date, f.week_number, f.player1))

    def add_schedule(self, schedule: list[ScheduleWeek]) -> int:
        """
        Store every fixture of a freshly generated schedule.

        Args:
            schedule: Output of generate_match_schedule()

        Returns:
            Number of fixtures created

        Raises:
            SeasonExistsError: Fixtures already exist for a season in the schedule
        """
        new_fixtures = [f for week in schedule for f in week.fixtures]
        seasons = {week.season for week in schedule}

        with self._lock:
            existing = {f.season for f in self._fixtures.values()}
            for season in sorted(seasons):
                if season in existing:
                    raise SeasonExistsError(season)
            for fixture in new_fixtures:
                self._fixtures[fixture.key] = copy.deepcopy(fixture)

        logger.info(f'Created {len(new_fixtures)} fixtures for season(s) {sorted(seasons)}')
        return len(new_fixtures)

    def get(self, key: FixtureKey) -> Fixture:
        """Get a copy of a fixture by its (season, week_number, player1, player2) key."""
        with self._lock:
            fixture = self._fixtures.get(tuple(key))
            if fixture is None:
                season, week_number, player1, player2 = key
                raise FixtureNotFoundError(f'S{season}-W{week_number}-{player1}-{player2}')
            return copy.deepcopy(fixture)

    def find(
        self,
        season: Optional[int] = None,
        week_number: Optional[int] = None,
        player: Optional[str] = None,
        processed: Optional[bool] = None,
    ) -> list[Fixture]:
        """Get copies of the fixtures matching every given filter, ordered by date."""
        with self._lock:
            matches = [
                copy.deepcopy(f)
                for f in self._fixtures.values()
                if (season is None or f.season == season)
                and (week_number is None or f.week_number == week_number)
                and (player is None or f.involves(player))
                and (processed is None or f.is_processed == processed)
            ]
        return self._sorted(matches)

    def seasons(self) -> list[int]:
        """Get every season that has fixtures."""
        with self._lock:
            return sorted({f.season for f in self._fixtures.values()})

    def available_weeks(self, season: int) -> dict:
        """
        List the weeks of a season.

        Returns:
            Dict with 'weeks' (all week numbers), 'unprocessed_weeks' (weeks
            with at least one unprocessed fixture) and 'total_weeks'
        """
        fixtures = self.find(season=season)
        weeks = sorted({f.week_number for f in fixtures})
        unprocessed = sorted({f.week_number for f in fixtures if not f.is_processed})
        return {
            'weeks': weeks,
            'unprocessed_weeks': unprocessed,
            'total_weeks': len(weeks),
        }

    def mark_processed(self, fixture: Fixture) -> None:
        """
        Write a scored fixture back, provided the stored copy is still unprocessed.

        Raises:
            FixtureNotFoundError: The fixture is not in the store
            FixtureAlreadyProcessedError: Another writer processed it first
            ValueError: The fixture being written has not been scored
        """
        if not fixture.is_processed:
            raise ValueError(f'Fixture {fixture.fixture_id} has not been scored')

        with self._lock:
            stored = self._fixtures.get(fixture.key)
            if stored is None:
                raise FixtureNotFoundError(fixture.fixture_id)
            if stored.is_processed:
                raise FixtureAlreadyProcessedError(fixture.fixture_id)
            self._fixtures[fixture.key] = copy.deepcopy(fixture)


def load_participants(path: str | Path) -> dict[str, Participant]:
    """
    Load the roster from a participants.json file.

    Returns:
        Dict mapping player name to Participant
    """
    participants_file = load_json(path, schema=ParticipantsFile)
    return {
        p.player_name: Participant(player_name=p.player_name, user_id=p.user_id, name=p.name)
        for p in participants_file.participants
    }
