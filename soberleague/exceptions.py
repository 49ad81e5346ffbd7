"""Exceptions raised by the league core."""


class LeagueError(Exception):
    """Base class for league errors."""


class ScheduleError(LeagueError):
    """A schedule cannot be generated for the given roster."""


class OddRosterError(ScheduleError):
    """Roster has an odd number of players and byes were not allowed."""

    def __init__(self, player_count: int):
        self.player_count = player_count
        super().__init__(
            f'Roster has {player_count} players; an odd roster needs allow_byes=True'
        )


class FixtureAlreadyProcessedError(LeagueError):
    """A fixture was scored or written after it had already been processed."""

    def __init__(self, fixture_id: str):
        self.fixture_id = fixture_id
        super().__init__(f'Fixture already processed: {fixture_id}')


class FixtureNotFoundError(LeagueError):
    """No fixture with the requested id exists in the store."""

    def __init__(self, fixture_id: str):
        self.fixture_id = fixture_id
        super().__init__(f'Fixture not found: {fixture_id}')


class SeasonExistsError(LeagueError):
    """Fixtures for the season have already been generated."""

    def __init__(self, season: int):
        self.season = season
        super().__init__(f'Matches already exist for season {season}')
