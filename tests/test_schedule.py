"""Unit tests for round-robin schedule generation."""

from collections import Counter
from datetime import date, datetime

import pytest

from soberleague.exceptions import OddRosterError, ScheduleError
from soberleague.models import Fixture, ScheduleWeek
from soberleague.schedule import (
    analyze_schedule,
    format_schedule,
    generate_match_schedule,
    get_week_range,
    parse_schedule_file,
    schedule_from_pairings,
    week_start,
)
from soberleague.validators import bye_counts, find_schedule_errors

PLAYERS = ['A', 'B', 'C', 'D']


class TestScheduleShape:
    """Tests for the number and contents of generated weeks."""

    @pytest.mark.parametrize('n', [2, 4, 6, 8, 10])
    def test_week_and_fixture_counts(self, n):
        """Test even roster gives 2*(n-1) weeks of n/2 fixtures."""
        players = [f'P{i}' for i in range(n)]
        schedule = generate_match_schedule(date(2024, 1, 1), players)
        assert len(schedule) == 2 * (n - 1)
        for week in schedule:
            assert len(week.fixtures) == n // 2

    @pytest.mark.parametrize('n', [4, 6, 8])
    def test_every_pair_meets_twice_with_roles_swapped(self, n):
        """Test each ordered pairing appears exactly once across the season."""
        players = [f'P{i}' for i in range(n)]
        schedule = generate_match_schedule(date(2024, 1, 1), players)

        ordered = Counter(
            (f.player1, f.player2) for week in schedule for f in week.fixtures
        )
        for p1 in players:
            for p2 in players:
                if p1 != p2:
                    assert ordered[(p1, p2)] == 1

    def test_first_half_is_single_round_robin(self):
        """Test first n-1 weeks cover every unordered pair once."""
        players = [f'P{i}' for i in range(6)]
        schedule = generate_match_schedule(date(2024, 1, 1), players)

        pairs = Counter(
            frozenset((f.player1, f.player2)) for week in schedule[:5] for f in week.fixtures
        )
        assert len(pairs) == 15
        assert set(pairs.values()) == {1}

    def test_week_numbers_sequential(self):
        """Test weeks are numbered 1..2(n-1) with no gaps."""
        schedule = generate_match_schedule(date(2024, 1, 1), PLAYERS)
        assert [w.week_number for w in schedule] == [1, 2, 3, 4, 5, 6]

    def test_season_stamped_everywhere(self):
        """Test season number is carried by weeks and fixtures."""
        schedule = generate_match_schedule(date(2024, 1, 1), PLAYERS, season=3)
        assert all(w.season == 3 for w in schedule)
        assert all(f.season == 3 for w in schedule for f in w.fixtures)

    def test_fixtures_start_unprocessed(self):
        """Test generated fixtures have no points, no winner and are unprocessed."""
        schedule = generate_match_schedule(date(2024, 1, 1), PLAYERS)
        for week in schedule:
            for fixture in week.fixtures:
                assert fixture.is_processed is False
                assert fixture.winner is None
                assert fixture.player1_points is None
                assert fixture.player2_points is None


class TestScheduleDates:
    """Tests for week windows."""

    def test_first_week_starts_on_start_date(self):
        """Test week 1 begins on the supplied date."""
        schedule = generate_match_schedule(date(2024, 3, 6), PLAYERS)
        assert schedule[0].start_date == date(2024, 3, 6)
        assert schedule[0].end_date == date(2024, 3, 13)

    def test_weeks_are_contiguous(self):
        """Test each week starts where the previous one ended."""
        schedule = generate_match_schedule(date(2024, 1, 1), [f'P{i}' for i in range(8)])
        for prev, nxt in zip(schedule, schedule[1:]):
            assert nxt.start_date == prev.end_date
            assert (nxt.end_date - nxt.start_date).days == 7

    def test_fixture_windows_match_week(self):
        """Test fixtures carry their week's window."""
        schedule = generate_match_schedule(date(2024, 1, 1), PLAYERS)
        for week in schedule:
            for fixture in week.fixtures:
                assert fixture.start_date == week.start_date
                assert fixture.end_date == week.end_date
                assert fixture.week_number == week.week_number

    def test_datetime_start_is_truncated(self):
        """Test a datetime start date is reduced to its day."""
        schedule = generate_match_schedule(datetime(2024, 1, 1, 15, 30), PLAYERS)
        assert schedule[0].start_date == date(2024, 1, 1)
        assert not isinstance(schedule[0].start_date, datetime)

    def test_week_start_returns_monday(self):
        """Test week_start canonicalises to the Monday of the week."""
        assert week_start(date(2024, 1, 3)) == date(2024, 1, 1)
        assert week_start(date(2024, 1, 7)) == date(2024, 1, 1)
        assert week_start(date(2024, 1, 1)) == date(2024, 1, 1)


class TestFourPlayerSeason:
    """End-to-end schedule for A, B, C, D starting Monday 2024-01-01."""

    @pytest.fixture
    def schedule(self):
        return generate_match_schedule(date(2024, 1, 1), PLAYERS)

    def test_six_weeks(self, schedule):
        """Test 4 players give 6 weeks."""
        assert len(schedule) == 6

    def test_week_one_pairings(self, schedule):
        """Test week 1 is A vs D and B vs C over [2024-01-01, 2024-01-08)."""
        week = schedule[0]
        assert [(f.player1, f.player2) for f in week.fixtures] == [('A', 'D'), ('B', 'C')]
        assert week.start_date == date(2024, 1, 1)
        assert week.end_date == date(2024, 1, 8)

    def test_week_four_reverses_week_one(self, schedule):
        """Test the second half opens with week 1's pairings swapped."""
        week = schedule[3]
        assert week.week_number == 4
        assert [(f.player1, f.player2) for f in week.fixtures] == [('D', 'A'), ('C', 'B')]
        assert week.start_date == date(2024, 1, 22)

    def test_rotation_keeps_first_player_fixed(self, schedule):
        """Test the first player is always player1 in the first half."""
        for week in schedule[:3]:
            assert week.fixtures[0].player1 == 'A'


class TestRosterErrors:
    """Tests for rosters that cannot be scheduled."""

    def test_empty_roster(self):
        """Test empty roster is rejected."""
        with pytest.raises(ScheduleError):
            generate_match_schedule(date(2024, 1, 1), [])

    def test_single_player(self):
        """Test one player is rejected."""
        with pytest.raises(ScheduleError, match='At least 2 players'):
            generate_match_schedule(date(2024, 1, 1), ['A'])

    def test_duplicate_players(self):
        """Test duplicate names are rejected."""
        with pytest.raises(ScheduleError, match='unique'):
            generate_match_schedule(date(2024, 1, 1), ['A', 'B', 'A', 'C'])

    def test_bye_name_reserved(self):
        """Test the BYE placeholder cannot be a real player."""
        with pytest.raises(ScheduleError, match='reserved'):
            generate_match_schedule(date(2024, 1, 1), ['A', 'BYE'])

    def test_odd_roster_requires_opt_in(self):
        """Test odd roster raises OddRosterError unless byes are allowed."""
        with pytest.raises(OddRosterError) as exc_info:
            generate_match_schedule(date(2024, 1, 1), ['A', 'B', 'C', 'D', 'E'])
        assert exc_info.value.player_count == 5

    def test_odd_roster_error_is_schedule_error(self):
        """Test OddRosterError can be caught as ScheduleError."""
        with pytest.raises(ScheduleError):
            generate_match_schedule(date(2024, 1, 1), ['A', 'B', 'C'])


class TestOddRosterWithByes:
    """Tests for odd rosters scheduled with allow_byes=True."""

    @pytest.fixture
    def players(self):
        return ['A', 'B', 'C', 'D', 'E']

    @pytest.fixture
    def schedule(self, players):
        return generate_match_schedule(date(2024, 1, 1), players, allow_byes=True)

    def test_week_count_includes_bye(self, schedule):
        """Test 5 players plus BYE give 2*(6-1) weeks."""
        assert len(schedule) == 10

    def test_bye_never_in_fixtures(self, schedule):
        """Test BYE never appears in a fixture."""
        for week in schedule:
            for fixture in week.fixtures:
                assert 'BYE' not in (fixture.player1, fixture.player2)
            assert len(week.fixtures) == 2

    def test_one_bye_per_week(self, schedule, players):
        """Test exactly one player sits out each week."""
        for week in schedule:
            playing = {p for f in week.fixtures for p in (f.player1, f.player2)}
            assert len(set(players) - playing) == 1

    def test_one_bye_per_player_per_half(self, schedule, players):
        """Test each player has one bye in the first half and two overall."""
        assert bye_counts(schedule[:5], players) == {p: 1 for p in players}
        assert bye_counts(schedule, players) == {p: 2 for p in players}


class TestScheduleAnalysis:
    """Tests for analyze_schedule and get_week_range."""

    def test_full_season_analysis(self):
        """Test a double round robin has every pair twice and nothing missing."""
        schedule = generate_match_schedule(date(2024, 1, 1), PLAYERS)
        analysis = analyze_schedule(schedule, PLAYERS)

        assert analysis['total_weeks'] == 6
        assert analysis['matches_per_week'] == 2
        assert analysis['missing_matchups'] == []
        assert analysis['matchups']['A']['B'] == 2
        assert analysis['matchups']['B']['A'] == 2

    def test_missing_matchups_reported(self):
        """Test pairs that never meet are listed in both directions."""
        week = ScheduleWeek(
            week_number=1,
            season=1,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 8),
            fixtures=[
                Fixture('A', 'B', 1, 1, date(2024, 1, 1), date(2024, 1, 8)),
                Fixture('C', 'D', 1, 1, date(2024, 1, 1), date(2024, 1, 8)),
            ],
        )
        analysis = analyze_schedule([week], PLAYERS)

        assert 'A vs C' in analysis['missing_matchups']
        assert 'C vs A' in analysis['missing_matchups']
        assert 'A vs B' not in analysis['missing_matchups']
        assert len(analysis['missing_matchups']) == 8

    def test_empty_schedule_analysis(self):
        """Test analysis of an empty schedule does not crash."""
        analysis = analyze_schedule([], PLAYERS)
        assert analysis['total_weeks'] == 0
        assert analysis['matches_per_week'] == 0

    def test_week_range(self):
        """Test week date range lookup."""
        schedule = generate_match_schedule(date(2024, 1, 1), PLAYERS)
        fixtures = [f for week in schedule for f in week.fixtures]

        assert get_week_range(fixtures, 1, 4) == (date(2024, 1, 22), date(2024, 1, 29))
        assert get_week_range(fixtures, 1, 99) is None
        assert get_week_range(fixtures, 2, 1) is None


class TestScheduleText:
    """Tests for the plain-text schedule format."""

    def test_format_line(self):
        """Test a week renders as one line with its window."""
        schedule = generate_match_schedule(date(2024, 1, 1), PLAYERS)
        lines = format_schedule(schedule).splitlines()

        assert len(lines) == 6
        assert lines[0] == 'Week 1 (2024-01-01 - 2024-01-08): A versus D, B versus C'

    def test_parse_formatted_schedule(self, tmp_path):
        """Test a formatted schedule parses back to the same pairings."""
        players = ['Anna Rossi', 'Bruno', 'Carla', 'Dario']
        schedule = generate_match_schedule(date(2024, 1, 1), players)
        path = tmp_path / 'schedule.txt'
        path.write_text(format_schedule(schedule), encoding='utf-8')

        weeks = parse_schedule_file(path)

        assert len(weeks) == 6
        assert weeks[0] == [('Anna Rossi', 'Dario'), ('Bruno', 'Carla')]
        assert weeks[3] == [('Dario', 'Anna Rossi'), ('Carla', 'Bruno')]

    def test_parse_skips_comments_and_accepts_vs(self, tmp_path):
        """Test comments are ignored and 'vs' works as a separator."""
        path = tmp_path / 'schedule.txt'
        path.write_text('# season 1\n\nWeek 2: A vs B, C vs D\n', encoding='utf-8')

        weeks = parse_schedule_file(path)

        assert weeks == [[], [('A', 'B'), ('C', 'D')]]

    def test_parse_missing_file(self, tmp_path):
        """Test missing schedule file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            parse_schedule_file(tmp_path / 'nope.txt')

    def test_pairings_to_weeks(self, tmp_path):
        """Test parsed pairings become consecutive 7-day weeks the validator accepts."""
        path = tmp_path / 'schedule.txt'
        path.write_text('Week 1: A vs B, C vs D\nWeek 2: A vs C, B vs D\n', encoding='utf-8')

        schedule = schedule_from_pairings(parse_schedule_file(path), date(2024, 1, 1), season=3)

        assert [(w.week_number, w.start_date, w.end_date) for w in schedule] == [
            (1, date(2024, 1, 1), date(2024, 1, 8)),
            (2, date(2024, 1, 8), date(2024, 1, 15)),
        ]
        assert schedule[1].fixtures[0].key == (3, 2, 'A', 'C')
        assert find_schedule_errors(schedule, PLAYERS) == []
