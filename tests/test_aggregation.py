"""Tests for teamstats.aggregation module."""

from teamstats import Fixture, GoalEvent, MatchRecord, PlayerRecord
from teamstats.aggregation import (
    compute_totals,
    count_goals_by_scorer,
    goal_share,
    goals_by_team,
    merge_scorers,
    rank_scorers,
    top_scorers,
)


def _player(**kwargs) -> PlayerRecord:
    """Create a PlayerRecord with defaults."""
    defaults = dict(name='Ana', position='Delantera', matches=2, goals=0, assists=0)
    defaults.update(kwargs)
    return PlayerRecord(**defaults)


def _goals(*scorers: str, match_id: str = '1') -> list[GoalEvent]:
    return [GoalEvent(match_id=match_id, scorer=s) for s in scorers]


class TestTotals:
    """Tests for the summary cards."""

    def test_sums_match_fields(self):
        matches = [
            MatchRecord('1', '2024-09-14', 'A', 2, 1),
            MatchRecord('2', '2024-09-21', 'B', 1, 3),
        ]
        totals = compute_totals(matches)
        assert totals.matches == 2
        assert totals.goals_for == 3
        assert totals.goals_against == 4
        assert totals.goal_difference == -1

    def test_empty(self):
        totals = compute_totals([])
        assert totals.matches == 0
        assert totals.goal_difference == 0


class TestScorerRanking:
    """Tests for merging player totals with goal events."""

    def test_stable_descending_sort(self):
        players = [_player(name='A', goals=5), _player(name='B', goals=5), _player(name='C', goals=3)]
        ranking = rank_scorers(players, [])
        assert [s.name for s in ranking] == ['A', 'B', 'C']

    def test_stable_sort_with_lower_seed_first(self):
        players = [_player(name='C', goals=3), _player(name='A', goals=5), _player(name='B', goals=5)]
        ranking = rank_scorers(players, [])
        assert [s.name for s in ranking] == ['A', 'B', 'C']

    def test_zero_goals_overridden_by_events(self):
        players = [_player(name='Ana', goals=0, matches=4, assists=1)]
        merged = merge_scorers(players, _goals('Ana', 'Ana'))
        assert merged['Ana'].goals == 2
        assert merged['Ana'].matches == 4
        assert merged['Ana'].assists == 1

    def test_nonzero_goals_kept(self):
        players = [_player(name='Ana', goals=7)]
        merged = merge_scorers(players, _goals('Ana', 'Ana'))
        assert merged['Ana'].goals == 7

    def test_unknown_scorer_appended(self):
        merged = merge_scorers([_player(name='Ana', goals=1)], _goals('Dana'))
        assert list(merged) == ['Ana', 'Dana']
        assert merged['Dana'].goals == 1
        assert merged['Dana'].matches == 0
        assert merged['Dana'].assists == 0

    def test_zero_seed_without_events_stays(self):
        merged = merge_scorers([_player(name='Carla', goals=0)], [])
        assert merged['Carla'].goals == 0

    def test_players_not_mutated(self):
        players = [_player(name='Ana', goals=0)]
        merge_scorers(players, _goals('Ana'))
        assert players[0].goals == 0

    def test_count_by_scorer_in_first_appearance_order(self):
        counts = count_goals_by_scorer(_goals('B', 'A', 'B', ''))
        assert list(counts.items()) == [('B', 2), ('A', 1)]


class TestChartViews:
    """Tests for bar and proportion chart data."""

    def test_top_scorers(self):
        ranking = rank_scorers([_player(name=str(i), goals=i) for i in range(10)], [])
        top = top_scorers(ranking, 8)
        assert len(top) == 8
        assert top[0].name == '9'

    def test_goal_share(self):
        ranking = rank_scorers([_player(name='A', goals=3), _player(name='B', goals=1)], [])
        assert goal_share(ranking, 6) == [{'name': 'A', 'value': 3}, {'name': 'B', 'value': 1}]


class TestGoalsByTeam:
    """Tests for per-team totals of the fixture list."""

    def test_home_and_away_summed(self):
        fixtures = [
            Fixture('2024-09-14', 'Patufet', 2, 'Alpha', 1),
            Fixture('2024-09-21', 'Beta', 0, 'Patufet', 3),
        ]
        totals = goals_by_team(fixtures)
        assert list(totals.items()) == [('Patufet', 5), ('Alpha', 1), ('Beta', 0)]
