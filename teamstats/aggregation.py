"""Summary metrics and scorer ranking."""

import logging
from collections import Counter
from functools import reduce
from types import MappingProxyType
from typing import Mapping

from teamstats import Fixture, GoalEvent, MatchRecord, PlayerRecord, Scorer, Totals

log = logging.getLogger(__name__)

DEFAULT_TOP_N = 8
DEFAULT_DONUT_N = 6


def compute_totals(matches: list[MatchRecord]) -> Totals:
    """Compute the summary cards from the match table.

    Goals are the officially recorded tallies, independent of goal events.
    """
    return Totals(
        matches=len(matches),
        goals_for=sum(m.goals_for for m in matches),
        goals_against=sum(m.goals_against for m in matches),
    )


def count_goals_by_scorer(goals: list[GoalEvent]) -> Mapping[str, int]:
    """Count goal events per scorer, in order of first appearance."""
    counts = Counter(g.scorer for g in goals if g.scorer)
    return MappingProxyType(dict(counts))


def _merge_event_count(
    scorers: dict[str, Scorer], item: tuple[str, int],
) -> dict[str, Scorer]:
    name, count = item
    seeded = scorers.get(name)
    if seeded is None:
        return {**scorers, name: Scorer(name=name, goals=count)}
    if not seeded.goals:
        return {**scorers, name: Scorer(name, count, seeded.matches, seeded.assists)}
    return scorers


def merge_scorers(
    players: list[PlayerRecord], goals: list[GoalEvent],
) -> Mapping[str, Scorer]:
    """Merge player totals with goal events into one scorer mapping.

    Player totals seed the mapping as they are, zero goals included. Goal
    event counts then override a seeded zero, and scorers unknown to the
    players table are appended with their event count.

    Args:
        players: Rows of the players table.
        goals: Goal events.

    Returns:
        Read-only mapping name -> Scorer in insertion order.
    """
    seeded = {
        p.name: Scorer(name=p.name, goals=p.goals, matches=p.matches, assists=p.assists)
        for p in players
    }
    merged = reduce(_merge_event_count, count_goals_by_scorer(goals).items(), seeded)
    return MappingProxyType(merged)


def rank_scorers(players: list[PlayerRecord], goals: list[GoalEvent]) -> list[Scorer]:
    """Scorer ranking, descending by goals; ties keep insertion order."""
    ranking = sorted(merge_scorers(players, goals).values(), key=lambda s: s.goals, reverse=True)
    log.debug("%d Torschuetzen in der Rangliste", len(ranking))
    return ranking


def top_scorers(ranking: list[Scorer], n: int = DEFAULT_TOP_N) -> list[Scorer]:
    return ranking[:n]


def goal_share(ranking: list[Scorer], n: int = DEFAULT_DONUT_N) -> list[dict]:
    """Name/value pairs for the proportion chart."""
    return [{'name': s.name, 'value': s.goals} for s in ranking[:n]]


def goals_by_team(fixtures: list[Fixture]) -> Mapping[str, float]:
    """Total goals per team over a home/away fixture list."""
    totals: dict[str, float] = {}
    for f in fixtures:
        totals.setdefault(f.home, 0)
        totals.setdefault(f.away, 0)
        totals[f.home] += f.home_goals
        totals[f.away] += f.away_goals
    return MappingProxyType(totals)
