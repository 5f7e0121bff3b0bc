"""Per-match series aligned to the order of the match table."""

from collections import defaultdict
from types import MappingProxyType
from typing import Mapping

from teamstats import GoalEvent, MatchRecord, MatchSeries, PresenceRecord


def match_label(match: MatchRecord) -> str:
    """X-axis label of a match, e.g. "#3 2024-10-05"."""
    return f"#{match.match_id} {match.date}".rstrip()


def group_goals_by_match(goals: list[GoalEvent]) -> Mapping[str, list[GoalEvent]]:
    """Group goal events by match identifier, compared as string."""
    groups: dict[str, list[GoalEvent]] = defaultdict(list)
    for goal in goals:
        groups[str(goal.match_id)].append(goal)
    return MappingProxyType(dict(groups))


def build_match_series(matches: list[MatchRecord], goals: list[GoalEvent]) -> MatchSeries:
    """Build the goals-per-match series from events and from the match table.

    Both sequences are indexed like *matches*; a match without events counts
    zero, events of unknown matches are ignored.

    Args:
        matches: Match table in official order.
        goals: Goal events.

    Returns:
        MatchSeries with labels, event-derived counts and official counts.
    """
    groups = group_goals_by_match(goals)
    return MatchSeries(
        labels=[match_label(m) for m in matches],
        from_events=[len(groups.get(str(m.match_id), ())) for m in matches],
        official=[m.goals_for for m in matches],
    )


def match_options(matches: list[MatchRecord]) -> list[tuple[str, str]]:
    """(match id, caption) pairs for the match selector."""
    return [
        (m.match_id, f"Partido {m.match_id} — {m.date} — {m.opponent}")
        for m in matches
    ]


def minutes_by_match(
    presences: list[PresenceRecord], match_id: str,
) -> list[tuple[str, float]]:
    """Minutes played per player in one match, in presence-table order."""
    return [
        (p.player, p.minutes)
        for p in presences
        if str(p.match_id) == str(match_id)
    ]
