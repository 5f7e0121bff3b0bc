"""End-to-end dashboard build: load all tables, then compute every view."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from teamstats import (
    AssistEvent,
    Discrepancy,
    MatchRecord,
    MatchSeries,
    PlayerRecord,
    Scorer,
    Totals,
)
from teamstats.aggregation import (
    DEFAULT_DONUT_N,
    DEFAULT_TOP_N,
    compute_totals,
    goal_share,
    goals_by_team,
    rank_scorers,
    top_scorers,
)
from teamstats.reader import (
    RawTables,
    load_all,
    load_table,
    parse_assists,
    parse_attendance,
    parse_fixtures,
    parse_goals,
    parse_matches,
    parse_players,
    parse_presences,
)
from teamstats.reconcile import DEFAULT_FUZZY_THRESHOLD, build_presence_index, reconcile
from teamstats.series import build_match_series, match_options, minutes_by_match

log = logging.getLogger(__name__)


@dataclass
class Dashboard:
    """Every computed view, ready for a rendering collaborator."""

    totals: Totals
    scorers: list[Scorer]
    top_scorers: list[Scorer]
    goal_share: list[dict]
    series: MatchSeries
    match_options: list[tuple[str, str]]
    minutes: dict[str, list[tuple[str, float]]]
    discrepancies: list[Discrepancy]
    players: list[PlayerRecord]
    matches: list[MatchRecord]
    assists: list[AssistEvent] = field(default_factory=list)
    team_goals: dict[str, float] = field(default_factory=dict)


def build_from_tables(
    raw: RawTables,
    top_n: int = DEFAULT_TOP_N,
    donut_n: int = DEFAULT_DONUT_N,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
    fixture_rows: Optional[list[dict]] = None,
) -> Dashboard:
    """Compute the dashboard from already loaded raw tables.

    Missing tables are treated as empty.

    Args:
        raw: Mapping table name -> normalized rows.
        top_n: Number of scorers in the bar chart.
        donut_n: Number of scorers in the proportion chart.
        fuzzy_threshold: Threshold for name suggestions in the reconciliation.
        fixture_rows: Optional rows of the legacy home/away fixture list.

    Returns:
        Dashboard.
    """
    matches = parse_matches(raw.get('matches', []))
    players = parse_players(raw.get('players', []))
    presences = parse_presences(raw.get('presences', []))
    goals = parse_goals(raw.get('goals', []))
    assists = parse_assists(raw.get('assists', []))
    attendance = parse_attendance(raw.get('attendance', []))

    ranking = rank_scorers(players, goals)
    index = build_presence_index(presences)

    dashboard = Dashboard(
        totals=compute_totals(matches),
        scorers=ranking,
        top_scorers=top_scorers(ranking, top_n),
        goal_share=goal_share(ranking, donut_n),
        series=build_match_series(matches, goals),
        match_options=match_options(matches),
        minutes={m.match_id: minutes_by_match(presences, m.match_id) for m in matches},
        discrepancies=reconcile(attendance, index, fuzzy_threshold),
        players=players,
        matches=matches,
        assists=assists,
        team_goals=dict(goals_by_team(parse_fixtures(fixture_rows or []))),
    )
    log.info(
        "Dashboard berechnet: %d Partien, %d Spieler, %d Abweichungen",
        dashboard.totals.matches, len(players), len(dashboard.discrepancies),
    )
    return dashboard


def build_dashboard(
    sources: dict[str, str],
    top_n: int = DEFAULT_TOP_N,
    donut_n: int = DEFAULT_DONUT_N,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
    timeout: float = 30.0,
    fixtures: Optional[str] = None,
) -> Dashboard:
    """Load all sources concurrently and compute the dashboard.

    Raises:
        LoadError: If any source fails to load; nothing is computed then.
    """
    raw = load_all(sources, timeout=timeout)
    fixture_rows = load_table(fixtures, timeout=timeout) if fixtures else None
    return build_from_tables(raw, top_n, donut_n, fuzzy_threshold, fixture_rows)
