"""Report generation for the dashboard (HTML, JSON, CSV, summary)."""

import csv
import json
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from teamstats import Discrepancy
from teamstats.builder import Dashboard

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'

CSV_COLUMNS = [
    'Jugador',
    'Asistencia',
    'Minutos',
    'Titular',
    'Partido',
    'Confianza',
    'Sugerencia',
]


def format_number(value):
    """Render whole floats without the decimal part."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _discrepancy_to_row(d: Discrepancy) -> dict:
    """Convert a Discrepancy to a flat dict for CSV/HTML output."""
    return {
        'Jugador': d.player,
        'Asistencia': d.declared,
        'Minutos': format_number(d.minutes),
        'Titular': d.starter,
        'Partido': d.match_id or '',
        'Confianza': d.confidence,
        'Sugerencia': d.suggestion or '',
    }


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    env.filters['num'] = format_number
    return env


def to_payload(dashboard: Dashboard) -> dict:
    """Plain chart/table data for a rendering collaborator."""
    totals = dashboard.totals
    series = dashboard.series
    return {
        'cards': [
            {'title': 'Partidos registrados', 'value': totals.matches},
            {'title': 'Goles a favor', 'value': format_number(totals.goals_for)},
            {'title': 'Goles en contra', 'value': format_number(totals.goals_against)},
            {'title': 'Diferencia de goles', 'value': format_number(totals.goal_difference)},
        ],
        'goals_bar': {
            'labels': [s.name for s in dashboard.top_scorers],
            'data': [format_number(s.goals) for s in dashboard.top_scorers],
        },
        'goals_donut': [
            {'name': item['name'], 'value': format_number(item['value'])}
            for item in dashboard.goal_share
        ],
        'goals_line': {
            'labels': series.labels,
            'from_events': series.from_events,
            'official': [format_number(v) for v in series.official],
        },
        'minutes': {
            match_id: {
                'labels': [player for player, _ in rows],
                'data': [format_number(minutes) for _, minutes in rows],
            }
            for match_id, rows in dashboard.minutes.items()
        },
        'discrepancies': [_discrepancy_to_row(d) for d in dashboard.discrepancies],
        'players': [
            {
                'Jugador': p.name,
                'Posición': p.position,
                'Partidos': format_number(p.matches),
                'Goles': format_number(p.goals),
                'Asistencias': format_number(p.assists),
            }
            for p in dashboard.players
        ],
        'team_goals': {team: format_number(v) for team, v in dashboard.team_goals.items()},
    }


def write_json_report(dashboard: Dashboard, output_path: Path) -> None:
    """Write the chart payload as JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(to_payload(dashboard), ensure_ascii=False, indent=2),
        encoding='utf-8',
    )
    log.info("JSON-Report geschrieben: %s", output_path)


def write_discrepancy_csv(discrepancies: list[Discrepancy], output_path: Path) -> None:
    """Write discrepancies as a CSV report.

    Uses UTF-8 with BOM (utf-8-sig) and semicolon delimiter for
    compatibility with Excel.

    Args:
        discrepancies: Detected discrepancies.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS, delimiter=';')
        writer.writeheader()
        for d in discrepancies:
            writer.writerow(_discrepancy_to_row(d))

    log.info("CSV-Report geschrieben: %s (%d Zeilen)", output_path, len(discrepancies))


def write_html_report(dashboard: Dashboard, output_path: Path, title: str = '') -> None:
    """Write the dashboard as an HTML page using Jinja2.

    Args:
        dashboard: Computed dashboard.
        output_path: Path for the output HTML file.
        title: Page title.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = _environment().get_template('dashboard.html')
    payload = to_payload(dashboard)
    max_goals = max((s.goals for s in dashboard.top_scorers), default=0)

    html = template.render(
        title=title or 'Estadísticas',
        payload=payload,
        dashboard=dashboard,
        max_goals=max_goals,
        discrepancy_columns=CSV_COLUMNS,
        discrepancy_rows=payload['discrepancies'],
    )
    output_path.write_text(html, encoding='utf-8')
    log.info("HTML-Report geschrieben: %s", output_path)


def write_error_page(message: str, output_path: Path) -> None:
    """Write a page showing only a load error message."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = _environment().get_template('error.html').render(message=message)
    output_path.write_text(html, encoding='utf-8')
    log.info("Fehlerseite geschrieben: %s", output_path)


def print_summary(dashboard: Dashboard) -> None:
    """Print a summary of the dashboard to stdout."""
    totals = dashboard.totals
    exact = sum(1 for d in dashboard.discrepancies if d.confidence == 'EXACT')
    substring = sum(1 for d in dashboard.discrepancies if d.confidence == 'SUBSTRING')
    missing = sum(1 for d in dashboard.discrepancies if d.confidence == 'NONE')

    print("\n=== Dashboard ===")
    print(f"Partien:                   {totals.matches:>5}")
    print(f"Tore erzielt:              {format_number(totals.goals_for):>5}")
    print(f"Tore kassiert:             {format_number(totals.goals_against):>5}")
    print(f"Tordifferenz:              {format_number(totals.goal_difference):>5}")
    print("---")
    for scorer in dashboard.top_scorers:
        print(f"  {scorer.name:<24}{format_number(scorer.goals):>5}")
    print("---")
    print(f"Abweichungen gesamt:       {len(dashboard.discrepancies):>5}")
    print(f"  - exakt (Partie-ID):     {exact:>5}")
    print(f"  - per Teilstring:        {substring:>5}")
    print(f"  - nicht registriert:     {missing:>5}")
    print()
