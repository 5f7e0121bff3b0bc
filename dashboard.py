"""team-stats – CLI-Tool fuer das Statistik-Dashboard einer Mannschaft."""

import argparse
import logging
import sys
from pathlib import Path

from teamstats import LoadError
from teamstats.builder import build_dashboard
from teamstats.reader import DEFAULT_BASE_URL, resolve_sources
from teamstats.reporter import (
    print_summary,
    write_discrepancy_csv,
    write_error_page,
    write_html_report,
    write_json_report,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Statistik-Dashboard aus Partien-, Spieler-, Praesenz- und Tor-Tabellen.',
        prog='dashboard.py',
    )
    parser.add_argument(
        '--source', default=DEFAULT_BASE_URL,
        help='Basis-URL oder Verzeichnis mit den CSV-Dateien',
    )
    parser.add_argument(
        '--fixtures',
        help='Optionale JSON-Liste mit Heim-/Auswaertsergebnissen (partidos.json)',
    )
    parser.add_argument(
        '--html', type=Path,
        help='Pfad fuer den HTML-Report',
    )
    parser.add_argument(
        '--json', type=Path,
        help='Pfad fuer die Diagrammdaten (JSON)',
    )
    parser.add_argument(
        '--csv', type=Path,
        help='Pfad fuer die Abweichungsliste (CSV)',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Zusammenfassung auf stdout ausgeben',
    )
    parser.add_argument(
        '--top-n', type=int, default=8,
        help='Anzahl Torschuetzen im Balkendiagramm (Standard: 8)',
    )
    parser.add_argument(
        '--fuzzy-threshold', type=float, default=0.85,
        help='Schwellenwert fuer Namensvorschlaege (Standard: 0.85)',
    )
    parser.add_argument(
        '--timeout', type=float, default=30.0,
        help='HTTP-Timeout pro Tabelle in Sekunden (Standard: 30)',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.html or args.json or args.csv or args.summary):
        parser.error('Mindestens eine Ausgabe (--html, --json, --csv, --summary) ist erforderlich.')

    try:
        dashboard = build_dashboard(
            resolve_sources(args.source),
            top_n=args.top_n,
            fuzzy_threshold=args.fuzzy_threshold,
            timeout=args.timeout,
            fixtures=args.fixtures,
        )
    except LoadError as exc:
        logging.error("Fehler beim Laden der Daten: %s", exc)
        if args.html:
            write_error_page(str(exc), args.html)
        return 1

    if args.html:
        write_html_report(dashboard, args.html)
    if args.json:
        write_json_report(dashboard, args.json)
    if args.csv:
        write_discrepancy_csv(dashboard.discrepancies, args.csv)
    if args.summary:
        print_summary(dashboard)
    return 0


if __name__ == '__main__':
    sys.exit(main())
