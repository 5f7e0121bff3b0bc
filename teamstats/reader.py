"""Table loader: fetches CSV/JSON sources and normalizes them into row mappings."""

import csv
import io
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import requests

from teamstats import (
    AssistEvent,
    AttendanceRecord,
    Fixture,
    GoalEvent,
    LoadError,
    MatchRecord,
    PlayerRecord,
    PresenceRecord,
)
from teamstats.columns import (
    normalize_flag,
    normalize_header,
    resolve,
    synonym_columns,
    to_number,
)

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = (
    'https://raw.githubusercontent.com/XavierGallart/estadisticas-patufet/main/files/'
)

# Table name -> file name, in load order
TABLE_FILES: dict[str, str] = {
    'players': 'jugadores.csv',
    'matches': 'partidos.csv',
    'presences': 'presencias.csv',
    'goals': 'goles.csv',
    'assists': 'asistencias.csv',
    'attendance': 'asistencia_partidos.csv',
}

SNIFF_DELIMITERS = ',;\t'

RawTables = dict[str, list[dict]]


def is_remote(locator: str | Path) -> bool:
    """True for http(s) locators."""
    return str(locator).lower().startswith(('http://', 'https://'))


def resolve_sources(base: str | Path = DEFAULT_BASE_URL) -> dict[str, str]:
    """Build the locator of every table from a base URL or a local directory.

    Args:
        base: Base URL (trailing slash optional) or directory path.

    Returns:
        Mapping table name -> locator.
    """
    if is_remote(base):
        prefix = str(base).rstrip('/') + '/'
        return {table: prefix + name for table, name in TABLE_FILES.items()}
    directory = Path(base)
    return {table: str(directory / name) for table, name in TABLE_FILES.items()}


def detect_encoding(raw: bytes) -> str:
    """Detect the encoding of raw file content by its BOM bytes.

    Args:
        raw: File content.

    Returns:
        Encoding string suitable for bytes.decode().
    """
    if raw[:2] == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def _read_bytes(locator: str | Path, timeout: float) -> bytes:
    if is_remote(locator):
        response = requests.get(str(locator), timeout=timeout)
        response.raise_for_status()
        return response.content
    with open(locator, 'rb') as f:
        return f.read()


def _sniff_delimiter(content: str) -> str:
    sample = content[:4096]
    try:
        return csv.Sniffer().sniff(sample, delimiters=SNIFF_DELIMITERS).delimiter
    except csv.Error:
        return ','


def normalize_row(row: dict) -> dict:
    """Normalize keys (trim, strip numeric-pipe prefix) and trim string values."""
    cleaned = {}
    for key, value in row.items():
        if key is None:
            # Surplus cells beyond the header
            continue
        cleaned[normalize_header(key)] = value.strip() if isinstance(value, str) else value
    return cleaned


def is_empty_row(row: dict) -> bool:
    """True if every value of the row is None or the empty string."""
    return all(value is None or value == '' for value in row.values())


def parse_csv_text(content: str, locator: str | Path = '<text>') -> list[dict]:
    """Parse delimited text with a header row into normalized row mappings.

    Args:
        content: Decoded file content.
        locator: Source name, used in error messages.

    Returns:
        Rows with normalized keys and values, fully empty rows removed.

    Raises:
        LoadError: If the content has no header row or cannot be parsed.
    """
    content = content.lstrip('\ufeff')
    reader = csv.DictReader(io.StringIO(content), delimiter=_sniff_delimiter(content))
    try:
        if not reader.fieldnames:
            raise LoadError(f"Quelle {locator} ist leer oder hat keine Header-Zeile.")
        rows = [normalize_row(row) for row in reader]
    except csv.Error as exc:
        raise LoadError(f"Quelle {locator} nicht lesbar: {exc}") from exc

    kept = [row for row in rows if not is_empty_row(row)]
    if len(kept) != len(rows):
        log.debug("%d leere Zeilen in %s entfernt", len(rows) - len(kept), locator)
    return kept


def parse_json_text(content: str, locator: str | Path = '<text>') -> list[dict]:
    """Parse a JSON array of objects into normalized row mappings."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Quelle {locator} ist kein gueltiges JSON: {exc}") from exc
    if not isinstance(data, list):
        raise LoadError(f"Quelle {locator} enthaelt keine Liste von Objekten.")
    rows = [normalize_row(item) for item in data if isinstance(item, dict)]
    return [row for row in rows if not is_empty_row(row)]


def load_table(locator: str | Path, timeout: float = 30.0) -> list[dict]:
    """Load one source table.

    Remote locators are fetched over HTTP, everything else is read from disk.
    Locators ending in ``.json`` are parsed as JSON, all others as CSV.

    Args:
        locator: URL or file path.
        timeout: HTTP timeout in seconds.

    Returns:
        List of normalized row mappings.

    Raises:
        LoadError: If the source is unreachable or malformed.
    """
    try:
        raw = _read_bytes(locator, timeout)
        content = raw.decode(detect_encoding(raw))
    except requests.RequestException as exc:
        raise LoadError(f"Quelle {locator} nicht erreichbar: {exc}") from exc
    except OSError as exc:
        raise LoadError(f"Quelle {locator} nicht lesbar: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise LoadError(f"Quelle {locator} hat eine unbekannte Kodierung: {exc}") from exc

    if str(locator).lower().endswith('.json'):
        rows = parse_json_text(content, locator)
    else:
        rows = parse_csv_text(content, locator)

    log.info("%d Zeilen gelesen aus %s", len(rows), locator)
    return rows


def load_all(
    sources: dict[str, str],
    timeout: float = 30.0,
    max_workers: int | None = None,
) -> RawTables:
    """Load all tables concurrently and join before returning.

    Args:
        sources: Mapping table name -> locator.
        timeout: HTTP timeout in seconds per table.
        max_workers: Thread count, defaults to one per table.

    Returns:
        Mapping table name -> rows, in the order of *sources*.

    Raises:
        LoadError: If any single table fails; no partial result is returned.
    """
    workers = max_workers or max(len(sources), 1)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            table: executor.submit(load_table, locator, timeout)
            for table, locator in sources.items()
        }
        return {table: future.result() for table, future in futures.items()}


def parse_matches(rows: list[dict]) -> list[MatchRecord]:
    """Build MatchRecords in file order; rows without an ID are dropped."""
    matches: list[MatchRecord] = []
    for row in rows:
        match_id = resolve(row, 'match_id')
        if not match_id:
            log.debug("Partie ohne ID uebersprungen: %s", row)
            continue
        matches.append(MatchRecord(
            match_id=match_id,
            date=resolve(row, 'match_date'),
            opponent=resolve(row, 'match_opponent'),
            goals_for=to_number(resolve(row, 'match_goals_for')),
            goals_against=to_number(resolve(row, 'match_goals_against')),
        ))
    return matches


def parse_players(rows: list[dict]) -> list[PlayerRecord]:
    """Build PlayerRecords; rows without a name are dropped."""
    players: list[PlayerRecord] = []
    for row in rows:
        name = resolve(row, 'player_name')
        if not name:
            continue
        players.append(PlayerRecord(
            name=name,
            position=resolve(row, 'player_position'),
            matches=to_number(resolve(row, 'player_matches')),
            goals=to_number(resolve(row, 'player_goals')),
            assists=to_number(resolve(row, 'player_assists')),
        ))
    return players


def parse_presences(rows: list[dict]) -> list[PresenceRecord]:
    """Build PresenceRecords; rows without a player name are dropped."""
    presences: list[PresenceRecord] = []
    for row in rows:
        player = resolve(row, 'presence_player')
        if not player:
            continue
        presences.append(PresenceRecord(
            match_id=resolve(row, 'presence_match'),
            player=player,
            minutes=to_number(resolve(row, 'presence_minutes')),
            starter=resolve(row, 'presence_starter'),
        ))
    return presences


def parse_goals(rows: list[dict]) -> list[GoalEvent]:
    """Build GoalEvents; goals without a scorer are dropped."""
    return [
        GoalEvent(match_id=resolve(row, 'goal_match'), scorer=resolve(row, 'goal_scorer'))
        for row in rows
        if resolve(row, 'goal_scorer')
    ]


def parse_assists(rows: list[dict]) -> list[AssistEvent]:
    return [
        AssistEvent(match_id=resolve(row, 'assist_match'), player=resolve(row, 'assist_player'))
        for row in rows
        if resolve(row, 'assist_player')
    ]


def parse_attendance(rows: list[dict]) -> list[AttendanceRecord]:
    """Build AttendanceRecords from the declared-attendance table.

    The player name comes from the name synonyms, or else from the first
    column of the row. The flag is the first value among the remaining
    columns that reads as an affirmative or negative token. Rows without a
    resolvable player name are dropped.

    Args:
        rows: Normalized rows of the attendance table.

    Returns:
        List of AttendanceRecord.
    """
    name_columns = synonym_columns('attendance_player')
    match_columns = synonym_columns('attendance_match')

    records: list[AttendanceRecord] = []
    for row in rows:
        player = resolve(row, 'attendance_player')
        if not player:
            first = next(iter(row.values()), None)
            player = str(first).strip() if first is not None else ''
        if not player:
            continue

        flag = None
        for column, value in row.items():
            if column in name_columns or column in match_columns:
                continue
            flag = normalize_flag(value)
            if flag is not None:
                break

        records.append(AttendanceRecord(
            player=player,
            flag=flag,
            match_id=resolve(row, 'attendance_match') or None,
            raw=dict(row),
        ))
    return records


def parse_fixtures(rows: list[dict]) -> list[Fixture]:
    """Build Fixtures from the legacy home/away match list."""
    fixtures: list[Fixture] = []
    for row in rows:
        home = resolve(row, 'fixture_home')
        away = resolve(row, 'fixture_away')
        if not home and not away:
            continue
        fixtures.append(Fixture(
            date=resolve(row, 'fixture_date'),
            home=home,
            home_goals=to_number(resolve(row, 'fixture_home_goals')),
            away=away,
            away_goals=to_number(resolve(row, 'fixture_away_goals')),
        ))
    return fixtures
