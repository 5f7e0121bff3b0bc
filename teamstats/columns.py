"""Column-synonym configuration and field coercion.

Source tables do not share a fixed schema: the same logical field can appear
as "Nombre", "Jugador" or "NombreJugador" depending on who exported the file.
Every logical field is therefore declared once here as an ordered tuple of
candidate column names; the first candidate holding a non-empty value wins.
"""

import math
import re
from typing import Optional

# Leading "<digits>|" prefix some exports put in front of header names ("1| Nombre")
HEADER_PREFIX_RE = re.compile(r'^\d+\|\s*')

FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    # matches table
    'match_id': ('ID', 'Id'),
    'match_date': ('Fecha',),
    'match_opponent': ('Rival',),
    'match_goals_for': ('Goles a favor',),
    'match_goals_against': ('Goles en contra',),
    # players table
    'player_name': ('Nombre', 'Jugador', 'NombreJugador'),
    'player_position': ('Posición', 'Posicion'),
    'player_matches': ('Partidos jugados', 'Partidos'),
    'player_goals': ('Goles',),
    'player_assists': ('Asistencias',),
    # goals table
    'goal_match': ('Partido ID', 'Partido', 'ID Partido'),
    'goal_scorer': ('Autor', 'Jugador'),
    # assists table
    'assist_match': ('Partido ID', 'Partido', 'ID Partido'),
    'assist_player': ('Asistente', 'Jugador', 'Nombre'),
    # presences table
    'presence_match': ('Partido ID', 'Partido', 'ID'),
    'presence_player': ('Jugador', 'Nombre'),
    'presence_minutes': ('Minutos jugados', 'Minutos'),
    'presence_starter': ('Titular',),
    # attendance table; plain "Partido" is left out because it may hold the flag
    'attendance_player': ('Jugador', 'Nombre'),
    'attendance_match': ('Partido ID', 'PartidoID', 'ID Partido'),
    # legacy JSON fixture list
    'fixture_date': ('fecha', 'Fecha'),
    'fixture_home': ('local', 'Local'),
    'fixture_home_goals': ('golesLocal', 'Goles local'),
    'fixture_away': ('visitante', 'Visitante'),
    'fixture_away_goals': ('golesVisitante', 'Goles visitante'),
}

AFFIRMATIVE_TOKENS = frozenset({'SI', 'S', 'SÍ'})
NEGATIVE_TOKENS = frozenset({'NO', 'N'})

# Lower-cased prefixes of a starter column meaning "started the match"
STARTER_PREFIXES = ('t',)

NOT_AVAILABLE = 'N/D'
NOT_REGISTERED = 'no registrado'


def normalize_header(name: Optional[str]) -> str:
    """Trim a header name and strip a leading numeric-pipe prefix."""
    return HEADER_PREFIX_RE.sub('', str(name or '').strip())


def resolve(row: dict, field_name: str, default: str = '') -> str:
    """Return the first non-empty value among the synonyms of *field_name*.

    Args:
        row: Normalized row mapping.
        field_name: Key of FIELD_SYNONYMS.
        default: Value returned when no synonym holds a value.

    Returns:
        The value as a string.
    """
    for column in FIELD_SYNONYMS[field_name]:
        value = row.get(column)
        if value is not None and value != '':
            return str(value)
    return default


def synonym_columns(*field_names: str) -> set[str]:
    """Union of the synonym columns of several logical fields."""
    columns: set[str] = set()
    for name in field_names:
        columns.update(FIELD_SYNONYMS[name])
    return columns


def to_number(value) -> float:
    """Coerce a raw value to a number; absent or non-numeric becomes 0."""
    number = to_number_or_nan(value)
    return 0.0 if math.isnan(number) else number


def to_number_or_nan(value) -> float:
    """Coerce a raw value to a number; absent or non-numeric becomes NaN."""
    if value is None or value == '':
        return math.nan
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(str(value).strip())
    except ValueError:
        return math.nan
    return number if math.isfinite(number) else math.nan


def normalize_flag(value) -> Optional[str]:
    """Map an attendance cell to 'SI' / 'NO', or None if it is no flag.

    Args:
        value: Raw cell value.

    Returns:
        'SI' for affirmative tokens, 'NO' for negative tokens, else None.
    """
    token = str(value or '').strip().upper()
    if token in AFFIRMATIVE_TOKENS:
        return 'SI'
    if token in NEGATIVE_TOKENS:
        return 'NO'
    return None


def is_starter(value) -> bool:
    """True if a starter column value means the player started."""
    return str(value or '').strip().lower().startswith(STARTER_PREFIXES)
