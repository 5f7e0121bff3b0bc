"""Presence lookup and reconciliation of declared attendance against presences."""

import logging
import unicodedata
from types import MappingProxyType
from typing import Mapping, Optional

from rapidfuzz.distance import JaroWinkler

from teamstats import AttendanceRecord, Discrepancy, PresenceRecord
from teamstats.columns import NOT_AVAILABLE, NOT_REGISTERED, is_starter

log = logging.getLogger(__name__)

KEY_SEPARATOR = '|'
DEFAULT_FUZZY_THRESHOLD = 0.85

PresenceIndex = Mapping[str, PresenceRecord]


def presence_key(match_id: str, player: str) -> str:
    """Composite lookup key of a (match, player) pair."""
    return f"{match_id}{KEY_SEPARATOR}{player}"


def build_presence_index(presences: list[PresenceRecord]) -> PresenceIndex:
    """Index presences by composite key; the last record of a duplicate key wins."""
    index = {presence_key(p.match_id, p.player): p for p in presences}
    return MappingProxyType(index)


def presence_implies_attendance(record: PresenceRecord) -> bool:
    """A player attended if they played any minutes or started."""
    return record.minutes > 0 or is_starter(record.starter)


def normalize_name(text: str) -> str:
    """Strip accents and surrounding whitespace, then uppercase."""
    decomposed = unicodedata.normalize('NFD', text)
    stripped = ''.join(ch for ch in decomposed if unicodedata.category(ch) != 'Mn')
    return ' '.join(stripped.split()).upper()


def suggest_player(
    player: str, known_players: list[str], threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> Optional[str]:
    """Closest known player name by Jaro-Winkler similarity, if above threshold.

    Args:
        player: Name declared in the attendance table.
        known_players: Names found in the presence table.
        threshold: Minimum similarity (0–1).

    Returns:
        The best candidate or None.
    """
    target = normalize_name(player)
    best: Optional[str] = None
    best_sim = threshold
    for candidate in known_players:
        sim = JaroWinkler.similarity(target, normalize_name(candidate))
        if sim >= best_sim and candidate != player:
            best, best_sim = candidate, sim
    return best


def _discrepancy(
    record: AttendanceRecord, presence: PresenceRecord, confidence: str,
) -> Optional[Discrepancy]:
    if record.declared_present == presence_implies_attendance(presence):
        return None
    return Discrepancy(
        player=record.player,
        declared=record.flag or NOT_AVAILABLE,
        minutes=presence.minutes,
        starter=presence.starter or NOT_AVAILABLE,
        match_id=presence.match_id,
        confidence=confidence,
    )


def _not_registered(
    record: AttendanceRecord, known_players: list[str], fuzzy_threshold: float,
) -> Discrepancy:
    return Discrepancy(
        player=record.player,
        declared=record.flag or NOT_AVAILABLE,
        minutes=NOT_REGISTERED,
        starter=NOT_REGISTERED,
        match_id=record.match_id,
        confidence='NONE',
        suggestion=suggest_player(record.player, known_players, fuzzy_threshold),
    )


def reconcile(
    attendance: list[AttendanceRecord],
    index: PresenceIndex,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> list[Discrepancy]:
    """Cross-check declared attendance against the presence index.

    Multi-stage lookup per attendance record:
    1. Exact composite key, when the record names its match (EXACT)
    2. Any key containing the player name, when it does not (SUBSTRING)
    3. Nothing found → "not registered" (NONE)

    An unresolved attendance flag counts as "not attended".

    Args:
        attendance: Declared attendance records.
        index: Presence index from build_presence_index().
        fuzzy_threshold: Threshold for name suggestions on unregistered players.

    Returns:
        Discrepancies in attendance order.
    """
    known_players = list(dict.fromkeys(p.player for p in index.values()))
    registered = set(known_players)
    discrepancies: list[Discrepancy] = []
    fallback_count = 0

    for record in attendance:
        if not record.player:
            continue

        if record.match_id:
            presence = index.get(presence_key(record.match_id, record.player))
            if presence is not None:
                found = _discrepancy(record, presence, 'EXACT')
                if found:
                    discrepancies.append(found)
            elif record.declared_present or record.player not in registered:
                discrepancies.append(_not_registered(record, known_players, fuzzy_threshold))
            continue

        fallback_count += 1
        matched = False
        for key, presence in index.items():
            if record.player in key:
                matched = True
                found = _discrepancy(record, presence, 'SUBSTRING')
                if found:
                    discrepancies.append(found)
        if not matched:
            discrepancies.append(_not_registered(record, known_players, fuzzy_threshold))

    if fallback_count:
        log.info(
            "%d Anwesenheitszeilen ohne Partie-ID per Teilstring abgeglichen",
            fallback_count,
        )
    log.info("Abgleich abgeschlossen: %d Abweichungen", len(discrepancies))
    return discrepancies
