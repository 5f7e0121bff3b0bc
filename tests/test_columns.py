"""Tests for teamstats.columns module."""

import math

from teamstats.columns import (
    FIELD_SYNONYMS,
    is_starter,
    normalize_flag,
    normalize_header,
    resolve,
    to_number,
    to_number_or_nan,
)


class TestNormalizeHeader:

    def test_strips_numeric_pipe_prefix(self):
        assert normalize_header('12| Goles a favor') == 'Goles a favor'

    def test_plain_header_trimmed(self):
        assert normalize_header('  Rival ') == 'Rival'

    def test_pipe_inside_name_kept(self):
        assert normalize_header('Goles|Total') == 'Goles|Total'

    def test_none(self):
        assert normalize_header(None) == ''


class TestResolve:
    """Tests for ordered synonym resolution."""

    def test_first_synonym_wins(self):
        row = {'Jugador': 'B', 'Nombre': 'A'}
        assert resolve(row, 'player_name') == 'A'

    def test_empty_value_falls_through(self):
        row = {'Nombre': '', 'Jugador': 'B'}
        assert resolve(row, 'player_name') == 'B'

    def test_default(self):
        assert resolve({}, 'player_name', 'x') == 'x'

    def test_zero_string_is_a_value(self):
        assert resolve({'Goles': '0'}, 'player_goals') == '0'

    def test_every_field_has_synonyms(self):
        assert all(FIELD_SYNONYMS.values())


class TestToNumber:

    def test_integer_string(self):
        assert to_number('3') == 3

    def test_decimal_string(self):
        assert to_number(' 2.5 ') == 2.5

    def test_empty_and_none_are_zero(self):
        assert to_number('') == 0
        assert to_number(None) == 0

    def test_non_numeric_is_zero(self):
        assert to_number('abc') == 0

    def test_nan_variant(self):
        assert math.isnan(to_number_or_nan(''))
        assert math.isnan(to_number_or_nan('nan'))
        assert to_number_or_nan('0') == 0


class TestFlags:

    def test_affirmative_spellings(self):
        for token in ('SI', 'si', 'S', 'Sí', 'SÍ'):
            assert normalize_flag(token) == 'SI'

    def test_negative_spellings(self):
        for token in ('NO', 'no', 'N', ' n '):
            assert normalize_flag(token) == 'NO'

    def test_other_values(self):
        assert normalize_flag('Titular') is None
        assert normalize_flag(None) is None


class TestIsStarter:

    def test_starter_values(self):
        assert is_starter('Titular')
        assert is_starter('true')

    def test_non_starter_values(self):
        assert not is_starter('Suplente')
        assert not is_starter('')
        assert not is_starter(None)
