"""Shared test fixtures."""

from pathlib import Path

import pytest

from teamstats.reader import load_all, resolve_sources


SAMPLE_TABLES = {
    'partidos.csv': (
        'ID,Fecha,Rival,Goles a favor,Goles en contra\n'
        '1,2024-09-14,CE Alpha,2,1\n'
        '2,2024-09-21,UD Beta,1,3\n'
        ',,,,\n'
    ),
    'jugadores.csv': (
        '1| Nombre,2| Posición,3| Partidos jugados,4| Goles,5| Asistencias\n'
        ' Ana ,Delantera,2,3,1\n'
        'Berta,Defensa,2,0,0\n'
        'Carla,Portera,1,,0\n'
        ',,,,\n'
    ),
    'presencias.csv': (
        'Partido ID,Jugador,Minutos jugados,Titular\n'
        '1,Ana,90,Titular\n'
        '1,Berta,0,Suplente\n'
        '2,Ana,45,\n'
        '2,Berta,30,Suplente\n'
    ),
    'goles.csv': (
        'Partido ID,Autor\n'
        '1,Ana\n'
        '1,Ana\n'
        '2,Ana\n'
        '2,Berta\n'
        '2,Dana\n'
    ),
    'asistencias.csv': (
        'Partido ID,Asistente\n'
        '1,Berta\n'
        '2,Carla\n'
    ),
    'asistencia_partidos.csv': (
        'Jugador,Partido 1\n'
        'Ana,SI\n'
        'Berta,Sí\n'
        'Elena,NO\n'
    ),
}


@pytest.fixture(scope='session')
def data_dir(tmp_path_factory) -> Path:
    """Directory holding a small but complete set of source tables."""
    directory = tmp_path_factory.mktemp('data')
    for name, content in SAMPLE_TABLES.items():
        (directory / name).write_text(content, encoding='utf-8')
    return directory


@pytest.fixture(scope='session')
def sources(data_dir) -> dict[str, str]:
    """Locators of the sample tables."""
    return resolve_sources(data_dir)


@pytest.fixture(scope='session')
def raw_tables(sources):
    """All sample tables, loaded."""
    return load_all(sources)
