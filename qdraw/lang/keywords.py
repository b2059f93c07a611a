"""
Keyword, command and sensor tables for the Qdraw language.

The tables map surface words to token types and AST enums. They are built
once at import time and exposed as read-only mappings.
"""

from __future__ import annotations

import difflib
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from qdraw.ast import CommandKind, Sensor

COMMAND_WORDS: Mapping[str, CommandKind] = MappingProxyType({
    "MoverArriba": CommandKind.MOVE_UP,
    "MoverAbajo": CommandKind.MOVE_DOWN,
    "MoverDerecha": CommandKind.MOVE_RIGHT,
    "MoverIzquierda": CommandKind.MOVE_LEFT,
    "PintarNegro": CommandKind.PAINT_BLACK,
    "PintarRojo": CommandKind.PAINT_RED,
    "PintarVerde": CommandKind.PAINT_GREEN,
    "Limpiar": CommandKind.CLEAR,
})

SENSOR_WORDS: Mapping[str, Sensor] = MappingProxyType({
    "estaVacia?": Sensor.IS_EMPTY,
    "estaPintadaDeNegro?": Sensor.IS_PAINTED_BLACK,
    "estaPintadaDeRojo?": Sensor.IS_PAINTED_RED,
    "estaPintadaDeVerde?": Sensor.IS_PAINTED_GREEN,
})

STRUCTURE_WORDS = (
    "programa",
    "procedimiento",
    "si",
    "sino",
    "repetir",
    "veces",
)

ALL_WORDS = STRUCTURE_WORDS + tuple(COMMAND_WORDS) + tuple(SENSOR_WORDS)


def suggest_word(unknown: str, candidates: Optional[Iterable[str]] = None, cutoff: float = 0.75) -> Optional[str]:
    """
    Suggest the closest known word for a misspelled one.

    Examples:
        >>> suggest_word('Moverarriba')
        'MoverArriba'
        >>> suggest_word('estaVacia')
        'estaVacia?'
        >>> suggest_word('xyz123') is None
        True
    """
    pool = list(candidates) if candidates is not None else list(ALL_WORDS)
    matches = difflib.get_close_matches(unknown, pool, n=1, cutoff=cutoff)
    if matches and matches[0] != unknown:
        return matches[0]
    return None


__all__ = [
    "COMMAND_WORDS",
    "SENSOR_WORDS",
    "STRUCTURE_WORDS",
    "ALL_WORDS",
    "suggest_word",
]
