# app/services/rubric.py
from __future__ import annotations
from typing import Dict, Tuple

from app.core.errors import UnknownAnswerType
from app.schemas.survey import AnswerType

MAX_POINTS = 4

# Tabla fija código -> puntos; no es lineal (p. ej. VALORACION 1 y 3 valen 0)
_FREQUENCY = {5: 4, 3: 3, 2: 1}  # Siempre=4, Frecuentemente=3, A veces=1, Nunca/NA=0
POINTS_TABLE: Dict[AnswerType, Dict[int, int]] = {
    AnswerType.BINARY: {5: 4, 1: 2},      # Sí=4, No=2, No sé=0
    AnswerType.FREQUENCY: _FREQUENCY,
    AnswerType.FREQUENCY_OR_NA: _FREQUENCY,
    AnswerType.RATING: {5: 4, 4: 3, 2: 1},  # Muy alto=4, Alto=3, Bajo=1, Muy bajo=0
}


def _as_answer_type(answer_type) -> AnswerType:
    if isinstance(answer_type, AnswerType):
        return answer_type
    try:
        return AnswerType(answer_type)
    except ValueError:
        raise UnknownAnswerType(answer_type) from None


def score(answer_type, raw_code) -> Tuple[int, int]:
    """
    Convierte un código de respuesta en (puntos, puntos_maximos).
    - ABIERTA devuelve (0, 0): no suma al total ni al máximo.
    - Códigos fuera de la tabla valen 0 puntos sobre 4.
    - Un tipo fuera del enum lanza UnknownAnswerType.
    """
    kind = _as_answer_type(answer_type)
    if kind is AnswerType.OPEN:
        return 0, 0
    return POINTS_TABLE[kind].get(raw_code, 0), MAX_POINTS
