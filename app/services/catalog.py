# app/services/catalog.py
from __future__ import annotations

from typing import List, Sequence

from app.core.config import settings
from app.core.errors import InvalidCatalogError
from app.schemas.state import AppState
from app.schemas.survey import Factor, Question


def _resize_weights(weights: List[float], n: int) -> List[float]:
    if len(weights) >= n:
        return weights[:n]
    return weights + [settings.DEFAULT_QUESTION_WEIGHT] * (n - len(weights))


def replace_questions(state: AppState, questions: Sequence[Question]) -> AppState:
    ids = [q.id for q in questions]
    if len(set(ids)) != len(ids):
        raise InvalidCatalogError("Ids de pregunta duplicados")
    return state.model_copy(update={
        "questions": list(questions),
        "question_weights": _resize_weights(list(state.question_weights), len(questions)),
    })


def replace_weights(state: AppState, weights: Sequence[float]) -> AppState:
    # Los pesos se guardan alineados a las preguntas; el cálculo de resultados no los usa
    if len(weights) != len(state.questions):
        raise InvalidCatalogError(
            f"Se esperaban {len(state.questions)} pesos, llegaron {len(weights)}"
        )
    if any(w <= 0 for w in weights):
        raise InvalidCatalogError("El peso debe ser > 0")
    return state.model_copy(update={"question_weights": [float(w) for w in weights]})


def replace_factores(state: AppState, factores: Sequence[Factor]) -> AppState:
    ids = [f.id for f in factores]
    if len(set(ids)) != len(ids):
        raise InvalidCatalogError("Ids de factor duplicados")
    return state.model_copy(update={"factores": list(factores)})
