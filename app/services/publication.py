# app/services/publication.py
from __future__ import annotations

import logging
from typing import Tuple

from app.core.errors import UnknownPeriodError
from app.schemas.results import AggregationOut, PeriodState
from app.schemas.state import AppState
from app.services.aggregation import aggregate_period

logger = logging.getLogger(__name__)


def set_evaluation_open(state: AppState, period_id: str, is_open: bool) -> AppState:
    """Activa/desactiva la encuesta del periodo. Sin precondiciones."""
    return state.model_copy(update={
        "encuesta_activa": {**state.encuesta_activa, period_id: bool(is_open)},
    })


def is_evaluation_open(state: AppState, period_id: str) -> bool:
    return state.encuesta_activa.get(period_id) is True


def is_published(state: AppState, period_id: str) -> bool:
    return state.results_published.get(period_id) is True


def get_period_state(state: AppState, period_id: str) -> PeriodState:
    return state.period_state(period_id)


def publish(state: AppState, period_id: str) -> Tuple[AppState, AggregationOut]:
    """
    Recalcula y congela el snapshot del periodo, y lo marca publicado.
    Republicar sobrescribe el snapshot anterior; no hay despublicar.
    """
    out = aggregate_period(
        period_id,
        responses=state.responses,
        enrollments=state.student_courses,
        teachers=state.teachers,
        questions=state.questions,
        factores=state.factores,
    )
    new_state = state.model_copy(update={
        "results": {**state.results, period_id: out.results},
        "results_published": {**state.results_published, period_id: True},
    })
    logger.info(
        "Periodo %s publicado: %d docentes, %d registros excluidos",
        period_id, len(out.results), len(out.skipped),
    )
    return new_state, out


def set_current_period(state: AppState, period_id: str) -> AppState:
    if not any(p.id == period_id for p in state.periods):
        raise UnknownPeriodError(period_id)
    return state.model_copy(update={"current_period": period_id})
