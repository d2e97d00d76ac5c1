# app/api/v1/endpoints/admin_periods.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path

from app.api.deps.store import get_store
from app.core.errors import StaleStateError, UnknownPeriodError
from app.schemas.results import AggregationOut, CurrentPeriodIn, EvaluationToggleIn, PeriodStateOut
from app.schemas.state import AppState
from app.services import publication
from app.services.state_store import StateStore

router = APIRouter(tags=["admin/periods"])


def _ensure_period(state: AppState, period_id: str) -> None:
    if not any(p.id == period_id for p in state.periods):
        raise HTTPException(status_code=404, detail="Periodo no encontrado")


def _save(store: StateStore, state: AppState) -> None:
    try:
        store.save(state)
    except StaleStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


def _state_out(state: AppState, period_id: str) -> PeriodStateOut:
    ps = publication.get_period_state(state, period_id)
    return PeriodStateOut(
        period_id=period_id,
        evaluation_open=ps.evaluation_open,
        published=ps.published,
        status=ps.status,
    )


@router.get("/periods/{period_id}/state", response_model=PeriodStateOut)
def get_period_state(
    period_id: str = Path(..., description="ID del periodo, ej. 2024-1"),
    store: StateStore = Depends(get_store),
):
    state = store.load()
    return _state_out(state, period_id)


@router.put("/periods/{period_id}/evaluation", response_model=PeriodStateOut)
def toggle_evaluation(
    payload: EvaluationToggleIn,
    period_id: str = Path(..., description="ID del periodo"),
    store: StateStore = Depends(get_store),
):
    state = store.load()
    # interruptor libre: cualquier id de periodo, esté o no en la programación
    state = publication.set_evaluation_open(state, period_id, payload.open)
    _save(store, state)
    return _state_out(state, period_id)


@router.post("/periods/{period_id}/publish", response_model=AggregationOut)
def publish_period(
    period_id: str = Path(..., description="ID del periodo"),
    store: StateStore = Depends(get_store),
):
    state = store.load()
    _ensure_period(state, period_id)
    state, out = publication.publish(state, period_id)
    _save(store, state)
    return out


@router.put("/current-period")
def set_current_period(payload: CurrentPeriodIn, store: StateStore = Depends(get_store)):
    state = store.load()
    try:
        state = publication.set_current_period(state, payload.period_id)
    except UnknownPeriodError as e:
        raise HTTPException(status_code=404, detail=str(e))
    _save(store, state)
    return {"period_id": state.current_period}
