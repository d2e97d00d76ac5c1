# app/api/v1/endpoints/results.py
from __future__ import annotations
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Path

from app.api.deps.store import get_store
from app.schemas.results import TeacherPeriodResult
from app.services.publication import is_published
from app.services.state_store import StateStore

router = APIRouter(prefix="/results", tags=["results"])


@router.get("/{period_id}", response_model=Dict[str, TeacherPeriodResult])
def period_results(
    period_id: str = Path(..., description="ID del periodo"),
    store: StateStore = Depends(get_store),
):
    state = store.load()
    if not is_published(state, period_id):
        raise HTTPException(status_code=404, detail="Resultados no publicados para este periodo")
    return state.results.get(period_id, {})


@router.get("/{period_id}/teachers/{teacher_id}", response_model=TeacherPeriodResult)
def teacher_result(
    period_id: str = Path(..., description="ID del periodo"),
    teacher_id: str = Path(..., description="Documento del docente"),
    store: StateStore = Depends(get_store),
):
    state = store.load()
    if not is_published(state, period_id):
        raise HTTPException(status_code=404, detail="Resultados no publicados para este periodo")
    result = state.results.get(period_id, {}).get(teacher_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Docente sin resultados en este periodo")
    return result
