# app/api/v1/endpoints/students.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from app.api.deps.store import get_store
from app.core.errors import UnknownPeriodError
from app.schemas.roster import Period, StudentCourseOut
from app.services.state_store import StateStore
from app.services.submissions import student_courses_for_period, student_periods

router = APIRouter(prefix="/students", tags=["students"])


@router.get("/{student_id}/periods", response_model=List[Period])
def get_student_periods(
    student_id: str = Path(..., description="Documento del estudiante"),
    store: StateStore = Depends(get_store),
):
    return student_periods(store.load(), student_id)


@router.get("/{student_id}/courses", response_model=List[StudentCourseOut])
def get_student_courses(
    student_id: str = Path(..., description="Documento del estudiante"),
    period_id: str | None = Query(None, description="Periodo; por defecto el actual"),
    store: StateStore = Depends(get_store),
):
    state = store.load()
    period_id = period_id or state.current_period
    if not period_id:
        raise HTTPException(status_code=400, detail="No hay periodo seleccionado")
    try:
        return student_courses_for_period(state, student_id, period_id)
    except UnknownPeriodError as e:
        raise HTTPException(status_code=404, detail=str(e))
