# app/api/v1/endpoints/catalogs.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends

from app.api.deps.store import get_store
from app.schemas.roster import Course, Period, Teacher
from app.schemas.survey import Factor, Question
from app.services.state_store import StateStore

router = APIRouter(prefix="/catalogs", tags=["catalogs"])


@router.get("/periods", response_model=List[Period])
def list_periods(store: StateStore = Depends(get_store)):
    return store.load().periods


@router.get("/current-period")
def current_period(store: StateStore = Depends(get_store)):
    return {"period_id": store.load().current_period}


@router.get("/factores", response_model=List[Factor])
def list_factores(store: StateStore = Depends(get_store)):
    return store.load().factores


@router.get("/questions", response_model=List[Question], response_model_by_alias=False)
def list_questions(store: StateStore = Depends(get_store)):
    return store.load().questions


@router.get("/question-weights", response_model=List[float])
def list_question_weights(store: StateStore = Depends(get_store)):
    return store.load().question_weights


@router.get("/teachers", response_model=List[Teacher])
def list_teachers(store: StateStore = Depends(get_store)):
    return store.load().teachers


@router.get("/courses", response_model=List[Course])
def list_courses(store: StateStore = Depends(get_store)):
    return store.load().courses
