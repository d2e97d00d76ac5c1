# app/api/v1/endpoints/admin_surveys.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps.store import get_store
from app.core.errors import InvalidCatalogError, StaleStateError
from app.schemas.survey import Factor, FactoresIn, Question, QuestionsIn, QuestionWeightsIn
from app.services import catalog
from app.services.state_store import StateStore

router = APIRouter(tags=["admin"])


def _apply(store: StateStore, fn, value):
    state = store.load()
    try:
        state = fn(state, value)
        store.save(state)
    except InvalidCatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StaleStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return state


# --------------------------
# PUT /admin/questions
# --------------------------
@router.put("/questions", response_model=List[Question], response_model_by_alias=False)
def admin_replace_questions(payload: QuestionsIn, store: StateStore = Depends(get_store)):
    return _apply(store, catalog.replace_questions, payload.questions).questions


# --------------------------
# PUT /admin/question-weights
# --------------------------
@router.put("/question-weights", response_model=List[float])
def admin_replace_weights(payload: QuestionWeightsIn, store: StateStore = Depends(get_store)):
    return _apply(store, catalog.replace_weights, payload.weights).question_weights


# --------------------------
# PUT /admin/factores
# --------------------------
@router.put("/factores", response_model=List[Factor])
def admin_replace_factores(payload: FactoresIn, store: StateStore = Depends(get_store)):
    return _apply(store, catalog.replace_factores, payload.factores).factores
