# app/api/v1/endpoints/responses.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps.store import get_store
from app.core.errors import (
    DuplicateResponseError, EvaluationClosedError, InvalidAnswerError,
    NotEnrolledError, StaleStateError,
)
from app.schemas.survey import ResponseSubmitIn
from app.services.state_store import StateStore
from app.services.submissions import submit_response

router = APIRouter(prefix="/responses", tags=["responses"])


@router.post("", status_code=201)
def create_response(payload: ResponseSubmitIn, store: StateStore = Depends(get_store)):
    state = store.load()
    try:
        new_state = submit_response(
            state,
            student_id=payload.student_id,
            teacher_id=payload.teacher_id,
            course_id=payload.course_id,
            period_id=payload.period_id,
            answers=payload.answers,
        )
        store.save(new_state)
    except EvaluationClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotEnrolledError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except DuplicateResponseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidAnswerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StaleStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"status": "ok", "responses": len(new_state.responses)}
