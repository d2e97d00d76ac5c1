# app/services/submissions.py
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Union

from app.core.errors import (
    DuplicateResponseError, EvaluationClosedError, InvalidAnswerError,
    NotEnrolledError, UnknownPeriodError,
)
from app.schemas.roster import StudentCourseOut, Period
from app.schemas.state import AppState
from app.schemas.survey import AnswerType, AnswerValue, Question, ResponseRecord

logger = logging.getLogger(__name__)

VALID_CODES = range(1, 6)


def answers_from_positional(
    answers: Sequence[AnswerValue], questions: Sequence[Question]
) -> Dict[int, AnswerValue]:
    """
    Lista alineada por posición -> {question_id: código}, con las preguntas vigentes.
    Posiciones sin pregunta se descartan; una lista corta solo cubre sus posiciones.
    """
    return {q.id: a for q, a in zip(questions, answers)}


def _validate_answers(answers: Mapping[int, AnswerValue], questions: Sequence[Question]) -> None:
    by_id = {q.id: q for q in questions}
    for qid, value in answers.items():
        q = by_id.get(qid)
        if q is None:
            raise InvalidAnswerError(f"Pregunta no existe: {qid}")
        if q.tipo_respuesta is AnswerType.OPEN:
            if not isinstance(value, str):
                raise InvalidAnswerError(f"Pregunta {qid}: se espera texto")
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value not in VALID_CODES:
            raise InvalidAnswerError(f"Pregunta {qid}: código inválido {value!r} (1..5)")


def submit_response(
    state: AppState,
    *,
    student_id: str,
    teacher_id: str,
    course_id: str,
    period_id: str,
    answers: Union[Mapping[int, AnswerValue], Sequence[AnswerValue]],
) -> AppState:
    """Agrega una evaluación. Las respuestas nunca se modifican ni se borran."""
    if not state.period_state(period_id).evaluation_open:
        raise EvaluationClosedError(period_id)

    enrolled = any(
        e.student_id == student_id and e.teacher_id == teacher_id
        and e.course_id == course_id and e.period == period_id
        for e in state.student_courses
    )
    if not enrolled:
        raise NotEnrolledError(
            f"El estudiante {student_id} no tiene inscrito {course_id} con {teacher_id} en {period_id}"
        )

    if is_evaluated(state, student_id, teacher_id, course_id, period_id):
        raise DuplicateResponseError("Este docente ya fue evaluado para este curso y periodo")

    if isinstance(answers, Mapping):
        by_id = dict(answers)
    else:
        by_id = answers_from_positional(list(answers), state.questions)
    _validate_answers(by_id, state.questions)

    record = ResponseRecord(
        student_id=student_id,
        teacher_id=teacher_id,
        course_id=course_id,
        period_id=period_id,
        answers=by_id,
    )
    logger.info("Respuesta registrada: docente=%s curso=%s periodo=%s", teacher_id, course_id, period_id)
    return state.model_copy(update={"responses": [*state.responses, record]})


def is_evaluated(state: AppState, student_id: str, teacher_id: str, course_id: str, period_id: str) -> bool:
    return any(
        r.student_id == student_id and r.teacher_id == teacher_id
        and r.course_id == course_id and r.period_id == period_id
        for r in state.responses
    )


def student_periods(state: AppState, student_id: str) -> List[Period]:
    ids = {e.period for e in state.student_courses if e.student_id == student_id}
    return [p for p in state.periods if p.id in ids]


def student_courses_for_period(state: AppState, student_id: str, period_id: str) -> List[StudentCourseOut]:
    if not any(p.id == period_id for p in state.periods):
        raise UnknownPeriodError(period_id)
    courses = {c.id: c for c in state.courses}
    teachers = {t.id: t for t in state.teachers}
    out: List[StudentCourseOut] = []
    for e in state.student_courses:
        if e.student_id != student_id or e.period != period_id:
            continue
        course = courses.get(e.course_id)
        teacher = teachers.get(e.teacher_id)
        out.append(StudentCourseOut(
            course_id=e.course_id,
            teacher_id=e.teacher_id,
            course_name=course.nombre if course else "Unknown Course",
            teacher_name=teacher.nombre if teacher else "Unknown Teacher",
            group=e.group,
            is_evaluated=is_evaluated(state, student_id, e.teacher_id, e.course_id, period_id),
        ))
    return out
