# app/services/aggregation.py
from __future__ import annotations

import logging
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

from app.core.errors import UnknownAnswerType
from app.schemas.results import AggregationOut, FactorResult, SkippedRecord, TeacherPeriodResult
from app.schemas.roster import Enrollment, Teacher
from app.schemas.survey import AnswerType, Factor, Question, ResponseRecord
from app.services import rubric

logger = logging.getLogger(__name__)

SCALE = 5
_CENTS = Decimal("0.01")


def _to_scale(total: int, maximum: int) -> Decimal:
    """Escala 0-5 a dos decimales; los empates (x.xx5) redondean hacia arriba."""
    return Decimal((total / maximum) * SCALE).quantize(_CENTS, rounding=ROUND_HALF_UP)


def filter_period_responses(
    period_id: str,
    responses: Iterable[ResponseRecord],
    enrollments: Iterable[Enrollment],
    skipped: List[SkippedRecord],
) -> List[ResponseRecord]:
    """
    Respuestas cuyo (estudiante, docente, curso) tiene una inscripción en ``period_id``.
    Si el trío está inscrito en varios periodos (repitió el curso) y el periodId
    de la respuesta es uno de ellos, la respuesta cuenta solo para ese periodo;
    si no, cuenta para el primer periodo inscrito. Una respuesta nunca cuenta
    en dos periodos.
    """
    # periodos en orden de inscripción
    by_triplet: Dict[Tuple[str, str, str], List[str]] = defaultdict(list)
    for e in enrollments:
        periods = by_triplet[(e.student_id, e.teacher_id, e.course_id)]
        if e.period not in periods:
            periods.append(e.period)

    kept: List[ResponseRecord] = []
    for r in responses:
        periods = by_triplet.get((r.student_id, r.teacher_id, r.course_id))
        if not periods:
            skipped.append(SkippedRecord(
                reason="no_enrollment",
                student_id=r.student_id, teacher_id=r.teacher_id, course_id=r.course_id,
            ))
            continue
        # manda el periodo de la respuesta si está inscrito; si no, la primera inscripción
        resolved = r.period_id if r.period_id in periods else periods[0]
        if resolved == period_id:
            kept.append(r)
    return kept


def _seed_factores(factores: Sequence[Factor]) -> Dict[int, FactorResult]:
    return {f.id: FactorResult(factor_id=f.id, nombre=f.nombre) for f in factores}


def score_teacher(
    teacher: Teacher,
    period_id: str,
    responses: Sequence[ResponseRecord],
    questions_by_id: Dict[int, Question],
    factores: Sequence[Factor],
    skipped: List[SkippedRecord],
) -> TeacherPeriodResult:
    slots = _seed_factores(factores)

    for response in responses:
        for question_id, answer in response.answers.items():
            question = questions_by_id.get(question_id)
            if question is None:
                skipped.append(SkippedRecord(
                    reason="unknown_question", student_id=response.student_id,
                    teacher_id=teacher.id, course_id=response.course_id,
                    question_id=question_id,
                ))
                continue
            if question.tipo_respuesta is AnswerType.OPEN:
                continue
            slot = slots.get(question.factor)
            if slot is None:
                skipped.append(SkippedRecord(
                    reason="unknown_factor", teacher_id=teacher.id,
                    question_id=question_id, detail=f"factor={question.factor}",
                ))
                continue
            try:
                points, max_points = rubric.score(question.tipo_respuesta, answer)
            except UnknownAnswerType as e:
                logger.warning("Pregunta %s: %s; se cuenta como 0", question_id, e)
                skipped.append(SkippedRecord(
                    reason="unknown_answer_type", teacher_id=teacher.id,
                    question_id=question_id, detail=str(e.answer_type),
                ))
                continue
            slot.total_points += points
            slot.max_points += max_points

    total_general = 0
    max_general = 0
    for slot in slots.values():
        if slot.max_points > 0:
            slot.average = float(_to_scale(slot.total_points, slot.max_points))
            total_general += slot.total_points
            max_general += slot.max_points

    overall = str(_to_scale(total_general, max_general)) if max_general > 0 else "0.00"
    return TeacherPeriodResult(
        teacher_id=teacher.id,
        nombre=teacher.nombre,
        factores=slots,
        total_points=total_general,
        max_points=max_general,
        overall_average=overall,
        n_responses=len(responses),
        period=period_id,
    )


def aggregate_period(
    period_id: str,
    responses: Iterable[ResponseRecord],
    enrollments: Iterable[Enrollment],
    teachers: Iterable[Teacher],
    questions: Sequence[Question],
    factores: Sequence[Factor],
) -> AggregationOut:
    """
    Calcula el resultado por docente y factor para un periodo.

    Solo aparecen docentes con al menos una respuesta del periodo y que existan
    en el conjunto de docentes. Lo que se excluye queda en ``skipped``; nada
    de la entrada se modifica.
    """
    skipped: List[SkippedRecord] = []
    period_responses = filter_period_responses(period_id, responses, enrollments, skipped)

    grouped: Dict[str, List[ResponseRecord]] = defaultdict(list)
    for r in period_responses:
        grouped[r.teacher_id].append(r)

    teachers_by_id = {t.id: t for t in teachers}
    questions_by_id = {q.id: q for q in questions}

    results: Dict[str, TeacherPeriodResult] = {}
    for teacher_id, teacher_responses in grouped.items():
        teacher = teachers_by_id.get(teacher_id)
        if teacher is None:
            skipped.append(SkippedRecord(
                reason="unknown_teacher", teacher_id=teacher_id,
                detail=f"{len(teacher_responses)} respuestas",
            ))
            continue
        results[teacher_id] = score_teacher(
            teacher, period_id, teacher_responses, questions_by_id, factores, skipped,
        )

    if skipped:
        logger.debug("Periodo %s: %d registros excluidos", period_id, len(skipped))
    return AggregationOut(period=period_id, results=results, skipped=skipped)
