# app/services/roster.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from app.core.config import settings
from app.schemas.roster import (
    Course, Enrollment, EnrollmentKey, ImportStats, Period, RosterSets,
    SkippedRow, Student, Teacher,
)

logger = logging.getLogger(__name__)

# Columnas de la programación académica (export de la universidad)
COL_STUDENT_ID = "DOCUMENTO"
COL_STUDENT_NAME = "NOMBRE_ESTUDIANTE"
COL_STUDENT_EMAIL = "EMAIL"
COL_TEACHER_ID = "DOC_DOCENTE_PPAL"
COL_TEACHER_NAME = "NOMBRE_DOCENTE_PRINCIPAL"
COL_TEACHER_EMAIL = "EMAIL_DOCENTE_PRINCIPAL"
COL_COURSE_ID = "ID_ASIGNATURA"
COL_COURSE_NAME = "ASIGNATURA"
COL_GROUP = "ID_GRUPO_ACTIVIDAD"
COL_PERIOD = "PERIODO"

ROSTER_COLUMNS = (
    COL_STUDENT_ID, COL_STUDENT_NAME, COL_STUDENT_EMAIL,
    COL_TEACHER_ID, COL_TEACHER_NAME, COL_TEACHER_EMAIL,
    COL_COURSE_ID, COL_COURSE_NAME, COL_GROUP, COL_PERIOD,
)


def _norm(value: Any) -> Optional[str]:
    """Celda -> str sin espacios; None/vacío -> None. Excel entrega números como float."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    s = str(value).strip()
    return s or None


def _placeholder_email(ident: str) -> str:
    return f"{ident}@{settings.PLACEHOLDER_EMAIL_DOMAIN}"


def reconcile(
    rows: Iterable[Mapping[str, Any]],
    current: RosterSets,
) -> Tuple[RosterSets, ImportStats]:
    """
    Fusiona un lote de filas de programación académica con los conjuntos canónicos.

    Cada fila aporta lo que se pueda extraer: un estudiante, docente, curso o
    periodo nuevo aunque no alcance para una inscripción. Nunca lanza por una
    fila mal formada; las filas que no aportan nada quedan en ``skipped_rows``.
    ``current`` no se modifica: se devuelve un RosterSets nuevo.
    """
    student_ids: Set[str] = {s.id for s in current.students}
    teacher_ids: Set[str] = {t.id for t in current.teachers}
    course_ids: Set[str] = {c.id for c in current.courses}
    period_ids: Set[str] = {p.id for p in current.periods}
    enrollment_keys: Set[EnrollmentKey] = {e.key for e in current.enrollments}

    new_students: List[Student] = []
    new_teachers: List[Teacher] = []
    new_courses: List[Course] = []
    new_periods: List[Period] = []
    new_enrollments: List[Enrollment] = []
    skipped: List[SkippedRow] = []

    for idx, row in enumerate(rows, start=1):
        if not isinstance(row, Mapping):
            skipped.append(SkippedRow(row=idx, message="fila no es un registro"))
            continue
        added_before = (
            len(new_students) + len(new_teachers) + len(new_courses)
            + len(new_periods) + len(new_enrollments)
        )

        # 1) Estudiante
        student_id = _norm(row.get(COL_STUDENT_ID))
        student_name = _norm(row.get(COL_STUDENT_NAME))
        if student_id and student_name and student_id not in student_ids:
            new_students.append(Student(
                id=student_id,
                nombre=student_name,
                email=_norm(row.get(COL_STUDENT_EMAIL)) or _placeholder_email(student_id),
            ))
            student_ids.add(student_id)

        # 2) Docente principal
        teacher_id = _norm(row.get(COL_TEACHER_ID))
        teacher_name = _norm(row.get(COL_TEACHER_NAME))
        if teacher_id and teacher_name and teacher_id not in teacher_ids:
            new_teachers.append(Teacher(
                id=teacher_id,
                nombre=teacher_name,
                email=_norm(row.get(COL_TEACHER_EMAIL)) or _placeholder_email(teacher_id),
            ))
            teacher_ids.add(teacher_id)

        # 3) Curso (grupo por defecto "1")
        course_id = _norm(row.get(COL_COURSE_ID))
        course_name = _norm(row.get(COL_COURSE_NAME))
        group = _norm(row.get(COL_GROUP)) or settings.DEFAULT_GROUP
        if course_id and course_name and course_id not in course_ids:
            new_courses.append(Course(id=course_id, nombre=course_name, grupo=group))
            course_ids.add(course_id)

        # 4) Periodo
        period_id = _norm(row.get(COL_PERIOD))
        if period_id and period_id not in period_ids:
            new_periods.append(Period(id=period_id, nombre=period_id))
            period_ids.add(period_id)

        # 5) Inscripción: requiere las cuatro llaves
        if student_id and course_id and teacher_id and period_id:
            key = (student_id, course_id, teacher_id, period_id)
            if key not in enrollment_keys:
                new_enrollments.append(Enrollment(
                    student_id=student_id,
                    course_id=course_id,
                    teacher_id=teacher_id,
                    group=group,
                    period=period_id,
                ))
                enrollment_keys.add(key)

        added_after = (
            len(new_students) + len(new_teachers) + len(new_courses)
            + len(new_periods) + len(new_enrollments)
        )
        if added_after == added_before and not _has_any_key(row):
            skipped.append(SkippedRow(row=idx, message="fila sin campos reconocibles"))

    updated = RosterSets(
        students=[*current.students, *new_students],
        teachers=[*current.teachers, *new_teachers],
        courses=[*current.courses, *new_courses],
        periods=[*current.periods, *new_periods],
        enrollments=[*current.enrollments, *new_enrollments],
    )
    stats = ImportStats(
        students_count=len(new_students),
        teachers_count=len(new_teachers),
        courses_count=len(new_courses),
        periods_count=len(new_periods),
        relations_count=len(new_enrollments),
        skipped_rows=skipped,
    )
    logger.info(
        "Roster import: +%d estudiantes, +%d docentes, +%d cursos, +%d periodos, +%d inscripciones (%d filas vacías)",
        stats.students_count, stats.teachers_count, stats.courses_count,
        stats.periods_count, stats.relations_count, len(skipped),
    )
    return updated, stats


def _has_any_key(row: Mapping[str, Any]) -> bool:
    return any(_norm(row.get(col)) for col in ROSTER_COLUMNS)


def normalize_headers(row: Dict[str, Any]) -> Dict[str, Any]:
    """Encabezados de Excel/CSV -> claves canónicas (mayúsculas, sin espacios)."""
    out: Dict[str, Any] = {}
    for k, v in row.items():
        if k is None:
            continue
        out[str(k).strip().upper().replace(" ", "_")] = v
    return out
