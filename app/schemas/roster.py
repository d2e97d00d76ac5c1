# app/schemas/roster.py
from __future__ import annotations
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field

EnrollmentKey = Tuple[str, str, str, str]


class Student(BaseModel):
    id: str
    nombre: str
    email: str


class Teacher(BaseModel):
    id: str
    nombre: str
    email: str


class Course(BaseModel):
    id: str
    nombre: str
    grupo: str = "1"


class Period(BaseModel):
    id: str
    nombre: str


class Enrollment(BaseModel):
    """Inscripción estudiante-curso-docente en un periodo."""
    student_id: str = Field(..., alias="studentId")
    course_id: str = Field(..., alias="courseId")
    teacher_id: str = Field(..., alias="teacherId")
    group: str = "1"
    period: str

    model_config = {"populate_by_name": True}

    @property
    def key(self) -> EnrollmentKey:
        return (self.student_id, self.course_id, self.teacher_id, self.period)


class RosterSets(BaseModel):
    students: List[Student] = Field(default_factory=list)
    teachers: List[Teacher] = Field(default_factory=list)
    courses: List[Course] = Field(default_factory=list)
    periods: List[Period] = Field(default_factory=list)
    enrollments: List[Enrollment] = Field(default_factory=list)


# ---------- Importación ----------

class SkippedRow(BaseModel):
    row: int = Field(..., description="Número de fila (1-based, sin contar encabezado)")
    message: str


class ImportStats(BaseModel):
    students_count: int = Field(0, alias="studentsCount")
    teachers_count: int = Field(0, alias="teachersCount")
    courses_count: int = Field(0, alias="coursesCount")
    periods_count: int = Field(0, alias="periodsCount")
    relations_count: int = Field(0, alias="relationsCount")
    skipped_rows: List[SkippedRow] = Field(default_factory=list, alias="skippedRows")

    model_config = {"populate_by_name": True}

    @property
    def total_added(self) -> int:
        return (
            self.students_count + self.teachers_count + self.courses_count
            + self.periods_count + self.relations_count
        )


class RosterImportOut(BaseModel):
    dry_run: bool
    stats: ImportStats
    current_period: Optional[str] = None


# ---------- Vista del estudiante ----------

class StudentCourseOut(BaseModel):
    course_id: str
    teacher_id: str
    course_name: str
    teacher_name: str
    group: str
    is_evaluated: bool
