# app/schemas/state.py
from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from app.schemas.roster import Course, Enrollment, Period, RosterSets, Student, Teacher
from app.schemas.results import PeriodState, TeacherPeriodResult
from app.schemas.survey import AnswerType, Factor, Question, ResponseRecord

# Claves persistidas (una fila por clave en app_state)
STATE_KEYS = (
    "encuestaActiva",
    "resultsPublished",
    "results",
    "questions",
    "questionWeights",
    "factores",
    "students",
    "teachers",
    "courses",
    "studentCourses",
    "periods",
    "currentPeriod",
    "responses",
)


class AppState(BaseModel):
    """Todo el estado compartido; las funciones del núcleo reciben y devuelven este valor."""

    encuesta_activa: Dict[str, bool] = Field(default_factory=dict, alias="encuestaActiva")
    results_published: Dict[str, bool] = Field(default_factory=dict, alias="resultsPublished")
    results: Dict[str, Dict[str, TeacherPeriodResult]] = Field(default_factory=dict)
    questions: List[Question] = Field(default_factory=list)
    question_weights: List[float] = Field(default_factory=list, alias="questionWeights")
    factores: List[Factor] = Field(default_factory=list)
    students: List[Student] = Field(default_factory=list)
    teachers: List[Teacher] = Field(default_factory=list)
    courses: List[Course] = Field(default_factory=list)
    student_courses: List[Enrollment] = Field(default_factory=list, alias="studentCourses")
    periods: List[Period] = Field(default_factory=list)
    current_period: Optional[str] = Field(None, alias="currentPeriod")
    responses: List[ResponseRecord] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    # -------- roster --------
    @property
    def roster(self) -> RosterSets:
        return RosterSets(
            students=self.students,
            teachers=self.teachers,
            courses=self.courses,
            periods=self.periods,
            enrollments=self.student_courses,
        )

    def with_roster(self, roster: RosterSets) -> "AppState":
        return self.model_copy(update={
            "students": roster.students,
            "teachers": roster.teachers,
            "courses": roster.courses,
            "periods": roster.periods,
            "student_courses": roster.enrollments,
        })

    # -------- periodo --------
    def period_state(self, period_id: str) -> PeriodState:
        return PeriodState(
            evaluation_open=self.encuesta_activa.get(period_id) is True,
            published=self.results_published.get(period_id) is True,
        )

    def to_persisted(self) -> Dict[str, object]:
        """Dict JSON-serializable con las claves originales."""
        return self.model_dump(mode="json", by_alias=True)


# Catálogo inicial de la encuesta
DEFAULT_FACTORES = [
    Factor(id=1, nombre="Factor 1"),
    Factor(id=2, nombre="Factor 2"),
    Factor(id=3, nombre="Factor 3"),
]

_B, _F, _FNA, _V, _A = (
    AnswerType.BINARY, AnswerType.FREQUENCY, AnswerType.FREQUENCY_OR_NA,
    AnswerType.RATING, AnswerType.OPEN,
)

_DEFAULT_QUESTIONS = [
    (1, "¿Inscribiría con gusto otra actividad académica con este docente?", 1, _B),
    (2, "¿El docente promovió en usted la argumentación o la reflexión crítica?", 1, _B),
    (3, "¿El docente promovió la adquisición de diferentes herramientas para su aprendizaje autónomo?", 1, _B),
    (4, "¿Con este docente aprendió con suficiencia y a profundidad lo tratado en las actividades académicas?", 1, _B),
    (5, "¿El docente preparó adecuadamente cada sesión o actividad?", 2, _F),
    (6, "¿El docente se esforzó por que usted aprendiera?", 2, _F),
    (7, "¿El docente inspiró o motivó su interés por los temas tratados?", 2, _B),
    (8, "¿El docente propició que usted encontrara conexiones de los temas tratados con otros contextos o con otros contenidos de su plan de estudios?", 2, _B),
    (9, "¿El docente mostró agrado y entusiasmo por su labor de enseñanza?", 3, _F),
    (10, "¿El docente respetó las reglas y fechas acordadas para las actividades académicas incluidas las evaluaciones?", 3, _F),
    (11, "¿El docente dedicó tiempo suficiente o adecuado para asesorar, orientar y aclarar dudas?", 3, _FNA),
    (12, "¿El docente fue respetuoso con usted y tolerante con sus puntos de vista?", 3, _F),
    (13, "¿El docente fue justo e imparcial durante las actividades académicas?", 3, _F),
    (14, "¿El docente adecuó o modificó sus métodos de enseñanza según las necesidades de los estudiantes?", 3, _F),
    (15, "¿Las evaluaciones hechas por el docente lo condujeron a mejorar su aprendizaje?", 3, _F),
    (16, "¿Los resultados de las evaluaciones fueron un reflejo adecuado de su aprendizaje?", 3, _B),
    (17, "El desempeño global de este docente fue:", 1, _V),
    (18, "¿Qué aspectos positivos destacaría del desempeño del docente?", 3, _A),
]

DEFAULT_QUESTIONS = [
    Question(id=qid, texto=texto, factor=factor, tipo_respuesta=tipo)
    for qid, texto, factor, tipo in _DEFAULT_QUESTIONS
]


def default_state(weight: float = 10) -> AppState:
    return AppState(
        questions=list(DEFAULT_QUESTIONS),
        question_weights=[weight] * len(DEFAULT_QUESTIONS),
        factores=list(DEFAULT_FACTORES),
    )
