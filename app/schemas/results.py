# app/schemas/results.py
from __future__ import annotations
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

SkipReason = Literal[
    "no_enrollment",
    "unknown_teacher",
    "unknown_question",
    "unknown_factor",
    "unknown_answer_type",
]


class FactorResult(BaseModel):
    factor_id: int
    nombre: str
    total_points: int = 0
    max_points: int = 0
    average: float = 0


class TeacherPeriodResult(BaseModel):
    teacher_id: str
    nombre: str
    factores: Dict[int, FactorResult] = Field(default_factory=dict)
    total_points: int = 0
    max_points: int = 0
    overall_average: str = "0.00"
    n_responses: int = 0
    period: str


class SkippedRecord(BaseModel):
    reason: SkipReason
    student_id: Optional[str] = None
    teacher_id: Optional[str] = None
    course_id: Optional[str] = None
    question_id: Optional[int] = None
    detail: Optional[str] = None


class AggregationOut(BaseModel):
    period: str
    results: Dict[str, TeacherPeriodResult] = Field(default_factory=dict)
    skipped: List[SkippedRecord] = Field(default_factory=list)


# ---------- Estado por periodo ----------

class PeriodState(BaseModel):
    evaluation_open: bool = False
    published: bool = False

    @property
    def status(self) -> Literal["draft", "published"]:
        return "published" if self.published else "draft"


class PeriodStateOut(BaseModel):
    period_id: str
    evaluation_open: bool
    published: bool
    status: Literal["draft", "published"]


class EvaluationToggleIn(BaseModel):
    open: bool


class CurrentPeriodIn(BaseModel):
    period_id: str
