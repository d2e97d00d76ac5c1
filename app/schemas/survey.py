# app/schemas/survey.py
from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Union
from pydantic import BaseModel, Field


class AnswerType(str, Enum):
    BINARY = "binaria"              # Sí / No / No sé
    FREQUENCY = "frecuencia"        # Nunca / A veces / Frecuentemente / Siempre
    FREQUENCY_OR_NA = "frecuencia_na"
    RATING = "valoracion"           # Muy bajo / Bajo / Alto / Muy alto
    OPEN = "abierta"                # texto libre, no puntúa


class Factor(BaseModel):
    id: int
    nombre: str


class Question(BaseModel):
    id: int
    texto: str
    factor: int
    tipo_respuesta: AnswerType = Field(..., alias="tipoRespuesta")

    model_config = {"populate_by_name": True}


AnswerValue = Union[int, str]


class ResponseRecord(BaseModel):
    """Una evaluación enviada. Las respuestas van por id de pregunta, no por posición."""
    student_id: str = Field(..., alias="studentId")
    teacher_id: str = Field(..., alias="teacherId")
    course_id: str = Field(..., alias="courseId")
    period_id: str = Field(..., alias="periodId")
    answers: Dict[int, AnswerValue] = Field(default_factory=dict)
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="submittedAt"
    )

    model_config = {"populate_by_name": True}


# ---------- Entradas de la API ----------

class ResponseSubmitIn(BaseModel):
    student_id: str
    teacher_id: str
    course_id: str
    period_id: str
    # Mapa {question_id: código} o, por compatibilidad, lista alineada por posición
    answers: Union[Dict[int, AnswerValue], List[AnswerValue]]


class QuestionsIn(BaseModel):
    questions: List[Question] = Field(..., min_length=1)


class QuestionWeightsIn(BaseModel):
    weights: List[float]


class FactoresIn(BaseModel):
    factores: List[Factor] = Field(..., min_length=1)
