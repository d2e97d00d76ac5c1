# app/core/errors.py
from __future__ import annotations


class EvaluacionError(Exception):
    """Base de los errores de dominio; los endpoints los traducen a HTTP."""


class UnknownAnswerType(EvaluacionError, ValueError):
    def __init__(self, answer_type):
        self.answer_type = answer_type
        super().__init__(f"Tipo de respuesta desconocido: {answer_type!r}")


class UnknownPeriodError(EvaluacionError):
    def __init__(self, period_id: str):
        self.period_id = period_id
        super().__init__(f"Periodo no encontrado: {period_id}")


class EvaluationClosedError(EvaluacionError):
    def __init__(self, period_id: str):
        self.period_id = period_id
        super().__init__(f"La evaluación no está activa para el periodo {period_id}")


class NotEnrolledError(EvaluacionError):
    pass


class DuplicateResponseError(EvaluacionError):
    pass


class InvalidAnswerError(EvaluacionError):
    pass


class InvalidCatalogError(EvaluacionError):
    pass


class StaleStateError(EvaluacionError):
    """Otra sesión guardó las mismas claves desde nuestro load()."""

    def __init__(self, keys):
        self.keys = sorted(keys)
        super().__init__(f"Estado modificado por otra sesión: {', '.join(self.keys)}")
