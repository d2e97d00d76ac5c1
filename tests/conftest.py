import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.schemas.roster import Course, Enrollment, Period, Student, Teacher
from app.schemas.state import AppState
from app.schemas.survey import AnswerType, Factor, Question

# In-memory SQLite para aislar cada test
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def session():
    """
    Sesión de BD nueva por test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(session):
    """
    TestClient con get_db apuntando a la sesión del test.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def small_state() -> AppState:
    """Un docente, un estudiante, un curso en 2024-1; tres preguntas en dos factores + una abierta."""
    return AppState(
        factores=[Factor(id=1, nombre="Factor 1"), Factor(id=2, nombre="Factor 2")],
        questions=[
            Question(id=1, texto="P1", factor=1, tipo_respuesta=AnswerType.BINARY),
            Question(id=2, texto="P2", factor=2, tipo_respuesta=AnswerType.FREQUENCY),
            Question(id=3, texto="P3", factor=2, tipo_respuesta=AnswerType.RATING),
            Question(id=4, texto="Comentarios", factor=1, tipo_respuesta=AnswerType.OPEN),
        ],
        question_weights=[10, 10, 10, 10],
        students=[
            Student(id="s1", nombre="Ana", email="ana@unal.edu.co"),
            Student(id="s2", nombre="Beto", email="beto@unal.edu.co"),
        ],
        teachers=[Teacher(id="t1", nombre="Docente Uno", email="t1@unal.edu.co")],
        courses=[Course(id="c1", nombre="Biología", grupo="CARI-01")],
        periods=[Period(id="2024-1", nombre="2024-1"), Period(id="2024-2", nombre="2024-2")],
        student_courses=[
            Enrollment(student_id="s1", course_id="c1", teacher_id="t1", group="CARI-01", period="2024-1"),
            Enrollment(student_id="s2", course_id="c1", teacher_id="t1", group="CARI-01", period="2024-1"),
        ],
        current_period="2024-1",
    )
