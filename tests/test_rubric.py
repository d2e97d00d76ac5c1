import pytest

from app.core.errors import UnknownAnswerType
from app.schemas.survey import AnswerType
from app.services.rubric import score

EXPECTED = {
    AnswerType.BINARY:          {1: 2, 2: 0, 3: 0, 4: 0, 5: 4},
    AnswerType.FREQUENCY:       {1: 0, 2: 1, 3: 3, 4: 0, 5: 4},
    AnswerType.FREQUENCY_OR_NA: {1: 0, 2: 1, 3: 3, 4: 0, 5: 4},
    AnswerType.RATING:          {1: 0, 2: 1, 3: 0, 4: 3, 5: 4},
}


@pytest.mark.parametrize("answer_type", list(EXPECTED))
def test_full_table(answer_type):
    for code, points in EXPECTED[answer_type].items():
        assert score(answer_type, code) == (points, 4), (answer_type, code)


@pytest.mark.parametrize("answer_type", list(EXPECTED))
@pytest.mark.parametrize("code", [0, 6, -1, 99, "5", None])
def test_codes_outside_table_score_zero(answer_type, code):
    assert score(answer_type, code) == (0, 4)


def test_accepts_persisted_string_values():
    assert score("binaria", 5) == (4, 4)
    assert score("valoracion", 4) == (3, 4)


def test_open_is_not_scored():
    assert score(AnswerType.OPEN, 5) == (0, 0)
    assert score(AnswerType.OPEN, "muy buen docente") == (0, 0)


def test_unknown_answer_type_raises():
    with pytest.raises(UnknownAnswerType) as exc:
        score("escala_10", 5)
    assert exc.value.answer_type == "escala_10"
    assert isinstance(exc.value, ValueError)
