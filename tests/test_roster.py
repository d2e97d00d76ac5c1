from app.schemas.roster import RosterSets
from app.services.roster import reconcile


def _row(**overrides):
    row = {
        "DOCUMENTO": 1016592846,
        "NOMBRE_ESTUDIANTE": "VENUS IDALI SAAMS AQUITUARI",
        "EMAIL": "vsaams@unal.edu.co",
        "DOC_DOCENTE_PPAL": 51709551,
        "NOMBRE_DOCENTE_PRINCIPAL": "Adriana Santos Martinez",
        "EMAIL_DOCENTE_PRINCIPAL": "asantosma@unal.edu.co",
        "ID_ASIGNATURA": "1000009-M",
        "ASIGNATURA": "BIOLOGÍA GENERAL",
        "ID_GRUPO_ACTIVIDAD": "CARI-01",
        "PERIODO": "2023-2",
    }
    row.update(overrides)
    return row


def test_complete_row_adds_one_of_each():
    roster, stats = reconcile([_row()], RosterSets())

    assert (stats.students_count, stats.teachers_count, stats.courses_count,
            stats.periods_count, stats.relations_count) == (1, 1, 1, 1, 1)
    assert roster.students[0].id == "1016592846"
    assert roster.teachers[0].id == "51709551"
    e = roster.enrollments[0]
    assert e.key == ("1016592846", "1000009-M", "51709551", "2023-2")
    assert e.group == "CARI-01"
    assert roster.periods[0].nombre == "2023-2"


def test_reimporting_same_batch_adds_nothing():
    batch = [_row(), _row(ID_ASIGNATURA="1000001-M", ASIGNATURA="MATEMÁTICAS BÁSICAS")]
    first, stats1 = reconcile(batch, RosterSets())
    assert stats1.relations_count == 2

    second, stats2 = reconcile(batch, first)
    assert stats2.total_added == 0
    assert stats2.relations_count == 0
    assert second == first


def test_empty_batch_is_noop():
    base, _ = reconcile([_row()], RosterSets())
    after, stats = reconcile([], base)
    assert stats.total_added == 0
    assert stats.skipped_rows == []
    assert after == base


def test_duplicates_inside_batch_are_merged():
    roster, stats = reconcile([_row(), _row()], RosterSets())
    assert stats.students_count == 1
    assert stats.relations_count == 1
    assert len(roster.enrollments) == 1


def test_same_triplet_in_another_period_is_a_new_enrollment():
    roster, stats = reconcile([_row(), _row(PERIODO="2024-1")], RosterSets())
    assert stats.relations_count == 2
    assert stats.periods_count == 2


def test_defaults_for_missing_email_and_group():
    roster, _ = reconcile(
        [_row(EMAIL=None, EMAIL_DOCENTE_PRINCIPAL="", ID_GRUPO_ACTIVIDAD=None)],
        RosterSets(),
    )
    assert roster.students[0].email == "1016592846@example.com"
    assert roster.teachers[0].email == "51709551@example.com"
    assert roster.courses[0].grupo == "1"
    assert roster.enrollments[0].group == "1"


def test_row_without_period_still_registers_entities():
    roster, stats = reconcile([_row(PERIODO=None)], RosterSets())
    assert stats.relations_count == 0
    assert stats.students_count == 1
    assert stats.courses_count == 1
    assert roster.enrollments == []


def test_course_without_name_is_not_created_but_enrollment_is():
    roster, stats = reconcile([_row(ASIGNATURA="")], RosterSets())
    assert stats.courses_count == 0
    assert stats.relations_count == 1


def test_malformed_rows_never_raise():
    rows = [{}, {"OTRA_COLUMNA": "x"}, "no es un dict", None, _row(DOCUMENTO="  ")]
    roster, stats = reconcile(rows, RosterSets())
    assert stats.students_count == 0
    assert stats.relations_count == 0
    assert stats.teachers_count == 1
    assert [s.row for s in stats.skipped_rows] == [1, 2, 3, 4]


def test_input_sets_are_not_mutated():
    base, _ = reconcile([_row()], RosterSets())
    snapshot = base.model_copy(deep=True)
    reconcile([_row(DOCUMENTO="999", NOMBRE_ESTUDIANTE="Nuevo")], base)
    assert base == snapshot


def test_excel_float_ids_are_stringified_without_decimals():
    roster, _ = reconcile([_row(DOCUMENTO=1234.0)], RosterSets())
    assert roster.students[0].id == "1234"
