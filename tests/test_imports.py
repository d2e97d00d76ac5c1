import io

import pytest
from openpyxl import Workbook

from app.schemas.state import default_state
from app.services.imports import RosterFileError, import_schedule, rows_from_upload

HEADER = [
    "DOCUMENTO", "NOMBRE_ESTUDIANTE", "EMAIL", "DOC_DOCENTE_PPAL",
    "NOMBRE_DOCENTE_PRINCIPAL", "EMAIL_DOCENTE_PRINCIPAL", "ID_ASIGNATURA",
    "ASIGNATURA", "ID_GRUPO_ACTIVIDAD", "PERIODO",
]
ROW = [1006868597, "JUAN SEBASTIAN FLOREZ PUELLO", "jflorezpu@unal.edu.co", 52424848,
       "Johannie Lucia James Cruz", "jljamesc@unal.edu.co", 4100539,
       "FUNDAMENTOS DE ECONOMÍA", "CARI-01", "2024-1"]


def _xlsx(*rows) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(HEADER)
    for r in rows:
        ws.append(r)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _csv(*rows) -> bytes:
    lines = [",".join(HEADER)] + [",".join(str(v) for v in r) for r in rows]
    return ("\ufeff" + "\n".join(lines)).encode("utf-8")


def test_xlsx_rows():
    rows = rows_from_upload("programacion.xlsx", _xlsx(ROW, [None] * len(HEADER)))
    assert len(rows) == 1
    assert rows[0]["DOCUMENTO"] == 1006868597
    assert rows[0]["PERIODO"] == "2024-1"


def test_csv_rows_with_bom_and_spaced_headers():
    raw = "\ufeffdocumento , Nombre Estudiante,PERIODO\n123,Ana,2024-1\n".encode("utf-8")
    rows = rows_from_upload("x.csv", raw)
    assert rows == [{"DOCUMENTO": "123", "NOMBRE_ESTUDIANTE": "Ana", "PERIODO": "2024-1"}]


def test_csv_latin1_fallback():
    raw = "ASIGNATURA,ID_ASIGNATURA\nECONOMÍA,1\n".encode("latin-1")
    assert rows_from_upload("x.csv", raw)[0]["ASIGNATURA"] == "ECONOMÍA"


@pytest.mark.parametrize("name,raw", [
    ("x.pdf", b"%PDF"),
    ("x.xlsx", b"no es un zip"),
    ("x.csv", b""),
])
def test_bad_files(name, raw):
    with pytest.raises(RosterFileError):
        rows_from_upload(name, raw)


def test_import_schedule_selects_first_new_period():
    state = default_state()
    rows = rows_from_upload("p.csv", _csv(ROW, ROW[:-1] + ["2024-2"]))
    new_state, stats = import_schedule(state, rows)
    assert stats.periods_count == 2
    assert stats.relations_count == 2
    assert new_state.current_period == "2024-1"
    assert new_state.students[0].id == "1006868597"
    assert new_state.questions == state.questions


def test_import_schedule_keeps_current_period():
    state = default_state().model_copy(update={"current_period": "2023-2"})
    new_state, _ = import_schedule(state, [dict(zip(HEADER, ROW))])
    assert new_state.current_period == "2023-2"
