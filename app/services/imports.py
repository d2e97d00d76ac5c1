# app/services/imports.py
from __future__ import annotations

import csv
import io
import logging
from typing import Any, Dict, List, Tuple

from openpyxl import load_workbook

from app.schemas.roster import ImportStats
from app.schemas.state import AppState
from app.services.roster import normalize_headers, reconcile

logger = logging.getLogger(__name__)


class RosterFileError(ValueError):
    pass


def import_schedule(state: AppState, rows: List[Dict[str, Any]]) -> Tuple[AppState, ImportStats]:
    """
    Aplica un lote de programación académica al estado.
    Si no hay periodo actual y el lote trae periodos nuevos, el primero queda como actual.
    """
    before = len(state.periods)
    roster, stats = reconcile(rows, state.roster)
    new_state = state.with_roster(roster)
    if not new_state.current_period and stats.periods_count > 0:
        new_state = new_state.model_copy(update={"current_period": roster.periods[before].id})
    return new_state, stats


# -------------------- lectura de archivos -------------------- #

def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        # fallback simple a latin-1 si fuera necesario
        return raw.decode("latin-1")


def rows_from_csv(raw: bytes) -> List[Dict[str, Any]]:
    reader = csv.DictReader(io.StringIO(_decode(raw)))
    if not reader.fieldnames:
        raise RosterFileError("CSV sin encabezado")
    return [normalize_headers(row) for row in reader]


def rows_from_xlsx(raw: bytes) -> List[Dict[str, Any]]:
    try:
        wb = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
    except Exception as e:
        raise RosterFileError(f"Excel inválido: {e}") from e
    try:
        ws = wb.worksheets[0]
        it = ws.iter_rows(values_only=True)
        header = next(it, None)
        if not header:
            raise RosterFileError("Hoja sin encabezado")
        rows: List[Dict[str, Any]] = []
        for values in it:
            if values is None or all(v is None for v in values):
                continue
            rows.append(normalize_headers(dict(zip(header, values))))
        return rows
    finally:
        wb.close()


def rows_from_upload(filename: str, raw: bytes) -> List[Dict[str, Any]]:
    name = (filename or "").lower()
    if name.endswith((".xlsx", ".xlsm")):
        rows = rows_from_xlsx(raw)
    elif name.endswith(".csv"):
        rows = rows_from_csv(raw)
    else:
        raise RosterFileError("Formato no soportado (use .xlsx o .csv)")
    logger.info("Archivo %s: %d filas", filename, len(rows))
    return rows
