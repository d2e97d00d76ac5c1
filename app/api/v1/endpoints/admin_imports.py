# app/api/v1/endpoints/admin_imports.py
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from app.api.deps.store import get_store
from app.core.errors import StaleStateError
from app.schemas.roster import RosterImportOut
from app.services.imports import RosterFileError, import_schedule, rows_from_upload
from app.services.state_store import StateStore

router = APIRouter(tags=["admin/imports"])


@router.post("/imports/roster", response_model=RosterImportOut)
async def import_roster(
    file: UploadFile = File(..., description="Programación académica (.xlsx o .csv)"),
    dry_run: bool = Query(False, description="Si true, calcula estadísticas pero NO guarda"),
    store: StateStore = Depends(get_store),
):
    # 1) Leer contenido
    try:
        raw = await file.read()
    finally:
        await file.close()

    # 2) Filas
    try:
        rows = rows_from_upload(file.filename or "", raw)
    except RosterFileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # 3) Fusionar con el estado actual
    state = store.load()
    new_state, stats = import_schedule(state, rows)

    if not dry_run:
        try:
            store.save(new_state)
        except StaleStateError as e:
            raise HTTPException(status_code=409, detail=str(e))

    return RosterImportOut(
        dry_run=dry_run,
        stats=stats,
        current_period=new_state.current_period,
    )
