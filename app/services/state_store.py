# app/services/state_store.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import StaleStateError
from app.models.state_entry import StateEntry
from app.schemas.state import STATE_KEYS, AppState, default_state

logger = logging.getLogger(__name__)


class StateStore(Protocol):
    def load(self) -> AppState: ...

    def save(self, state: AppState) -> None: ...


class MemoryStateStore:
    """Store en memoria; útil en tests y para embeber el núcleo."""

    def __init__(self, state: Optional[AppState] = None):
        self._data: Dict[str, Any] = (state or default_state()).to_persisted()

    def load(self) -> AppState:
        return AppState.model_validate(self._data)

    def save(self, state: AppState) -> None:
        self._data = state.to_persisted()


class SqlStateStore:
    """
    Una fila por clave en ``app_state``. Solo se escriben las claves que
    cambiaron, y con control optimista: si otra sesión escribió la misma clave
    desde nuestro load(), save() lanza StaleStateError y no guarda nada.
    """

    def __init__(self, db: Session):
        self.db = db
        self._loaded: Dict[str, Any] = {}
        self._versions: Dict[str, int] = {}

    def load(self) -> AppState:
        data = default_state(settings.DEFAULT_QUESTION_WEIGHT).to_persisted()
        self._versions = {}
        for row in self.db.query(StateEntry).filter(StateEntry.key.in_(STATE_KEYS)).all():
            data[row.key] = row.value
            self._versions[row.key] = row.version
        state = AppState.model_validate(data)
        self._loaded = state.to_persisted()
        return state

    def save(self, state: AppState) -> None:
        data = state.to_persisted()
        changed = [k for k in STATE_KEYS if data.get(k) != self._loaded.get(k)]
        if not changed:
            return

        stale = []
        try:
            for key in changed:
                version = self._versions.get(key)
                if version is None:
                    exists = self.db.query(StateEntry.key).filter(StateEntry.key == key).first()
                    if exists:
                        stale.append(key)
                        continue
                    self.db.add(StateEntry(key=key, value=data[key], version=1))
                    continue
                updated = (
                    self.db.query(StateEntry)
                    .filter(StateEntry.key == key, StateEntry.version == version)
                    .update(
                        {StateEntry.value: data[key], StateEntry.version: version + 1},
                        synchronize_session=False,
                    )
                )
                if not updated:
                    stale.append(key)
            if stale:
                raise StaleStateError(stale)
            self.db.commit()
        except IntegrityError:
            # otra sesión insertó la misma clave entre la consulta y el commit
            self.db.rollback()
            raise StaleStateError(changed) from None
        except Exception:
            self.db.rollback()
            raise

        for key in changed:
            self._versions[key] = self._versions.get(key, 0) + 1
        self._loaded = data
        logger.debug("Estado guardado: %s", ", ".join(changed))
