# app/api/deps/store.py
from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.state_store import SqlStateStore, StateStore


def get_store(db: Session = Depends(get_db)) -> StateStore:
    """Store por request: cada endpoint hace load -> operación pura -> save."""
    return SqlStateStore(db)
