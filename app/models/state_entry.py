# app/models/state_entry.py
from sqlalchemy import JSON, Column, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.db.base_class import Base


class StateEntry(Base):
    """Una clave del estado persistido (encuestaActiva, results, students, ...)."""
    __tablename__ = "app_state"

    key = Column(String, primary_key=True)
    value = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    # se incrementa en cada escritura; save() compara contra lo leído en load()
    version = Column(Integer, nullable=False, default=1, server_default="1")
    actualizado_en = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
