# app/db/base.py
from app.db.base_class import Base  # noqa: F401

# Importa todos los modelos que definen tablas (para create_all y autogenerate)
from app.models import state_entry  # noqa: F401
