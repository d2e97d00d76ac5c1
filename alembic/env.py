# alembic/env.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

# --- Carga .env (raíz del proyecto) ---
from dotenv import load_dotenv

PROJECT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_DIR / ".env")

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

# --- URL de conexión ---
# La misma regla que la app: DATABASE_URL / SQLALCHEMY_DATABASE_URI, si no SQLite local
from app.core.config import get_settings  # noqa: E402

db_url = os.getenv("ALEMBIC_DATABASE_URL") or get_settings().db_url
context.config.set_main_option("sqlalchemy.url", db_url)

# --- Metadata de modelos para autogenerate ---
from app.db.base import Base  # noqa: E402
from app.db.session import _mask  # noqa: E402

target_metadata = Base.metadata

logger.info("sqlalchemy.url = %s", _mask(db_url))


# --- Offline / Online runners ---
def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connect_args = {}
    if "supabase.co" in db_url or "supabase.com" in db_url:
        connect_args.setdefault("sslmode", "require")

    engine = create_engine(
        db_url,
        poolclass=pool.NullPool,
        connect_args=connect_args,
    )
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
