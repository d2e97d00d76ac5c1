# app/main.py
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import setup_logging
from app.api.v1.endpoints import (
    health, catalogs, students, responses, results,
    admin_imports, admin_periods, admin_surveys,
)
from app.db import session as db_session

setup_logging(settings.LOG_LEVEL)

API_V1_PREFIX = "/api/v1"

app = FastAPI(
    title=settings.APP_NAME,
    description="API de evaluación docente: programación académica, respuestas y resultados por periodo",
    version="1.0.0",
)

# CORS (en prod: restringe orígenes con CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Routers versionados
app.include_router(health.router,    prefix=API_V1_PREFIX)
app.include_router(catalogs.router,  prefix=API_V1_PREFIX)
app.include_router(students.router,  prefix=API_V1_PREFIX)
app.include_router(responses.router, prefix=API_V1_PREFIX)
app.include_router(results.router,   prefix=API_V1_PREFIX)

# Admin: monta AQUÍ el prefijo /api/v1/admin
app.include_router(admin_imports.router, prefix=f"{API_V1_PREFIX}/admin")
app.include_router(admin_periods.router, prefix=f"{API_V1_PREFIX}/admin")
app.include_router(admin_surveys.router, prefix=f"{API_V1_PREFIX}/admin")

# Rutas básicas fuera de /api/v1
@app.get("/health")
def health_root():
    return {"status": "ok", "message": "API funcionando correctamente"}

# health rápido de DB
@app.get("/api/v1/health/db")
def health_db():
    if not db_session.check_db_connection():
        raise HTTPException(status_code=503, detail="Base de datos no disponible")
    return {"db": "ok"}

@app.get("/")
def root():
    return {
        "message": "Bienvenido a la API de Evaluación Docente",
        "version": "1.0.0",
        "docs": "/docs",
        "api_v1": API_V1_PREFIX,
    }
