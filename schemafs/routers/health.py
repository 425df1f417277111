# schemafs/routers/health.py
from __future__ import annotations

import logging
from fastapi import APIRouter
from schemafs.deps import executor, language_model, settings

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness check")
def health_check():
    s = settings()
    return {"status": "ok", "server": s.APP_NAME, "version": s.APP_VERSION}


@router.get("/health/db", summary="Database connectivity")
def db_health():
    try:
        rows = executor().execute("SELECT 1 AS ok")
        return {"ok": True, "rows": rows}
    except Exception as ex:
        return {"ok": False, "error": str(ex)}


@router.get("/health/llm", summary="Categorization/organization capability")
def llm_health():
    return {"enabled": language_model().available}
