from __future__ import annotations

import logging
import sys
from uuid import uuid4

import uvicorn
import yaml
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from salesguard.core.config import state_dir
from salesguard.core.http.client import close_http_client
from salesguard.core.logging import configure_logging
from salesguard.core.logging.context import log_context

from .deps import get_catalog, get_settings
from .routes_catalog import router as catalog_router
from .routes_combat import router as combat_router
from .routes_review import router as review_router

logger = logging.getLogger("salesguard.api")

app = FastAPI(title="SalesGuard API")
configure_logging(state_dir())

app.include_router(combat_router, prefix="/api/combat", tags=["combat"])
app.include_router(review_router, prefix="/api/review", tags=["review"])
app.include_router(catalog_router, prefix="/api/stages", tags=["stages"])


@app.middleware("http")
async def request_context_middleware(request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid4())
    with log_context(correlation_id=correlation_id):
        response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", exc_info=exc, extra={"extra_fields": {"path": request.url.path}})
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


@app.on_event("shutdown")
def shutdown() -> None:
    close_http_client()


@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}


@app.get("/healthz/full")
def healthz_full() -> dict[str, object]:
    settings = get_settings()
    payload: dict[str, object] = {
        "ok": True,
        "python": {"version": sys.version.split()[0]},
        "provider": {
            "url": settings.provider_url,
            "combat_configured": settings.combat_configured,
            "review_configured": settings.review_configured,
            "combat_timeout_s": settings.combat_timeout_s,
            "review_timeout_s": settings.review_timeout_s,
        },
    }
    try:
        payload["catalog"] = {"loaded": True, "stages": len(get_catalog().stages)}
    except (OSError, ValueError, yaml.YAMLError) as exc:
        payload["catalog"] = {"loaded": False, "error": exc.__class__.__name__}
        payload["ok"] = False
    return payload


def run() -> None:
    uvicorn.run("salesguard.apps.api.main:app", reload=True, host="127.0.0.1", port=8000)
