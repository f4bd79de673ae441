"""cyclekit API — FastAPI application entry point.

Run locally:
    uvicorn cyclekit.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cyclekit.config import get_settings
from cyclekit.engine.config_loader import get_engine_config, reload_engine_config
from cyclekit.engine.errors import CycleEngineError
from cyclekit.routers import cycle, health

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("cyclekit")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting %s API v%s [%s]",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )
    if settings.engine_config_path:
        reload_engine_config(Path(settings.engine_config_path))
    else:
        get_engine_config()
    yield
    logger.info("cyclekit API shut down")


# ---------- Error handlers ----------

async def engine_error_handler(request: Request, exc: CycleEngineError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Cycle phase partitioning, fertile window, period membership and "
            "next-cycle prediction over user-entered cycle records."
        ),
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CycleEngineError, engine_error_handler)

    # ---------- Health check (outside v1 prefix — always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    app.include_router(cycle.router, prefix="/api/v1")

    return app


app = create_app()
