"""
PyPush API - FastAPI Application

Run with: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pypush import __version__
from api.routes.run import router as run_router
from api.routes.options import router as options_router
from api.routes.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("PyPush API starting...")
    yield
    logger.info("PyPush API shutting down...")


app = FastAPI(
    title="PyPush API",
    description="Run Push programs on isolated, step-bounded interpreters",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health_router, tags=["Health"])
app.include_router(run_router, prefix="/api/v1", tags=["Execution"])
app.include_router(options_router, prefix="/api/v1", tags=["Options"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "PyPush API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
