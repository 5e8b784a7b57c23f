"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from quotefeed.config import settings
from quotefeed.db.database import engine, Base
from quotefeed.db.redis import close_rate_limit_store
from quotefeed.logging_config import setup_logging

setup_logging(json_mode=settings.LOG_JSON, level=settings.LOG_LEVEL)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables (dev only; use migrations in production)
    import quotefeed.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("app_started", env=settings.APP_ENV)
    yield
    # Shutdown: close connections
    await engine.dispose()
    await close_rate_limit_store()


app = FastAPI(
    title="Quotefeed API",
    description="Personalized quote timeline and public quote listings",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Store failures become a plain 500; no partial results are returned."""
    logger.error("database_error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# --- Routes ---
from quotefeed.api.routes import quotes, interactions  # noqa: E402

app.include_router(quotes.router, prefix="/api/quotes", tags=["quotes"])
app.include_router(interactions.router, prefix="/api/interactions", tags=["interactions"])


@app.get("/health")
async def health_check():
    return {"status": "ok"}
