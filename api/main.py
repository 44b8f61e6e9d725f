"""FastAPI application for the Golf Tour scoring API."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from database.connection import db, dsn_from_env
from database.db_manager import DatabaseManager

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown."""
    await db.initialize(dsn=dsn_from_env())
    app.state.db_manager = DatabaseManager(db.pool)
    yield
    await db.close()


def cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    app = FastAPI(
        title="Golf Tour API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import handicaps, leaderboards, matches
    app.include_router(leaderboards.router, prefix="/api/tours", tags=["leaderboards"])
    app.include_router(matches.router, prefix="/api/tours", tags=["matches"])
    app.include_router(handicaps.router, prefix="/api/tours", tags=["handicaps"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
