"""FastAPI application for the FlippersLog API."""

import logging
import os
from contextlib import asynccontextmanager

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from database.connection import db
from database.db_manager import DatabaseManager
from database.kv_store import InMemoryKeyValueStore, PostgresKeyValueStore
from venues.pinballmap import PinballMapClient

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store and HTTP client on startup, close them on shutdown."""
    dsn = os.environ.get("DATABASE_URL")
    if dsn:
        await db.initialize(dsn=dsn)
        await db.initialize_schema()
        store = PostgresKeyValueStore(db.pool)
    else:
        logger.warning("DATABASE_URL is not set; scores are kept in memory only")
        store = InMemoryKeyValueStore()
    app.state.db_manager = DatabaseManager(store)

    http_client = httpx.AsyncClient()
    app.state.pinballmap = PinballMapClient(http_client=http_client)
    yield
    await http_client.aclose()
    await db.close()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="FlippersLog API",
        version="1.0.0",
        lifespan=lifespan,
    )

    origins = os.environ.get("CORS_ORIGINS", "http://localhost:8081")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import scan, scores, tables, venues
    app.include_router(scan.router, prefix="/api/scan", tags=["scan"])
    app.include_router(scores.router, prefix="/api/scores", tags=["scores"])
    app.include_router(tables.router, prefix="/api/tables", tags=["tables"])
    app.include_router(venues.router, prefix="/api/venues", tags=["venues"])

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/api/health")
    async def health():
        if not os.environ.get("DATABASE_URL"):
            return {"status": "ok", "database": "memory"}
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
