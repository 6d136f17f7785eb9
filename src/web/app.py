"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cli.logging_config import setup_logging
from web.auth import SECRET_ENV
from web.deps import get_config
from web.routes import account, insights, moods
from web.user_store import init_db

logger = structlog.get_logger()


def _verify_jwt_secret() -> None:
    if not os.getenv(SECRET_ENV):
        logger.critical("web.jwt_secret_missing", env=SECRET_ENV)
        raise RuntimeError(f"{SECRET_ENV} required")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(json_mode=True, level=get_config().logging.level)
    init_db()
    _verify_jwt_secret()
    logger.info("web.startup")
    yield
    logger.info("web.shutdown")


app = FastAPI(
    title="moodlog",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origin
frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(moods.router)
app.include_router(insights.router)
app.include_router(account.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
