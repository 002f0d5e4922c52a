# backend/teamtasks/main.py

# FORCE logger module import so handlers attach
from teamtasks.core.logger import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teamtasks import __version__
from teamtasks.core.config import settings
from teamtasks.core.database import AsyncSessionLocal, engine, Base
from teamtasks.core.errors import register_exception_handlers
from teamtasks.core.seed import seed_admin
from teamtasks.core.request_middleware import RequestLoggingMiddleware
from teamtasks.core.error_middleware import ExceptionLoggingMiddleware

# registers every table on Base.metadata
import teamtasks.models  # noqa: F401

from teamtasks import api
from teamtasks.api import sessions, users, teams, tasks

# ---------------------------------------------------
# Create FastAPI instance FIRST
# ---------------------------------------------------
app = FastAPI(title="Team Tasks API", version=__version__)


# ---------------------------------------------------
# CORS
# ---------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------
# Logging middlewares
# ---------------------------------------------------
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)


# ---------------------------------------------------
# Error envelope
# ---------------------------------------------------
register_exception_handlers(app)


# ---------------------------------------------------
# Include Routers
# ---------------------------------------------------
app.include_router(api.router)
app.include_router(sessions.router)
app.include_router(users.router)
app.include_router(teams.router)
app.include_router(tasks.router)


# ---------------------------------------------------
# Startup: create tables + seed admin
# ---------------------------------------------------
@app.on_event("startup")
async def startup_event():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        await seed_admin(db)

    logger.info("Backend started with structured JSON logging")
