import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette import status
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from pickem.config import config
from pickem.database import database
from pickem.routes import dashboard, predictions, tournaments
from pickem.utils.alembic import alembic_run_migrations
from pickem.utils.errors import (
    ConstraintViolation,
    PredictionLocked,
    PredictionNotAllowed,
    StoreQueryFailure,
)
from pickem.utils.logging import logger


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if config.auto_run_migrations:
        await asyncio.to_thread(alembic_run_migrations)

    await database.connect()
    yield
    await database.disconnect()


app = FastAPI(title="Pickem API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConstraintViolation)
async def constraint_violation_handler(_: Request, exc: ConstraintViolation) -> JSONResponse:
    return JSONResponse({"detail": exc.message}, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(PredictionLocked)
async def prediction_locked_handler(_: Request, exc: PredictionLocked) -> JSONResponse:
    return JSONResponse({"detail": exc.message}, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(PredictionNotAllowed)
async def prediction_not_allowed_handler(_: Request, exc: PredictionNotAllowed) -> JSONResponse:
    return JSONResponse({"detail": exc.message}, status_code=status.HTTP_403_FORBIDDEN)


@app.exception_handler(StoreQueryFailure)
async def store_query_failure_handler(request: Request, exc: StoreQueryFailure) -> JSONResponse:
    logger.error(f"Store query failed while handling {request.url.path}: {exc.message}")
    return JSONResponse({"detail": exc.message}, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


for router in (dashboard.router, tournaments.router, predictions.router):
    app.include_router(router)
