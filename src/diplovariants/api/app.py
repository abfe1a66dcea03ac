"""FastAPI application wiring for the variant service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diplovariants import __version__
from diplovariants.api import routes
from diplovariants.api.runtime import ApiState, build_state
from diplovariants.config import get_settings
from diplovariants.errors import (
    EngineFailureError,
    MalformedRequestError,
    VariantNotFoundError,
)

logger = logging.getLogger(__name__)


async def variant_not_found(request: Request, exc: VariantNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def malformed_request(request: Request, exc: MalformedRequestError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def engine_failure(request: Request, exc: EngineFailureError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "variant engine failure"},
    )


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.api_state = state_factory()
        yield

    app = FastAPI(title="Diplovariants API", version=__version__, lifespan=lifespan)
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag"],
    )
    app.add_exception_handler(VariantNotFoundError, variant_not_found)
    app.add_exception_handler(MalformedRequestError, malformed_request)
    app.add_exception_handler(EngineFailureError, engine_failure)
    app.include_router(routes.router)
    return app


app = create_app()
