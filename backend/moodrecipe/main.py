"""
main.py — FastAPI Application Entrypoint

Purpose:
- Build the AppContext (config, DB engine, hashing, tokens, integrations).
- Register API routers and the exception handlers that turn every error
  into a JSON body with a stable `error` field.
- Provide the `create_app` factory used by the ASGI server:
      uvicorn moodrecipe.main:create_app --factory

This file should stay clean: no business logic here.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moodrecipe import __version__
from moodrecipe.api.v1 import auth, recipes, users
from moodrecipe.api.v1 import integrations as integrations_api
from moodrecipe.core.config import Settings, get_settings
from moodrecipe.core.context import build_context
from moodrecipe.core.database import init_db
from moodrecipe.core.errors import InternalError, RecipeAppError, ValidationError
from moodrecipe.core.logging import configure_logging, get_logger
from moodrecipe.core.security import Clock
from moodrecipe.services.integrations import Integrations

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Exception Handlers
# -----------------------------------------------------------------------------

async def handle_app_error(request: Request, exc: RecipeAppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(p) for p in err.get("loc", ())[1:]) or "body" for err in exc.errors()})
    error = ValidationError(f"Invalid or missing field(s): {', '.join(fields)}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    # Details go to the log, never to the client
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# -----------------------------------------------------------------------------
# App Factory
# -----------------------------------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    integrations: Optional[Integrations] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    context = build_context(settings, integrations=integrations, clock=clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(context.engine)
        logger.info("Database ready")
        yield
        context.engine.dispose()

    app = FastAPI(
        title="Mood Recipe Backend",
        description="Mood- and diet-aware recipe recommendations",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RecipeAppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)

    # Mount all v1 API routers under /api/v1 prefix
    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(recipes.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(integrations_api.router, prefix="/api/v1")

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Mood recipe backend running"}

    return app
