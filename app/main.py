import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, settings
from app.database import engine
from app.logging_config import configure_logging
from app.middleware import ProblemDetailsMiddleware, TimingMiddleware
from app.routers import comments, posts
from app.schemas import ValidationProblemDetails

logger = logging.getLogger(__name__)

def _camel(segment: str) -> str:
    # pydantic reports the key the value arrived under; both spellings map to camelCase.
    head, *rest = segment.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)

def _field_name(loc: tuple) -> str:
    # A lone integer after the source marker is a JSON decode offset, not a field.
    if len(loc) == 2 and isinstance(loc[1], int):
        return str(loc[0])
    # Drop the leading "body"/"path"/"query" marker.
    parts = loc[1:] or loc
    return ".".join(_camel(p) if isinstance(p, str) else str(p) for p in parts)

def _error_message(error: dict) -> str:
    ctx_error = error.get("ctx", {}).get("error")
    if error.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    return error["msg"]

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problem = ValidationProblemDetails(instance=request.url.path)
    for error in exc.errors():
        problem.errors.setdefault(_field_name(error["loc"]), []).append(_error_message(error))
    logger.info("Validation failed for %s %s: %s", request.method, request.url.path, problem.errors)
    return JSONResponse(
        status_code=400,
        content=problem.model_dump(),
        media_type="application/problem+json",
    )

def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the application; OpenAPI documents are only exposed in development."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        configure_logging(app_settings)
        logger.info("%s started (env=%s)", app_settings.APP_NAME, app_settings.APP_ENV)
        yield
        # Shutdown
        await engine.dispose()
        logger.info("%s stopped", app_settings.APP_NAME)

    docs_enabled = app_settings.is_development
    app = FastAPI(
        title=app_settings.APP_NAME,
        description="CRUD API for blog posts and their comments",
        version=app_settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    # Middleware (last added runs first)
    app.add_middleware(ProblemDetailsMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Routers
    app.include_router(posts.router)
    app.include_router(comments.router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": app_settings.APP_VERSION}

    return app

app = create_app()
