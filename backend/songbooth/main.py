"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from songbooth.config import Settings, settings as default_settings
from songbooth.errors import InvalidInput, RequestNotFound, error_response, field_errors
from songbooth.logging_config import setup_logging
from songbooth.routers import feedback, requests
from songbooth.routing import (
    DEFAULT_FAILURE_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
    NOT_FOUND_MESSAGE,
    failure_message,
)
from songbooth.storage.factory import build_store

_HTTP_MESSAGES = {
    status.HTTP_404_NOT_FOUND: NOT_FOUND_MESSAGE,
    status.HTTP_405_METHOD_NOT_ALLOWED: METHOD_NOT_ALLOWED_MESSAGE,
}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app; the store is created on startup and closed on shutdown."""
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = build_store(settings)
        try:
            yield
        finally:
            await app.state.store.close()

    app = FastAPI(
        title="Songbooth",
        description="Song requests and feedback for a live set, with operator triage",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Runs inside CORSMiddleware, so 500s still carry CORS headers.
    # Bare OPTIONS probes land here; real preflights are answered by CORS first.
    @app.middleware("http")
    async def answer_options_and_faults(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK)
        try:
            return await call_next(request)
        except Exception as exc:
            code, body = error_response(exc, failure_message(request.url.path, request.method))
            return JSONResponse(status_code=code, content=body)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=InvalidInput(field_errors(exc.errors())).to_dict(),
        )

    @app.exception_handler(InvalidInput)
    @app.exception_handler(RequestNotFound)
    async def on_domain_error(request: Request, exc: Exception):
        code, body = error_response(exc, DEFAULT_FAILURE_MESSAGE)
        return JSONResponse(status_code=code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_400_BAD_REQUEST:
            content = InvalidInput([{"field": "body", "message": str(exc.detail)}]).to_dict()
        else:
            content = {"message": _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    # Register routers
    app.include_router(requests.router, prefix="/api/requests", tags=["Requests"])
    app.include_router(feedback.router, prefix="/api/feedback", tags=["Feedback"])

    @app.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
