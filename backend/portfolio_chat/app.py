"""FastAPI application setup for the portfolio research chat."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_chat.api.dependencies import get_app_settings
from portfolio_chat.api.routes_chat import router as chat_router
from portfolio_chat.core.errors import (
    BlankQuestionError,
    ChatError,
    CredentialNotConfiguredError,
    ProviderGenerationError,
)
from portfolio_chat.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Portfolio Research Chat",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_app_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router, prefix="/api", tags=["chat"])


@app.exception_handler(ChatError)
async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    logger.warning(
        "Chat request failed: %s",
        exc.error,
        extra={"ctx_status": exc.status_code, "ctx_path": request.url.path},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable chat bodies in the same shape as every other chat failure.

    The credential check still comes first, so a server without a key answers
    500 whatever the body looks like.
    """
    settings = app.dependency_overrides.get(get_app_settings, get_app_settings)()
    errors = exc.errors()
    if not settings.api_key:
        error: ChatError = CredentialNotConfiguredError()
    elif errors and all(tuple(item.get("loc", ()))[:2] == ("body", "question") for item in errors):
        error = BlankQuestionError()
    else:
        detail = errors[0].get("msg") if errors else None
        error = ProviderGenerationError(str(detail or "Invalid request body"))
    return await chat_error_handler(request, error)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to generate response", "message": str(exc) or "Unknown error occurred"},
    )


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
