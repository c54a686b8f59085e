"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from homeroom import __version__
from homeroom.api import router as api_router
from homeroom.core.config import settings
from homeroom.core.exceptions import HomeroomError, UnauthenticatedError
from homeroom.core.logging import configure_logging
from homeroom.core.security import dummy_password_hash
from homeroom.schemas.errors import ErrorResponse

configure_logging(settings.LOG_LEVEL)
# Computed once at import so the first unknown-user login costs a single bcrypt check.
dummy_password_hash()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Homeroom API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(error: HomeroomError) -> JSONResponse:
    body = ErrorResponse(code=error.code, message=error.message, location=error.location)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, UnauthenticatedError) else None
    return JSONResponse(
        status_code=error.status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(HomeroomError)
async def handle_homeroom_error(request: Request, exc: HomeroomError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.code)
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid field as a 400 ValidationError naming that field."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            code="ValidationError",
            message=message,
            location=loc[-1] if loc else None,
        ).model_dump(exclude_none=True),
    )


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Homeroom API"}
