import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Get logger without configuring (create_app sets up logging)
logger = logging.getLogger(__name__)

class AppError(Exception):
    """Base exception for errors rendered to the client as {"error": message}."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN

class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def translate_store_errors(message: str):
    """Turn database failures into an InternalError carrying only `message`."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception(f"{message}: {e}")
        raise InternalError(message) from e


def _describe_validation_error(exc: RequestValidationError) -> str:
    missing, invalid = [], []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        name = ".".join(loc) or "body"
        if err.get("type") == "missing":
            missing.append(name)
        else:
            invalid.append(name)

    parts = []
    if missing:
        parts.append("Missing required fields: " + ", ".join(missing))
    if invalid:
        parts.append("Invalid fields: " + ", ".join(invalid))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _describe_validation_error(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal error"},
        )
