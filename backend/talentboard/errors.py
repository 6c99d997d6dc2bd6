import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from talentboard.config import settings

logger = logging.getLogger("talentboard.errors")


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail


class BadRequestError(ApiError):
    status_code = 400


class InvalidIdError(BadRequestError):
    def __init__(self, entity: str):
        super().__init__(f"Invalid {entity.lower()} ID format")


class NotFoundError(ApiError):
    status_code = 404

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")


class StorageError(ApiError):
    status_code = 500


def error_body(message: str, detail: str | None = None) -> dict:
    body = {"success": False, "message": message}
    # Internal detail is only exposed outside production.
    if detail and not settings.is_production:
        body["error"] = detail
    return body


def describe_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=error_body(describe_validation_errors(exc.errors())))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal server error", str(exc)))


def install_error_handlers(app: FastAPI):
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
