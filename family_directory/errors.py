from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


# ============================================================
# ERROR TAXONOMY
# ============================================================

class DirectoryError(Exception):
    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(DirectoryError):
    """Malformed or missing input."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[list[dict]] = None,
    ):
        super().__init__(message, field)
        if errors is None:
            errors = [{"field": field, "message": message}] if field else []
        self.errors = errors

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidInviteError(DirectoryError):
    """Invite code missing or already used."""

    status_code = 400

    def __init__(self, message: str = "Invalid or already used invite code"):
        super().__init__(message, field="invite_code")


class UnauthorizedError(DirectoryError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class ForbiddenError(DirectoryError):
    status_code = 403

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFoundError(DirectoryError):
    status_code = 404


# ============================================================
# HTTP MAPPING
# ============================================================

def _field_path(loc) -> str:
    # ("body", "full_name") -> "full_name"; ("query", "living") -> "living"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or ".".join(str(p) for p in loc)


def request_validation_to_error(exc: RequestValidationError) -> ValidationError:
    errors = [
        {"field": _field_path(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    first = errors[0]["field"] if errors else None
    return ValidationError("Validation failed", field=first, errors=errors)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DirectoryError)
    async def handle_directory_error(request: Request, exc: DirectoryError):
        if exc.status_code >= 500:
            logger.error("{} {} failed: {}", request.method, request.url.path, exc.message)
        else:
            logger.info(
                "{} {} -> {} {}",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = request_validation_to_error(exc)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())
