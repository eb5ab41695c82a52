"""
Application exceptions and their HTTP mapping.

Each failure is scoped to its request: handlers raise one of these and the
handlers registered by register_exception_handlers() turn it into the
response. Nothing is retried.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

PERSISTENCE_FAILURE_MESSAGE = "Houve um problema ao salvar o registro do fornecedor!"

VALIDATION_PROBLEM_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.1"
VALIDATION_PROBLEM_TITLE = "One or more validation errors occurred."


class AppException(Exception):
    """Base class for errors surfaced directly to the caller."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(AppException):
    """Resource identified by the path does not exist."""

    status_code = 404


class ValidationFailedError(AppException):
    """Field-level validation failed; carries every violation per field."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(VALIDATION_PROBLEM_TITLE)
        self.errors = errors


class PersistenceNoOpError(AppException):
    """Commit affected zero rows."""

    code = "persistence_noop"

    def __init__(self, detail: str = PERSISTENCE_FAILURE_MESSAGE):
        super().__init__(detail)


class PersistenceFailedError(AppException):
    """The database rejected the write (constraint violation, connection loss...)."""

    code = "persistence_failed"

    def __init__(self, detail: str = PERSISTENCE_FAILURE_MESSAGE):
        super().__init__(detail)


class IdentityError(AppException):
    """Account creation or update rejected by the identity store."""

    def __init__(self, errors: list[dict[str, str]], detail: str = "Não foi possível registrar o usuário."):
        super().__init__(detail)
        self.errors = errors


class AuthenticationFailedError(AppException):
    """Bad credentials or locked account on login."""


class NotAuthenticatedError(AppException):
    """Missing, malformed or expired bearer token."""

    status_code = 401

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)


class AuthorizationDeniedError(AppException):
    """Caller is authenticated but lacks the claim a policy requires."""

    status_code = 403


def validation_problem(errors: dict[str, list[str]]) -> JSONResponse:
    """Build a 400 problem-details response enumerating every field error."""
    return JSONResponse(
        status_code=400,
        content={
            "type": VALIDATION_PROBLEM_TYPE,
            "title": VALIDATION_PROBLEM_TITLE,
            "status": 400,
            "errors": errors,
        },
        media_type="application/problem+json",
    )


async def _validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    logger.info(
        "Validation failed",
        extra={"path": request.url.path, "fields": sorted(exc.errors)},
    )
    return validation_problem(exc.errors)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Path/body errors caught by FastAPI itself get the same problem shape
    from fornecedor_api.validation import errors_from_pydantic

    return validation_problem(errors_from_pydantic(exc.errors()))


async def _persistence_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
    )


async def _identity_handler(request: Request, exc: IdentityError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "errors": exc.errors},
    )


async def _not_authenticated_handler(request: Request, exc: NotAuthenticatedError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    content: dict[str, Any] = {"detail": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers for every application exception."""
    app.add_exception_handler(ValidationFailedError, _validation_failed_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(PersistenceNoOpError, _persistence_handler)
    app.add_exception_handler(PersistenceFailedError, _persistence_handler)
    app.add_exception_handler(IdentityError, _identity_handler)
    app.add_exception_handler(NotAuthenticatedError, _not_authenticated_handler)
    app.add_exception_handler(AppException, _app_exception_handler)
