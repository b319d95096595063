import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from equipment_inventory.core import exceptions as domain_exceptions


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    # Normalize framework errors (404 route, 405 method) to {"error": ...}
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON / non-integer counts; same status as missing fields
    return _error(400, "Invalid request body")


def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    structlog.get_logger(__name__).error("unhandled_exception", exc_info=exc)
    # Hide internal details by default
    return _error(500, "Internal Server Error")


def _domain_error_handler(status_code: int, default_message: str):
    def _handler(_: Request, exc: domain_exceptions.DomainError) -> JSONResponse:
        return _error(status_code, str(exc) or default_message)

    return _handler


def install(app) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(
        domain_exceptions.NotFoundError, _domain_error_handler(404, "Not Found")
    )
    app.add_exception_handler(
        domain_exceptions.ValidationError, _domain_error_handler(400, "Bad Request")
    )
    app.add_exception_handler(
        domain_exceptions.AuthorizationError, _domain_error_handler(401, "Unauthorized")
    )
    app.add_exception_handler(
        domain_exceptions.StoreOperationError, _domain_error_handler(500, "Internal Server Error")
    )
    app.add_exception_handler(
        domain_exceptions.InfrastructureError,
        _domain_error_handler(503, "Service Unavailable"),
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)
