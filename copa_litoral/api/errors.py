from __future__ import annotations

import traceback
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from copa_litoral.api.envelope import ErrorDetail, ErrorInfo, ErrorResponse
from copa_litoral.core.config import get_settings

logger = structlog.get_logger(__name__)

VALIDATION_FAILED = "VALIDATION_FAILED"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
INVALID_TOKEN = "INVALID_TOKEN"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
INVALID_WINNER = "INVALID_WINNER"
RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
DATABASE_ERROR = "DATABASE_ERROR"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

_DEFAULT_CODES_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: VALIDATION_FAILED,
    status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: FORBIDDEN,
    status.HTTP_404_NOT_FOUND: RESOURCE_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: RESOURCE_NOT_FOUND,
    status.HTTP_409_CONFLICT: RESOURCE_CONFLICT,
    422: VALIDATION_FAILED,
    status.HTTP_429_TOO_MANY_REQUESTS: RATE_LIMIT_EXCEEDED,
}

_DEFAULT_MESSAGES_BY_CODE = {
    VALIDATION_FAILED: "datos de entrada inválidos",
    UNAUTHORIZED: "autenticación requerida",
    FORBIDDEN: "permisos insuficientes",
    INVALID_TOKEN: "token inválido o expirado",
    INVALID_CREDENTIALS: "credenciales inválidas",
    RESOURCE_NOT_FOUND: "recurso no encontrado",
    RESOURCE_CONFLICT: "conflicto con el estado actual del recurso",
    INVALID_WINNER: "el ganador debe ser uno de los jugadores del partido",
    RATE_LIMIT_EXCEEDED: "demasiadas solicitudes, intente más tarde",
    DATABASE_ERROR: "error de base de datos",
    INTERNAL_SERVER_ERROR: "error interno del servidor",
}


def api_error(
    status_code: int,
    code: str,
    message: str | None = None,
    *,
    field: str | None = None,
    headers: dict[str, str] | None = None,
) -> HTTPException:
    detail: dict[str, Any] = {"code": code, "message": message or _DEFAULT_MESSAGES_BY_CODE.get(code, code)}
    if field is not None:
        detail["field"] = field
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


def _request_id(request: Request) -> str | None:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    return request.headers.get("X-Request-ID")


def error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str | None = None,
    details: list[ErrorDetail] | None = None,
    exc: BaseException | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    resolved_message = message or _DEFAULT_MESSAGES_BY_CODE.get(code, code)
    stack_trace = None
    if exc is not None and get_settings().debug_errors:
        stack_trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    body = ErrorResponse(
        message=resolved_message,
        error=ErrorInfo(
            code=code,
            message=resolved_message,
            details=details,
            stack_trace=stack_trace,
        ),
        path=request.url.path,
        method=request.method,
        request_id=_request_id(request),
    )
    content = body.model_dump(mode="json")
    if stack_trace is None:
        content["error"].pop("stack_trace", None)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _DEFAULT_CODES_BY_STATUS.get(exc.status_code, INTERNAL_SERVER_ERROR)
    message: str | None = None
    details: list[ErrorDetail] | None = None

    if isinstance(exc.detail, dict):
        code = str(exc.detail.get("code", code))
        message = exc.detail.get("message")
        field = exc.detail.get("field")
        if field is not None:
            details = [ErrorDetail(field=field, message=message or code)]
    elif isinstance(exc.detail, str) and exc.status_code < 500:
        message = _DEFAULT_MESSAGES_BY_CODE.get(code)

    return error_response(
        request,
        status_code=exc.status_code,
        code=code,
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    for part in reversed(loc):
        if isinstance(part, str):
            return part
    return ".".join(str(part) for part in loc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        ErrorDetail(
            field=_field_name(tuple(error.get("loc", ()))),
            message=str(error.get("msg", "invalid value")),
            type=error.get("type"),
        )
        for error in exc.errors()
    ]
    logger.info(
        "request_validation_failed",
        path=request.url.path,
        fields=[detail.field for detail in details],
    )
    return error_response(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        code=VALIDATION_FAILED,
        details=details,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # must stay sync, SlowAPIMiddleware does not await it
    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        limit=str(exc.detail),
    )
    return error_response(
        request,
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        code=RATE_LIMIT_EXCEEDED,
        headers={"Retry-After": "60"},
    )


async def conflict_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("database_conflict", path=request.url.path, error_type=type(exc).__name__)
    return error_response(
        request,
        status_code=status.HTTP_409_CONFLICT,
        code=RESOURCE_CONFLICT,
        exc=exc,
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    unavailable = isinstance(exc, OperationalError) or (
        isinstance(exc, DBAPIError) and exc.connection_invalidated
    )
    logger.error(
        "database_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        unavailable=unavailable,
    )
    return error_response(
        request,
        status_code=(
            status.HTTP_503_SERVICE_UNAVAILABLE
            if unavailable
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        code=DATABASE_ERROR,
        exc=exc,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=INTERNAL_SERVER_ERROR,
        exc=exc,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(IntegrityError, conflict_exception_handler)
    app.add_exception_handler(StaleDataError, conflict_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def reject_null_fields(changes: dict[str, Any], fields: tuple[str, ...]) -> None:
    for field_name in fields:
        if field_name in changes and changes[field_name] is None:
            raise api_error(
                status.HTTP_400_BAD_REQUEST,
                VALIDATION_FAILED,
                "el campo no puede ser nulo",
                field=field_name,
            )
