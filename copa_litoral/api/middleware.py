from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from copa_litoral.core.config import Settings
from copa_litoral.services.client_ip import extract_client_ip, rate_limit_key

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LENGTH = 128

CallNext = Callable[[Request], Awaitable[Response]]


def _resolve_request_id(request: Request) -> str:
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if incoming and len(incoming) <= _MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


def build_request_context_middleware(settings: Settings) -> Callable[[Request, CallNext], Awaitable[Response]]:
    async def bind_request_context(request: Request, call_next: CallNext) -> Response:
        request_id = _resolve_request_id(request)
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                client_ip=extract_client_ip(request, trusted_proxies=settings.trusted_proxies),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            status_code=response.status_code,
            client_ip=extract_client_ip(request, trusted_proxies=settings.trusted_proxies),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    return bind_request_context


async def add_security_headers(request: Request, call_next: CallNext) -> Response:
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("X-XSS-Protection", "1; mode=block")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    if request.url.scheme == "https":
        response.headers.setdefault(
            "Strict-Transport-Security",
            "max-age=31536000; includeSubDomains",
        )
    return response


def build_limiter(settings: Settings) -> Limiter:
    return Limiter(
        key_func=rate_limit_key,
        default_limits=[settings.rate_limit_default],
        enabled=settings.rate_limit_enabled,
        storage_uri="memory://",
    )


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware from innermost to outermost."""
    app.state.limiter = build_limiter(settings)
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(add_security_headers)
    app.middleware("http")(build_request_context_middleware(settings))
    if settings.is_production:
        app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
