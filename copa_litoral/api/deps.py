from __future__ import annotations

from collections.abc import Awaitable, Callable

import structlog
from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from copa_litoral.accounts.constants import ROLE_ADMIN
from copa_litoral.accounts.errors import InvalidTokenError
from copa_litoral.accounts.types import TokenClaims
from copa_litoral.api.errors import FORBIDDEN, INVALID_TOKEN, UNAUTHORIZED, api_error
from copa_litoral.core.config import get_settings
from copa_litoral.core.security import decode_access_token

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)
_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


async def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenClaims:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise api_error(
            status.HTTP_401_UNAUTHORIZED,
            UNAUTHORIZED,
            "se requiere el encabezado Authorization: Bearer <token>",
            headers=_BEARER_CHALLENGE,
        )

    try:
        claims = decode_access_token(credentials.credentials, secret=get_settings().jwt_secret)
    except InvalidTokenError as exc:
        logger.info("auth_token_rejected", path=request.url.path)
        raise api_error(
            status.HTTP_401_UNAUTHORIZED,
            INVALID_TOKEN,
            headers=_BEARER_CHALLENGE,
        ) from exc

    structlog.contextvars.bind_contextvars(user_id=claims.user_id, rol=claims.role)
    return claims


def require_roles(*roles: str) -> Callable[..., Awaitable[TokenClaims]]:
    allowed = frozenset(roles)

    async def _require(identity: TokenClaims = Depends(get_current_identity)) -> TokenClaims:
        if identity.role not in allowed:
            logger.info("auth_role_forbidden", user_id=identity.user_id, rol=identity.role)
            raise api_error(status.HTTP_403_FORBIDDEN, FORBIDDEN)
        return identity

    return _require


require_admin = require_roles(ROLE_ADMIN)
