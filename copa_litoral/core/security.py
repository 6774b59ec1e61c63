from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from copa_litoral.accounts.errors import InvalidTokenError
from copa_litoral.accounts.types import TokenClaims

JWT_ALGORITHM = "HS256"
BCRYPT_MAX_PASSWORD_BYTES = 72
_REQUIRED_CLAIMS = ("sub", "user_id", "rol", "exp", "iat")


def _password_bytes(password: str) -> bytes:
    # bcrypt only ever looks at the first 72 bytes
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, *, rounds: int = 12) -> str:
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("ascii"))
    except ValueError:
        return False


@lru_cache(maxsize=4)
def dummy_password_hash(rounds: int = 12) -> str:
    return hash_password("copa-litoral-timing-equalizer", rounds=rounds)


def create_access_token(
    *,
    user_id: int,
    role: str,
    jugador_id: int | None,
    secret: str,
    now_utc: datetime,
    expires_in: timedelta = timedelta(hours=24),
) -> str:
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "user_id": user_id,
        "rol": role,
        "jugador_id": jugador_id,
        "iat": now_utc,
        "nbf": now_utc,
        "exp": now_utc + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, *, secret: str) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(_REQUIRED_CLAIMS)},
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError from exc

    user_id = payload.get("user_id")
    role = payload.get("rol")
    jugador_id = payload.get("jugador_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or payload.get("sub") != str(user_id):
        raise InvalidTokenError
    if not isinstance(role, str) or not role:
        raise InvalidTokenError
    if jugador_id is not None and (not isinstance(jugador_id, int) or isinstance(jugador_id, bool)):
        raise InvalidTokenError

    return TokenClaims(
        user_id=user_id,
        role=role,
        jugador_id=jugador_id,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
