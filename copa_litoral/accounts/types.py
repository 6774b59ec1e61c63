from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class AccountSnapshot:
    account_id: int
    nombre_usuario: str
    email: str | None
    rol: str
    jugador_id: int | None
    created_at: datetime


@dataclass(slots=True)
class LoginResult:
    token: str
    expires_at: datetime
    account: AccountSnapshot


@dataclass(slots=True)
class TokenClaims:
    user_id: int
    role: str
    jugador_id: int | None
    issued_at: datetime
    expires_at: datetime
