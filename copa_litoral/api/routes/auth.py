from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

import structlog
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from copa_litoral.accounts.errors import (
    AccountNotFoundError,
    EmailTakenError,
    InvalidCredentialsError,
    LinkedPlayerNotFoundError,
    PlayerAlreadyLinkedError,
    UsernameTakenError,
)
from copa_litoral.accounts.service import AccountService
from copa_litoral.accounts.types import AccountSnapshot, TokenClaims
from copa_litoral.api.deps import get_current_identity
from copa_litoral.api.envelope import ApiResponse, StrictRequest, envelope
from copa_litoral.api.errors import (
    INVALID_CREDENTIALS,
    INVALID_TOKEN,
    RESOURCE_CONFLICT,
    RESOURCE_NOT_FOUND,
    api_error,
)
from copa_litoral.core.config import get_settings
from copa_litoral.core.validation import Username
from copa_litoral.db.session import SessionLocal

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])
logger = structlog.get_logger(__name__)
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(StrictRequest):
    nombre_usuario: Username = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=100)
    rol: Literal["administrador", "jugador"] = "jugador"
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    jugador_id: int | None = Field(default=None, gt=0)


class LoginRequest(StrictRequest):
    nombre_usuario: Username = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=100)


class AccountResponse(BaseModel):
    id: int
    nombre_usuario: str
    email: str | None = None
    rol: str
    jugador_id: int | None = None
    created_at: datetime


class LoginResponse(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_at: datetime
    usuario: AccountResponse


def _as_account_response(account: AccountSnapshot) -> AccountResponse:
    return AccountResponse(
        id=account.account_id,
        nombre_usuario=account.nombre_usuario,
        email=account.email,
        rol=account.rol,
        jugador_id=account.jugador_id,
        created_at=account.created_at,
    )


@router.post(
    "/register",
    response_model=ApiResponse[AccountResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(payload: RegisterRequest) -> ApiResponse[AccountResponse]:
    settings = get_settings()
    try:
        async with SessionLocal.begin() as session:
            account = await AccountService.register(
                session,
                nombre_usuario=payload.nombre_usuario,
                password=payload.password,
                rol=payload.rol,
                email=payload.email,
                jugador_id=payload.jugador_id,
                bcrypt_rounds=settings.bcrypt_rounds,
            )
    except UsernameTakenError as exc:
        raise api_error(
            status.HTTP_409_CONFLICT,
            RESOURCE_CONFLICT,
            "el nombre de usuario ya existe",
            field="nombre_usuario",
        ) from exc
    except EmailTakenError as exc:
        raise api_error(
            status.HTTP_409_CONFLICT,
            RESOURCE_CONFLICT,
            "el email ya está registrado",
            field="email",
        ) from exc
    except LinkedPlayerNotFoundError as exc:
        raise api_error(
            status.HTTP_404_NOT_FOUND,
            RESOURCE_NOT_FOUND,
            "jugador no encontrado",
            field="jugador_id",
        ) from exc
    except PlayerAlreadyLinkedError as exc:
        raise api_error(
            status.HTTP_409_CONFLICT,
            RESOURCE_CONFLICT,
            "el jugador ya está vinculado a otro usuario",
            field="jugador_id",
        ) from exc

    return envelope(_as_account_response(account), message="usuario registrado exitosamente")


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(payload: LoginRequest) -> ApiResponse[LoginResponse]:
    settings = get_settings()
    try:
        async with SessionLocal.begin() as session:
            result = await AccountService.login(
                session,
                nombre_usuario=payload.nombre_usuario,
                password=payload.password,
                secret=settings.jwt_secret,
                now_utc=datetime.now(timezone.utc),
                token_lifetime_hours=settings.jwt_expiration_hours,
                bcrypt_rounds=settings.bcrypt_rounds,
            )
    except InvalidCredentialsError as exc:
        logger.info("auth_login_failed", nombre_usuario=payload.nombre_usuario)
        raise api_error(status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS) from exc

    logger.info("auth_login_succeeded", user_id=result.account.account_id, rol=result.account.rol)
    return envelope(
        LoginResponse(
            token=result.token,
            expires_at=result.expires_at,
            usuario=_as_account_response(result.account),
        ),
        message="login exitoso",
    )


@router.get("/me", response_model=ApiResponse[AccountResponse])
async def me(identity: TokenClaims = Depends(get_current_identity)) -> ApiResponse[AccountResponse]:
    try:
        async with SessionLocal.begin() as session:
            account = await AccountService.get_account(session, account_id=identity.user_id)
    except AccountNotFoundError as exc:
        raise api_error(status.HTTP_401_UNAUTHORIZED, INVALID_TOKEN) from exc

    return envelope(_as_account_response(account), message="usuario actual")
