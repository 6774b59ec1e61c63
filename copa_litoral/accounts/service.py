from __future__ import annotations

from datetime import datetime, timedelta

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.accounts.constants import DEFAULT_TOKEN_LIFETIME_HOURS, ROLE_PLAYER, ROLES
from copa_litoral.accounts.errors import (
    AccountError,
    AccountNotFoundError,
    EmailTakenError,
    InvalidCredentialsError,
    LinkedPlayerNotFoundError,
    PlayerAlreadyLinkedError,
    UsernameTakenError,
)
from copa_litoral.accounts.types import AccountSnapshot, LoginResult
from copa_litoral.core.security import (
    create_access_token,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from copa_litoral.db.models.usuarios import Usuario
from copa_litoral.db.repo.jugadores_repo import JugadoresRepo
from copa_litoral.db.repo.usuarios_repo import UsuariosRepo

logger = structlog.get_logger(__name__)


def build_account_snapshot(usuario: Usuario) -> AccountSnapshot:
    return AccountSnapshot(
        account_id=usuario.id,
        nombre_usuario=usuario.nombre_usuario,
        email=usuario.email,
        rol=usuario.rol,
        jugador_id=usuario.jugador_id,
        created_at=usuario.created_at,
    )


def registration_conflict(exc: IntegrityError) -> AccountError:
    """Map a constraint violation on the usuarios insert to the field it guards."""
    message = str(exc.orig).lower()
    if "foreign key" in message:
        return LinkedPlayerNotFoundError()
    if "email" in message:
        return EmailTakenError()
    if "jugador_id" in message:
        return PlayerAlreadyLinkedError()
    return UsernameTakenError()


class AccountService:
    @staticmethod
    async def register(
        session: AsyncSession,
        *,
        nombre_usuario: str,
        password: str,
        rol: str = ROLE_PLAYER,
        email: str | None = None,
        jugador_id: int | None = None,
        bcrypt_rounds: int = 12,
    ) -> AccountSnapshot:
        if rol not in ROLES:
            raise ValueError(f"unsupported role: {rol}")

        if await UsuariosRepo.get_by_nombre_usuario(session, nombre_usuario) is not None:
            raise UsernameTakenError
        if email is not None and await UsuariosRepo.get_by_email(session, email) is not None:
            raise EmailTakenError
        if jugador_id is not None:
            if await JugadoresRepo.get_by_id(session, jugador_id) is None:
                raise LinkedPlayerNotFoundError
            if await UsuariosRepo.get_by_jugador_id(session, jugador_id) is not None:
                raise PlayerAlreadyLinkedError

        usuario = Usuario(
            nombre_usuario=nombre_usuario,
            email=email,
            password_hash=hash_password(password, rounds=bcrypt_rounds),
            rol=rol,
            jugador_id=jugador_id,
        )
        try:
            # the unique constraint still guards concurrent registrations
            await UsuariosRepo.create(session, usuario=usuario)
        except IntegrityError as exc:
            conflict = registration_conflict(exc)
            logger.info(
                "account_register_conflict",
                nombre_usuario=nombre_usuario,
                conflict=type(conflict).__name__,
            )
            raise conflict from exc

        logger.info("account_registered", account_id=usuario.id, rol=rol)
        return build_account_snapshot(usuario)

    @staticmethod
    async def login(
        session: AsyncSession,
        *,
        nombre_usuario: str,
        password: str,
        secret: str,
        now_utc: datetime,
        token_lifetime_hours: int = DEFAULT_TOKEN_LIFETIME_HOURS,
        bcrypt_rounds: int = 12,
    ) -> LoginResult:
        usuario = await UsuariosRepo.get_by_nombre_usuario(session, nombre_usuario)
        if usuario is None:
            verify_password(password, dummy_password_hash(bcrypt_rounds))
            raise InvalidCredentialsError
        if not verify_password(password, usuario.password_hash):
            raise InvalidCredentialsError

        lifetime = timedelta(hours=token_lifetime_hours)
        token = create_access_token(
            user_id=usuario.id,
            role=usuario.rol,
            jugador_id=usuario.jugador_id,
            secret=secret,
            now_utc=now_utc,
            expires_in=lifetime,
        )
        return LoginResult(
            token=token,
            expires_at=now_utc + lifetime,
            account=build_account_snapshot(usuario),
        )

    @staticmethod
    async def get_account(session: AsyncSession, *, account_id: int) -> AccountSnapshot:
        usuario = await UsuariosRepo.get_by_id(session, account_id)
        if usuario is None:
            raise AccountNotFoundError
        return build_account_snapshot(usuario)
