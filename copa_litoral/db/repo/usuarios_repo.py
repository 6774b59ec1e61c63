from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.usuarios import Usuario


class UsuariosRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, usuario_id: int) -> Usuario | None:
        return await session.get(Usuario, usuario_id)

    @staticmethod
    async def get_by_nombre_usuario(session: AsyncSession, nombre_usuario: str) -> Usuario | None:
        stmt = select(Usuario).where(Usuario.nombre_usuario == nombre_usuario)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(session: AsyncSession, email: str) -> Usuario | None:
        stmt = select(Usuario).where(Usuario.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_jugador_id(session: AsyncSession, jugador_id: int) -> Usuario | None:
        stmt = select(Usuario).where(Usuario.jugador_id == jugador_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, usuario: Usuario) -> Usuario:
        session.add(usuario)
        await session.flush()
        return usuario
