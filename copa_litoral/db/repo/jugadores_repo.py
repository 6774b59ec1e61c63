from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.jugadores import Jugador


class JugadoresRepo:
    @staticmethod
    async def list(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
        categoria_id: int | None = None,
        estado_participacion: str | None = None,
    ) -> list[Jugador]:
        stmt = select(Jugador)
        if categoria_id is not None:
            stmt = stmt.where(Jugador.categoria_id == categoria_id)
        if estado_participacion is not None:
            stmt = stmt.where(Jugador.estado_participacion == estado_participacion)
        stmt = (
            stmt.order_by(Jugador.nombre.asc(), Jugador.apellido.asc(), Jugador.id.asc())
            .limit(max(1, int(limit)))
            .offset(max(0, int(offset)))
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(session: AsyncSession, jugador_id: int) -> Jugador | None:
        return await session.get(Jugador, jugador_id)

    @staticmethod
    async def create(session: AsyncSession, *, jugador: Jugador) -> Jugador:
        session.add(jugador)
        await session.flush()
        return jugador

    @staticmethod
    async def delete_by_id(session: AsyncSession, jugador_id: int) -> bool:
        result = await session.execute(delete(Jugador).where(Jugador.id == jugador_id))
        return int(result.rowcount or 0) > 0
