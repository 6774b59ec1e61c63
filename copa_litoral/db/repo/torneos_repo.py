from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.torneos import Torneo


class TorneosRepo:
    @staticmethod
    async def list(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
        activo: bool | None = None,
    ) -> list[Torneo]:
        stmt = select(Torneo)
        if activo is not None:
            stmt = stmt.where(Torneo.activo.is_(activo))
        stmt = (
            stmt.order_by(Torneo.anio.desc(), Torneo.id.desc())
            .limit(max(1, int(limit)))
            .offset(max(0, int(offset)))
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(session: AsyncSession, torneo_id: int) -> Torneo | None:
        return await session.get(Torneo, torneo_id)

    @staticmethod
    async def create(session: AsyncSession, *, torneo: Torneo) -> Torneo:
        session.add(torneo)
        await session.flush()
        return torneo

    @staticmethod
    async def delete_by_id(session: AsyncSession, torneo_id: int) -> bool:
        result = await session.execute(delete(Torneo).where(Torneo.id == torneo_id))
        return int(result.rowcount or 0) > 0
