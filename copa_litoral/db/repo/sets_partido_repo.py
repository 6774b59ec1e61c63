from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.sets_partido import SetPartido


class SetsPartidoRepo:
    @staticmethod
    async def list_for_partido(session: AsyncSession, partido_id: int) -> list[SetPartido]:
        stmt = (
            select(SetPartido)
            .where(SetPartido.partido_id == partido_id)
            .order_by(SetPartido.numero_set.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def create_many(session: AsyncSession, *, sets: Sequence[SetPartido]) -> list[SetPartido]:
        created: list[SetPartido] = []
        for set_partido in sets:
            session.add(set_partido)
            await session.flush()
            created.append(set_partido)
        return created

    @staticmethod
    async def delete_for_partido(session: AsyncSession, partido_id: int) -> int:
        result = await session.execute(delete(SetPartido).where(SetPartido.partido_id == partido_id))
        return int(result.rowcount or 0)
