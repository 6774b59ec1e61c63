from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.categorias import Categoria


class CategoriasRepo:
    @staticmethod
    async def list(session: AsyncSession, *, limit: int, offset: int) -> list[Categoria]:
        stmt = (
            select(Categoria)
            .order_by(Categoria.nombre.asc(), Categoria.id.asc())
            .limit(max(1, int(limit)))
            .offset(max(0, int(offset)))
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(session: AsyncSession, categoria_id: int) -> Categoria | None:
        return await session.get(Categoria, categoria_id)

    @staticmethod
    async def get_by_nombre(session: AsyncSession, nombre: str) -> Categoria | None:
        stmt = select(Categoria).where(Categoria.nombre == nombre)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, categoria: Categoria) -> Categoria:
        session.add(categoria)
        await session.flush()
        return categoria

    @staticmethod
    async def delete_by_id(session: AsyncSession, categoria_id: int) -> bool:
        result = await session.execute(delete(Categoria).where(Categoria.id == categoria_id))
        return int(result.rowcount or 0) > 0
