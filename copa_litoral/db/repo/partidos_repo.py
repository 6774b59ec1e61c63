from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from copa_litoral.db.models.categorias import Categoria
from copa_litoral.db.models.jugadores import Jugador
from copa_litoral.db.models.partidos import Partido


@dataclass(slots=True)
class PartidoWithNames:
    partido: Partido
    jugador1_nombre: str | None
    jugador2_nombre: str | None
    categoria_nombre: str | None


def _select_with_names() -> Select:
    jugador1 = aliased(Jugador)
    jugador2 = aliased(Jugador)
    return (
        select(
            Partido,
            (jugador1.nombre + " " + jugador1.apellido).label("jugador1_nombre"),
            (jugador2.nombre + " " + jugador2.apellido).label("jugador2_nombre"),
            Categoria.nombre.label("categoria_nombre"),
        )
        .outerjoin(jugador1, jugador1.id == Partido.jugador1_id)
        .outerjoin(jugador2, jugador2.id == Partido.jugador2_id)
        .outerjoin(Categoria, Categoria.id == Partido.categoria_id)
    )


def _to_with_names(row) -> PartidoWithNames:
    return PartidoWithNames(
        partido=row[0],
        jugador1_nombre=row.jugador1_nombre,
        jugador2_nombre=row.jugador2_nombre,
        categoria_nombre=row.categoria_nombre,
    )


class PartidosRepo:
    @staticmethod
    async def list_with_names(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
        categoria_id: int | None = None,
        torneo_id: int | None = None,
        estado: str | None = None,
        jugador_id: int | None = None,
    ) -> list[PartidoWithNames]:
        stmt = _select_with_names()
        if categoria_id is not None:
            stmt = stmt.where(Partido.categoria_id == categoria_id)
        if torneo_id is not None:
            stmt = stmt.where(Partido.torneo_id == torneo_id)
        if estado is not None:
            stmt = stmt.where(Partido.estado == estado)
        if jugador_id is not None:
            stmt = stmt.where(
                (Partido.jugador1_id == jugador_id) | (Partido.jugador2_id == jugador_id)
            )
        stmt = (
            stmt.order_by(Partido.created_at.desc(), Partido.id.desc())
            .limit(max(1, int(limit)))
            .offset(max(0, int(offset)))
        )
        result = await session.execute(stmt)
        return [_to_with_names(row) for row in result.all()]

    @staticmethod
    async def get_with_names(session: AsyncSession, partido_id: int) -> PartidoWithNames | None:
        stmt = _select_with_names().where(Partido.id == partido_id)
        result = await session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return _to_with_names(row)

    @staticmethod
    async def get_by_id(session: AsyncSession, partido_id: int) -> Partido | None:
        return await session.get(Partido, partido_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, partido_id: int) -> Partido | None:
        stmt = select(Partido).where(Partido.id == partido_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, partido: Partido) -> Partido:
        session.add(partido)
        await session.flush()
        return partido

    @staticmethod
    async def delete_by_id(session: AsyncSession, partido_id: int) -> bool:
        result = await session.execute(delete(Partido).where(Partido.id == partido_id))
        return int(result.rowcount or 0) > 0
