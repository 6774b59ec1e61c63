from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.jugadores import Jugador
from copa_litoral.db.repo.categorias_repo import CategoriasRepo
from copa_litoral.db.repo.jugadores_repo import JugadoresRepo
from copa_litoral.league.constants import PARTICIPATION_ACTIVE, PLAYER_MUTABLE_FIELDS
from copa_litoral.league.errors import CategoryNotFoundError, PlayerNotFoundError
from copa_litoral.league.internal import apply_changes, build_player_snapshot, resolve_page
from copa_litoral.league.types import PlayerSnapshot

logger = structlog.get_logger(__name__)


async def _ensure_category_exists(session: AsyncSession, categoria_id: int | None) -> None:
    if categoria_id is None:
        return
    if await CategoriasRepo.get_by_id(session, categoria_id) is None:
        raise CategoryNotFoundError


async def list_players(
    session: AsyncSession,
    *,
    limit: int | None = None,
    offset: int | None = None,
    categoria_id: int | None = None,
    estado_participacion: str | None = None,
) -> list[PlayerSnapshot]:
    resolved_limit, resolved_offset = resolve_page(limit=limit, offset=offset)
    jugadores = await JugadoresRepo.list(
        session,
        limit=resolved_limit,
        offset=resolved_offset,
        categoria_id=categoria_id,
        estado_participacion=estado_participacion,
    )
    return [build_player_snapshot(jugador) for jugador in jugadores]


async def get_player(session: AsyncSession, *, jugador_id: int) -> PlayerSnapshot:
    jugador = await JugadoresRepo.get_by_id(session, jugador_id)
    if jugador is None:
        raise PlayerNotFoundError
    return build_player_snapshot(jugador)


async def create_player(
    session: AsyncSession,
    *,
    nombre: str,
    apellido: str,
    telefono_wsp: str | None = None,
    contacto_visible_en_web: bool = False,
    categoria_id: int | None = None,
    club: str | None = None,
    estado_participacion: str = PARTICIPATION_ACTIVE,
) -> PlayerSnapshot:
    await _ensure_category_exists(session, categoria_id)
    jugador = await JugadoresRepo.create(
        session,
        jugador=Jugador(
            nombre=nombre,
            apellido=apellido,
            telefono_wsp=telefono_wsp,
            contacto_visible_en_web=contacto_visible_en_web,
            categoria_id=categoria_id,
            club=club,
            estado_participacion=estado_participacion,
        ),
    )
    logger.info("player_created", jugador_id=jugador.id, categoria_id=categoria_id)
    return build_player_snapshot(jugador)


async def update_player(
    session: AsyncSession,
    *,
    jugador_id: int,
    changes: Mapping[str, Any],
) -> PlayerSnapshot:
    jugador = await JugadoresRepo.get_by_id(session, jugador_id)
    if jugador is None:
        raise PlayerNotFoundError
    if "categoria_id" in changes:
        await _ensure_category_exists(session, changes["categoria_id"])

    apply_changes(jugador, changes=changes, allowed=PLAYER_MUTABLE_FIELDS)
    await session.flush()
    return build_player_snapshot(jugador)


async def delete_player(session: AsyncSession, *, jugador_id: int) -> None:
    # matches and their sets cascade in the store
    if not await JugadoresRepo.delete_by_id(session, jugador_id):
        raise PlayerNotFoundError
    logger.info("player_deleted", jugador_id=jugador_id)
