from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.torneos import Torneo
from copa_litoral.db.repo.torneos_repo import TorneosRepo
from copa_litoral.league.constants import TOURNAMENT_MUTABLE_FIELDS
from copa_litoral.league.errors import TournamentDatesError, TournamentNotFoundError
from copa_litoral.league.internal import apply_changes, build_tournament_snapshot, resolve_page
from copa_litoral.league.types import TournamentSnapshot

logger = structlog.get_logger(__name__)


def _check_dates(*, fecha_inicio: date | None, fecha_fin: date | None) -> None:
    if fecha_inicio is not None and fecha_fin is not None and fecha_fin < fecha_inicio:
        raise TournamentDatesError


async def list_tournaments(
    session: AsyncSession,
    *,
    limit: int | None = None,
    offset: int | None = None,
    activo: bool | None = None,
) -> list[TournamentSnapshot]:
    resolved_limit, resolved_offset = resolve_page(limit=limit, offset=offset)
    torneos = await TorneosRepo.list(
        session,
        limit=resolved_limit,
        offset=resolved_offset,
        activo=activo,
    )
    return [build_tournament_snapshot(torneo) for torneo in torneos]


async def get_tournament(session: AsyncSession, *, torneo_id: int) -> TournamentSnapshot:
    torneo = await TorneosRepo.get_by_id(session, torneo_id)
    if torneo is None:
        raise TournamentNotFoundError
    return build_tournament_snapshot(torneo)


async def create_tournament(
    session: AsyncSession,
    *,
    nombre: str,
    anio: int,
    fecha_inicio: date | None = None,
    fecha_fin: date | None = None,
    foto_url: str | None = None,
    frase_destacada: str | None = None,
    activo: bool = True,
) -> TournamentSnapshot:
    _check_dates(fecha_inicio=fecha_inicio, fecha_fin=fecha_fin)
    torneo = await TorneosRepo.create(
        session,
        torneo=Torneo(
            nombre=nombre,
            anio=anio,
            fecha_inicio=fecha_inicio,
            fecha_fin=fecha_fin,
            foto_url=foto_url,
            frase_destacada=frase_destacada,
            activo=activo,
        ),
    )
    logger.info("tournament_created", torneo_id=torneo.id, anio=anio)
    return build_tournament_snapshot(torneo)


async def update_tournament(
    session: AsyncSession,
    *,
    torneo_id: int,
    changes: Mapping[str, Any],
) -> TournamentSnapshot:
    torneo = await TorneosRepo.get_by_id(session, torneo_id)
    if torneo is None:
        raise TournamentNotFoundError

    _check_dates(
        fecha_inicio=changes.get("fecha_inicio", torneo.fecha_inicio),
        fecha_fin=changes.get("fecha_fin", torneo.fecha_fin),
    )
    apply_changes(torneo, changes=changes, allowed=TOURNAMENT_MUTABLE_FIELDS)
    await session.flush()
    return build_tournament_snapshot(torneo)


async def delete_tournament(session: AsyncSession, *, torneo_id: int) -> None:
    if not await TorneosRepo.delete_by_id(session, torneo_id):
        raise TournamentNotFoundError
    logger.info("tournament_deleted", torneo_id=torneo_id)
