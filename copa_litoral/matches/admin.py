from __future__ import annotations

from collections.abc import Mapping
from datetime import date, time
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.partidos import Partido
from copa_litoral.db.repo.categorias_repo import CategoriasRepo
from copa_litoral.db.repo.jugadores_repo import JugadoresRepo
from copa_litoral.db.repo.partidos_repo import PartidosRepo
from copa_litoral.db.repo.torneos_repo import TorneosRepo
from copa_litoral.matches.constants import MatchAction, MatchStatus
from copa_litoral.matches.errors import (
    InvalidMatchTransitionError,
    MatchNotFoundError,
    MatchReferenceNotFoundError,
    MatchSamePlayerError,
)
from copa_litoral.matches.internal import flush_match, load_match_for_update
from copa_litoral.matches.lifecycle import apply_agreed_schedule, ensure_can_apply, status_for_schedule
from copa_litoral.matches.queries import get_match
from copa_litoral.matches.types import MatchSnapshot

logger = structlog.get_logger(__name__)

MATCH_DETAIL_FIELDS = frozenset({"torneo_id", "categoria_id", "fase"})
MATCH_PLAYER_FIELDS = frozenset({"jugador1_id", "jugador2_id"})
MATCH_SCHEDULE_FIELDS = frozenset({"fecha_agendada", "hora_agendada"})
MATCH_MUTABLE_FIELDS = MATCH_DETAIL_FIELDS | MATCH_PLAYER_FIELDS | MATCH_SCHEDULE_FIELDS


async def _ensure_references(
    session: AsyncSession,
    *,
    torneo_id: int | None = None,
    categoria_id: int | None = None,
    jugador_ids: tuple[int, ...] = (),
) -> None:
    if torneo_id is not None and await TorneosRepo.get_by_id(session, torneo_id) is None:
        raise MatchReferenceNotFoundError("torneo_id")
    if categoria_id is not None and await CategoriasRepo.get_by_id(session, categoria_id) is None:
        raise MatchReferenceNotFoundError("categoria_id")
    for jugador_id in jugador_ids:
        if await JugadoresRepo.get_by_id(session, jugador_id) is None:
            raise MatchReferenceNotFoundError("jugador_id")


async def create_match(
    session: AsyncSession,
    *,
    jugador1_id: int,
    jugador2_id: int,
    fase: str,
    torneo_id: int | None = None,
    categoria_id: int | None = None,
    fecha_agendada: date | None = None,
    hora_agendada: time | None = None,
) -> MatchSnapshot:
    if jugador1_id == jugador2_id:
        raise MatchSamePlayerError
    await _ensure_references(
        session,
        torneo_id=torneo_id,
        categoria_id=categoria_id,
        jugador_ids=(jugador1_id, jugador2_id),
    )

    partido = await PartidosRepo.create(
        session,
        partido=Partido(
            torneo_id=torneo_id,
            categoria_id=categoria_id,
            jugador1_id=jugador1_id,
            jugador2_id=jugador2_id,
            fase=fase,
            fecha_agendada=fecha_agendada,
            hora_agendada=hora_agendada,
            estado=status_for_schedule(fecha=fecha_agendada, hora=hora_agendada).value,
            propuesta_aceptada_j1=False,
            propuesta_aceptada_j2=False,
            resultado_aprobado=False,
        ),
    )
    logger.info(
        "match_created",
        partido_id=partido.id,
        torneo_id=torneo_id,
        categoria_id=categoria_id,
        estado=partido.estado,
    )
    return await get_match(session, partido_id=partido.id)


async def update_match(
    session: AsyncSession,
    *,
    partido_id: int,
    changes: Mapping[str, Any],
) -> MatchSnapshot:
    unknown = sorted(set(changes) - MATCH_MUTABLE_FIELDS)
    if unknown:
        raise ValueError(f"unsupported fields: {', '.join(unknown)}")

    partido = await load_match_for_update(session, partido_id)
    status = ensure_can_apply(partido, MatchAction.UPDATE)

    await _ensure_references(
        session,
        torneo_id=changes.get("torneo_id"),
        categoria_id=changes.get("categoria_id"),
        jugador_ids=tuple(
            changes[field_name]
            for field_name in sorted(MATCH_PLAYER_FIELDS)
            if changes.get(field_name) is not None
        ),
    )

    for field_name in MATCH_DETAIL_FIELDS:
        if field_name in changes:
            setattr(partido, field_name, changes[field_name])

    if MATCH_PLAYER_FIELDS & set(changes):
        if status not in (MatchStatus.PENDING, MatchStatus.SCHEDULED):
            raise InvalidMatchTransitionError(status=status.value, action="change_players")
        jugador1_id = changes.get("jugador1_id", partido.jugador1_id)
        jugador2_id = changes.get("jugador2_id", partido.jugador2_id)
        if jugador1_id == jugador2_id:
            raise MatchSamePlayerError
        partido.jugador1_id = jugador1_id
        partido.jugador2_id = jugador2_id
        # proposals belonged to the previous pairing
        partido.propuesta_fecha_j1 = None
        partido.propuesta_hora_j1 = None
        partido.propuesta_fecha_j2 = None
        partido.propuesta_hora_j2 = None
        partido.propuesta_aceptada_j1 = False
        partido.propuesta_aceptada_j2 = False

    if MATCH_SCHEDULE_FIELDS & set(changes):
        apply_agreed_schedule(
            partido,
            fecha=changes.get("fecha_agendada", partido.fecha_agendada),
            hora=changes.get("hora_agendada", partido.hora_agendada),
        )

    await flush_match(session)
    logger.info("match_updated", partido_id=partido_id, fields=sorted(changes))
    return await get_match(session, partido_id=partido_id)


async def delete_match(session: AsyncSession, *, partido_id: int) -> None:
    if not await PartidosRepo.delete_by_id(session, partido_id):
        raise MatchNotFoundError
    logger.info("match_deleted", partido_id=partido_id)
