from __future__ import annotations

from datetime import date, time

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.matches.internal import flush_match, load_match_for_update
from copa_litoral.matches.lifecycle import apply_acceptance, apply_proposal
from copa_litoral.matches.queries import get_match
from copa_litoral.matches.types import AcceptTimeResult, MatchSnapshot

logger = structlog.get_logger(__name__)


async def propose_time(
    session: AsyncSession,
    *,
    partido_id: int,
    jugador_id: int,
    fecha: date,
    hora: time,
) -> MatchSnapshot:
    partido = await load_match_for_update(session, partido_id)
    slot = apply_proposal(partido, jugador_id=jugador_id, fecha=fecha, hora=hora)
    await flush_match(session)
    logger.info(
        "match_time_proposed",
        partido_id=partido_id,
        jugador_id=jugador_id,
        slot=slot,
    )
    return await get_match(session, partido_id=partido_id)


async def accept_time(
    session: AsyncSession,
    *,
    partido_id: int,
    jugador_id: int,
) -> AcceptTimeResult:
    partido = await load_match_for_update(session, partido_id)
    schedule_agreed = apply_acceptance(partido, jugador_id=jugador_id)
    await flush_match(session)
    logger.info(
        "match_time_accepted",
        partido_id=partido_id,
        jugador_id=jugador_id,
        schedule_agreed=schedule_agreed,
    )
    return AcceptTimeResult(
        match=await get_match(session, partido_id=partido_id),
        schedule_agreed=schedule_agreed,
    )
