from __future__ import annotations

from collections.abc import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.sets_partido import SetPartido
from copa_litoral.db.repo.sets_partido_repo import SetsPartidoRepo
from copa_litoral.matches.constants import MatchStatus
from copa_litoral.matches.errors import NotParticipantError
from copa_litoral.matches.internal import flush_match, load_match_for_update
from copa_litoral.matches.lifecycle import (
    apply_approval,
    apply_cancel,
    apply_dispute,
    apply_result,
    is_participant,
)
from copa_litoral.matches.queries import get_match
from copa_litoral.matches.types import ApproveResultOutcome, MatchSnapshot, SetScore

logger = structlog.get_logger(__name__)


async def report_result(
    session: AsyncSession,
    *,
    partido_id: int,
    sets_ganados_j1: int,
    sets_ganados_j2: int,
    ganador_id: int,
    sets: Sequence[SetScore],
    reporter_jugador_id: int | None,
    reporter_is_admin: bool = False,
) -> MatchSnapshot:
    """Record a played result and its sets.

    Runs inside the caller's transaction: the match update and every set
    insert either all land or none do.
    """
    partido = await load_match_for_update(session, partido_id)
    if not reporter_is_admin and not is_participant(partido, reporter_jugador_id):
        raise NotParticipantError

    previous_status = apply_result(
        partido,
        sets_ganados_j1=sets_ganados_j1,
        sets_ganados_j2=sets_ganados_j2,
        ganador_id=ganador_id,
    )
    await flush_match(session)

    if previous_status is MatchStatus.DISPUTED:
        await SetsPartidoRepo.delete_for_partido(session, partido_id)
    await SetsPartidoRepo.create_many(
        session,
        sets=[
            SetPartido(
                partido_id=partido_id,
                numero_set=item.numero_set,
                score_jugador1=item.score_jugador1,
                score_jugador2=item.score_jugador2,
                tie_break_j1=item.tie_break_j1,
                tie_break_j2=item.tie_break_j2,
            )
            for item in sets
        ],
    )
    logger.info(
        "match_result_reported",
        partido_id=partido_id,
        ganador_id=ganador_id,
        sets_total=len(sets),
        reporter_jugador_id=reporter_jugador_id,
        reporter_is_admin=reporter_is_admin,
    )
    return await get_match(session, partido_id=partido_id)


async def approve_result(session: AsyncSession, *, partido_id: int) -> ApproveResultOutcome:
    partido = await load_match_for_update(session, partido_id)
    approved_now = apply_approval(partido)
    if approved_now:
        await flush_match(session)
        logger.info("match_result_approved", partido_id=partido_id)
    return ApproveResultOutcome(
        match=await get_match(session, partido_id=partido_id),
        approved_now=approved_now,
    )


async def dispute_result(session: AsyncSession, *, partido_id: int) -> MatchSnapshot:
    partido = await load_match_for_update(session, partido_id)
    apply_dispute(partido)
    await flush_match(session)
    logger.info("match_result_disputed", partido_id=partido_id)
    return await get_match(session, partido_id=partido_id)


async def cancel_match(session: AsyncSession, *, partido_id: int) -> MatchSnapshot:
    partido = await load_match_for_update(session, partido_id)
    apply_cancel(partido)
    await flush_match(session)
    logger.info("match_cancelled", partido_id=partido_id)
    return await get_match(session, partido_id=partido_id)
