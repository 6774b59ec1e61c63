from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from copa_litoral.db.models.partidos import Partido
from copa_litoral.db.models.sets_partido import SetPartido
from copa_litoral.db.repo.partidos_repo import PartidosRepo
from copa_litoral.matches.errors import MatchConcurrentUpdateError, MatchNotFoundError
from copa_litoral.matches.types import MatchSnapshot, ProposalSnapshot, SetSnapshot


def build_set_snapshot(set_partido: SetPartido) -> SetSnapshot:
    return SetSnapshot(
        set_id=set_partido.id,
        numero_set=set_partido.numero_set,
        score_jugador1=set_partido.score_jugador1,
        score_jugador2=set_partido.score_jugador2,
        tie_break_j1=set_partido.tie_break_j1,
        tie_break_j2=set_partido.tie_break_j2,
    )


def build_match_snapshot(
    partido: Partido,
    *,
    jugador1_nombre: str | None = None,
    jugador2_nombre: str | None = None,
    categoria_nombre: str | None = None,
    sets: Sequence[SetPartido] = (),
) -> MatchSnapshot:
    return MatchSnapshot(
        partido_id=partido.id,
        torneo_id=partido.torneo_id,
        categoria_id=partido.categoria_id,
        jugador1_id=partido.jugador1_id,
        jugador2_id=partido.jugador2_id,
        fase=partido.fase,
        fecha_agendada=partido.fecha_agendada,
        hora_agendada=partido.hora_agendada,
        propuesta_j1=ProposalSnapshot(
            fecha=partido.propuesta_fecha_j1,
            hora=partido.propuesta_hora_j1,
            aceptada=partido.propuesta_aceptada_j1,
        ),
        propuesta_j2=ProposalSnapshot(
            fecha=partido.propuesta_fecha_j2,
            hora=partido.propuesta_hora_j2,
            aceptada=partido.propuesta_aceptada_j2,
        ),
        estado=partido.estado,
        resultado_sets_j1=partido.resultado_sets_j1,
        resultado_sets_j2=partido.resultado_sets_j2,
        ganador_id=partido.ganador_id,
        perdedor_id=partido.perdedor_id,
        resultado_aprobado=partido.resultado_aprobado,
        version=partido.version,
        created_at=partido.created_at,
        updated_at=partido.updated_at,
        jugador1_nombre=jugador1_nombre,
        jugador2_nombre=jugador2_nombre,
        categoria_nombre=categoria_nombre,
        sets=tuple(build_set_snapshot(item) for item in sets),
    )


async def load_match_for_update(session: AsyncSession, partido_id: int) -> Partido:
    partido = await PartidosRepo.get_by_id_for_update(session, partido_id)
    if partido is None:
        raise MatchNotFoundError
    return partido


async def flush_match(session: AsyncSession) -> None:
    # partidos.version turns every UPDATE into a compare-and-swap
    try:
        await session.flush()
    except StaleDataError as exc:
        raise MatchConcurrentUpdateError from exc
