from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.repo.partidos_repo import PartidosRepo
from copa_litoral.db.repo.sets_partido_repo import SetsPartidoRepo
from copa_litoral.league.internal import resolve_page
from copa_litoral.matches.constants import MatchStatus
from copa_litoral.matches.errors import MatchNotFoundError
from copa_litoral.matches.internal import build_match_snapshot
from copa_litoral.matches.types import MatchSnapshot


async def list_matches(
    session: AsyncSession,
    *,
    limit: int | None = None,
    offset: int | None = None,
    categoria_id: int | None = None,
    torneo_id: int | None = None,
    estado: MatchStatus | None = None,
    jugador_id: int | None = None,
) -> list[MatchSnapshot]:
    resolved_limit, resolved_offset = resolve_page(limit=limit, offset=offset)
    rows = await PartidosRepo.list_with_names(
        session,
        limit=resolved_limit,
        offset=resolved_offset,
        categoria_id=categoria_id,
        torneo_id=torneo_id,
        estado=estado.value if estado is not None else None,
        jugador_id=jugador_id,
    )
    return [
        build_match_snapshot(
            row.partido,
            jugador1_nombre=row.jugador1_nombre,
            jugador2_nombre=row.jugador2_nombre,
            categoria_nombre=row.categoria_nombre,
        )
        for row in rows
    ]


async def get_match(session: AsyncSession, *, partido_id: int) -> MatchSnapshot:
    row = await PartidosRepo.get_with_names(session, partido_id)
    if row is None:
        raise MatchNotFoundError
    sets = await SetsPartidoRepo.list_for_partido(session, partido_id)
    return build_match_snapshot(
        row.partido,
        jugador1_nombre=row.jugador1_nombre,
        jugador2_nombre=row.jugador2_nombre,
        categoria_nombre=row.categoria_nombre,
        sets=sets,
    )
