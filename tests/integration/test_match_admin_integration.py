from __future__ import annotations

from datetime import date, time

import pytest

from copa_litoral.db.session import SessionLocal
from copa_litoral.league import service as league_service
from copa_litoral.matches import service as match_service
from copa_litoral.matches.constants import MatchStatus
from copa_litoral.matches.errors import (
    InvalidMatchTransitionError,
    MatchNotFoundError,
    MatchReferenceNotFoundError,
    MatchSamePlayerError,
)
from copa_litoral.matches.types import SetScore
from tests.integration.match_fixtures import seed_match


@pytest.mark.asyncio
async def test_create_match_with_schedule_starts_scheduled() -> None:
    seeded = await seed_match()

    async with SessionLocal.begin() as session:
        partido = await match_service.create_match(
            session,
            jugador1_id=seeded.jugador1_id,
            jugador2_id=seeded.outsider_id,
            fase="Cuartos",
            fecha_agendada=date(2026, 12, 1),
            hora_agendada=time(19, 0),
        )

    assert partido.estado == MatchStatus.SCHEDULED.value
    assert partido.version == 1
    assert partido.categoria_id is None


@pytest.mark.asyncio
async def test_create_match_rejects_same_player_and_missing_references() -> None:
    seeded = await seed_match()

    with pytest.raises(MatchSamePlayerError):
        async with SessionLocal.begin() as session:
            await match_service.create_match(
                session,
                jugador1_id=seeded.jugador1_id,
                jugador2_id=seeded.jugador1_id,
                fase="Final",
            )

    with pytest.raises(MatchReferenceNotFoundError) as exc_info:
        async with SessionLocal.begin() as session:
            await match_service.create_match(
                session,
                jugador1_id=seeded.jugador1_id,
                jugador2_id=seeded.jugador2_id,
                torneo_id=404,
                fase="Final",
            )
    assert exc_info.value.reference == "torneo_id"

    with pytest.raises(MatchReferenceNotFoundError) as exc_info:
        async with SessionLocal.begin() as session:
            await match_service.create_match(
                session,
                jugador1_id=seeded.jugador1_id,
                jugador2_id=404,
                fase="Final",
            )
    assert exc_info.value.reference == "jugador_id"


@pytest.mark.asyncio
async def test_list_matches_filters_and_orders_newest_first() -> None:
    seeded = await seed_match()
    async with SessionLocal.begin() as session:
        second = await match_service.create_match(
            session,
            jugador1_id=seeded.jugador2_id,
            jugador2_id=seeded.outsider_id,
            fase="Semifinal",
        )

    async with SessionLocal.begin() as session:
        everything = await match_service.list_matches(session)
        for_outsider = await match_service.list_matches(session, jugador_id=seeded.outsider_id)
        for_category = await match_service.list_matches(session, categoria_id=seeded.categoria_id)
        scheduled = await match_service.list_matches(session, estado=MatchStatus.SCHEDULED)

    assert [item.partido_id for item in everything] == [second.partido_id, seeded.partido_id]
    assert [item.partido_id for item in for_outsider] == [second.partido_id]
    assert [item.partido_id for item in for_category] == [seeded.partido_id]
    assert scheduled == []
    assert everything[1].jugador2_nombre == "Bea Suarez"


@pytest.mark.asyncio
async def test_update_match_players_clears_proposals() -> None:
    seeded = await seed_match()
    async with SessionLocal.begin() as session:
        await match_service.propose_time(
            session,
            partido_id=seeded.partido_id,
            jugador_id=seeded.jugador1_id,
            fecha=date(2026, 11, 7),
            hora=time(17, 30),
        )

    async with SessionLocal.begin() as session:
        updated = await match_service.update_match(
            session,
            partido_id=seeded.partido_id,
            changes={"jugador2_id": seeded.outsider_id, "fase": "Repechaje"},
        )

    assert updated.jugador2_id == seeded.outsider_id
    assert updated.fase == "Repechaje"
    assert updated.propuesta_j1.fecha is None
    assert updated.propuesta_j1.aceptada is False


@pytest.mark.asyncio
async def test_update_match_schedule_sets_scheduled_state() -> None:
    seeded = await seed_match()

    async with SessionLocal.begin() as session:
        updated = await match_service.update_match(
            session,
            partido_id=seeded.partido_id,
            changes={"fecha_agendada": date(2026, 12, 5), "hora_agendada": time(8, 0)},
        )

    assert updated.estado == MatchStatus.SCHEDULED.value
    assert updated.fecha_agendada == date(2026, 12, 5)


@pytest.mark.asyncio
async def test_players_cannot_change_once_result_reported() -> None:
    seeded = await seed_match()
    async with SessionLocal.begin() as session:
        await match_service.report_result(
            session,
            partido_id=seeded.partido_id,
            sets_ganados_j1=2,
            sets_ganados_j2=0,
            ganador_id=seeded.jugador1_id,
            sets=[SetScore(numero_set=1, score_jugador1=6, score_jugador2=0)],
            reporter_jugador_id=seeded.jugador1_id,
        )

    with pytest.raises(InvalidMatchTransitionError):
        async with SessionLocal.begin() as session:
            await match_service.update_match(
                session,
                partido_id=seeded.partido_id,
                changes={"jugador2_id": seeded.outsider_id},
            )


@pytest.mark.asyncio
async def test_delete_match_cascades_sets_and_player_delete_cascades_matches() -> None:
    seeded = await seed_match()
    async with SessionLocal.begin() as session:
        await match_service.report_result(
            session,
            partido_id=seeded.partido_id,
            sets_ganados_j1=1,
            sets_ganados_j2=0,
            ganador_id=seeded.jugador1_id,
            sets=[SetScore(numero_set=1, score_jugador1=6, score_jugador2=1)],
            reporter_jugador_id=seeded.jugador1_id,
        )
        other = await match_service.create_match(
            session,
            jugador1_id=seeded.jugador2_id,
            jugador2_id=seeded.outsider_id,
            fase="Final",
        )

    async with SessionLocal.begin() as session:
        await match_service.delete_match(session, partido_id=seeded.partido_id)
    with pytest.raises(MatchNotFoundError):
        async with SessionLocal.begin() as session:
            await match_service.delete_match(session, partido_id=seeded.partido_id)

    async with SessionLocal.begin() as session:
        await league_service.delete_player(session, jugador_id=seeded.outsider_id)
    async with SessionLocal.begin() as session:
        remaining = await match_service.list_matches(session)
    assert other.partido_id not in [item.partido_id for item in remaining]
