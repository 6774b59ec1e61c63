from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from copa_litoral.db.session import SessionLocal
from copa_litoral.league import service as league_service
from copa_litoral.league.errors import (
    CategoryNameTakenError,
    CategoryNotFoundError,
    PlayerNotFoundError,
    TournamentDatesError,
    TournamentNotFoundError,
)


@pytest.mark.asyncio
async def test_category_names_are_unique_on_create_and_rename() -> None:
    async with SessionLocal.begin() as session:
        await league_service.create_category(session, nombre="Primera")
        segunda = await league_service.create_category(session, nombre="Segunda")

    with pytest.raises(CategoryNameTakenError):
        async with SessionLocal.begin() as session:
            await league_service.create_category(session, nombre="Primera")

    with pytest.raises(CategoryNameTakenError):
        async with SessionLocal.begin() as session:
            await league_service.update_category(
                session,
                categoria_id=segunda.categoria_id,
                changes={"nombre": "Primera"},
            )

    async with SessionLocal.begin() as session:
        renamed = await league_service.update_category(
            session,
            categoria_id=segunda.categoria_id,
            changes={"nombre": "Segunda B"},
        )
    assert renamed.nombre == "Segunda B"


@pytest.mark.asyncio
async def test_category_in_use_cannot_be_deleted() -> None:
    async with SessionLocal.begin() as session:
        categoria = await league_service.create_category(session, nombre="Primera")
        await league_service.create_player(
            session,
            nombre="Ana",
            apellido="Lopez",
            categoria_id=categoria.categoria_id,
        )

    with pytest.raises(IntegrityError):
        async with SessionLocal.begin() as session:
            await league_service.delete_category(session, categoria_id=categoria.categoria_id)

    async with SessionLocal.begin() as session:
        still_there = await league_service.get_category(session, categoria_id=categoria.categoria_id)
    assert still_there.nombre == "Primera"


@pytest.mark.asyncio
async def test_unknown_category_is_reported() -> None:
    with pytest.raises(CategoryNotFoundError):
        async with SessionLocal.begin() as session:
            await league_service.create_player(session, nombre="Ana", apellido="Lopez", categoria_id=404)
    with pytest.raises(CategoryNotFoundError):
        async with SessionLocal.begin() as session:
            await league_service.delete_category(session, categoria_id=404)


@pytest.mark.asyncio
async def test_player_filters_and_partial_update() -> None:
    async with SessionLocal.begin() as session:
        categoria = await league_service.create_category(session, nombre="Primera")
        ana = await league_service.create_player(
            session,
            nombre="Ana",
            apellido="Lopez",
            categoria_id=categoria.categoria_id,
            telefono_wsp="+5493411234567",
        )
        await league_service.create_player(session, nombre="Bea", apellido="Suarez")

    async with SessionLocal.begin() as session:
        updated = await league_service.update_player(
            session,
            jugador_id=ana.jugador_id,
            changes={"estado_participacion": "Eliminado"},
        )
    assert updated.estado_participacion == "Eliminado"
    assert updated.telefono_wsp == "+5493411234567"
    assert updated.public_telefono_wsp is None

    async with SessionLocal.begin() as session:
        in_category = await league_service.list_players(session, categoria_id=categoria.categoria_id)
        eliminated = await league_service.list_players(session, estado_participacion="Eliminado")
        active = await league_service.list_players(session, estado_participacion="Activo")

    assert [item.jugador_id for item in in_category] == [ana.jugador_id]
    assert [item.jugador_id for item in eliminated] == [ana.jugador_id]
    assert [item.nombre for item in active] == ["Bea"]

    with pytest.raises(PlayerNotFoundError):
        async with SessionLocal.begin() as session:
            await league_service.get_player(session, jugador_id=404)


@pytest.mark.asyncio
async def test_tournament_dates_are_checked_against_stored_values() -> None:
    with pytest.raises(TournamentDatesError):
        async with SessionLocal.begin() as session:
            await league_service.create_tournament(
                session,
                nombre="Copa 2026",
                anio=2026,
                fecha_inicio=date(2026, 5, 1),
                fecha_fin=date(2026, 4, 1),
            )

    async with SessionLocal.begin() as session:
        torneo = await league_service.create_tournament(
            session,
            nombre="Copa 2026",
            anio=2026,
            fecha_inicio=date(2026, 5, 1),
            fecha_fin=date(2026, 6, 1),
        )

    with pytest.raises(TournamentDatesError):
        async with SessionLocal.begin() as session:
            await league_service.update_tournament(
                session,
                torneo_id=torneo.torneo_id,
                changes={"fecha_fin": date(2026, 4, 30)},
            )

    async with SessionLocal.begin() as session:
        closed = await league_service.update_tournament(
            session,
            torneo_id=torneo.torneo_id,
            changes={"activo": False},
        )
        active = await league_service.list_tournaments(session, activo=True)
    assert closed.activo is False
    assert active == []

    with pytest.raises(TournamentNotFoundError):
        async with SessionLocal.begin() as session:
            await league_service.delete_tournament(session, torneo_id=404)
