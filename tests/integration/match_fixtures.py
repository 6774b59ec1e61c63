from __future__ import annotations

from dataclasses import dataclass

from copa_litoral.db.session import SessionLocal
from copa_litoral.league import service as league_service
from copa_litoral.matches import service as match_service


@dataclass(slots=True)
class SeededMatch:
    categoria_id: int
    jugador1_id: int
    jugador2_id: int
    outsider_id: int
    partido_id: int


async def seed_match(*, fase: str = "Fase de grupos") -> SeededMatch:
    async with SessionLocal.begin() as session:
        categoria = await league_service.create_category(session, nombre="Primera")
        jugador1 = await league_service.create_player(
            session,
            nombre="Ana",
            apellido="Lopez",
            categoria_id=categoria.categoria_id,
        )
        jugador2 = await league_service.create_player(
            session,
            nombre="Bea",
            apellido="Suarez",
            categoria_id=categoria.categoria_id,
        )
        outsider = await league_service.create_player(session, nombre="Carla", apellido="Ruiz")
        partido = await match_service.create_match(
            session,
            jugador1_id=jugador1.jugador_id,
            jugador2_id=jugador2.jugador_id,
            categoria_id=categoria.categoria_id,
            fase=fase,
        )
    return SeededMatch(
        categoria_id=categoria.categoria_id,
        jugador1_id=jugador1.jugador_id,
        jugador2_id=jugador2.jugador_id,
        outsider_id=outsider.jugador_id,
        partido_id=partido.partido_id,
    )
