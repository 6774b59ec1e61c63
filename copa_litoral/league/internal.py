from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from copa_litoral.db.models.categorias import Categoria
from copa_litoral.db.models.jugadores import Jugador
from copa_litoral.db.models.torneos import Torneo
from copa_litoral.league.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from copa_litoral.league.types import CategorySnapshot, PlayerSnapshot, TournamentSnapshot


def build_category_snapshot(categoria: Categoria) -> CategorySnapshot:
    return CategorySnapshot(
        categoria_id=categoria.id,
        nombre=categoria.nombre,
        created_at=categoria.created_at,
        updated_at=categoria.updated_at,
    )


def build_player_snapshot(jugador: Jugador) -> PlayerSnapshot:
    return PlayerSnapshot(
        jugador_id=jugador.id,
        nombre=jugador.nombre,
        apellido=jugador.apellido,
        telefono_wsp=jugador.telefono_wsp,
        contacto_visible_en_web=jugador.contacto_visible_en_web,
        categoria_id=jugador.categoria_id,
        club=jugador.club,
        estado_participacion=jugador.estado_participacion,
        created_at=jugador.created_at,
        updated_at=jugador.updated_at,
    )


def build_tournament_snapshot(torneo: Torneo) -> TournamentSnapshot:
    return TournamentSnapshot(
        torneo_id=torneo.id,
        nombre=torneo.nombre,
        anio=torneo.anio,
        fecha_inicio=torneo.fecha_inicio,
        fecha_fin=torneo.fecha_fin,
        foto_url=torneo.foto_url,
        frase_destacada=torneo.frase_destacada,
        activo=torneo.activo,
        created_at=torneo.created_at,
        updated_at=torneo.updated_at,
    )


def resolve_page(*, limit: int | None, offset: int | None) -> tuple[int, int]:
    resolved_limit = DEFAULT_PAGE_LIMIT if limit is None else max(1, min(int(limit), MAX_PAGE_LIMIT))
    resolved_offset = 0 if offset is None else max(0, int(offset))
    return resolved_limit, resolved_offset


def apply_changes(model: Any, *, changes: Mapping[str, Any], allowed: Iterable[str]) -> list[str]:
    allowed_fields = frozenset(allowed)
    unknown = sorted(set(changes) - allowed_fields)
    if unknown:
        raise ValueError(f"unsupported fields: {', '.join(unknown)}")

    changed: list[str] = []
    for field_name, value in changes.items():
        if getattr(model, field_name) != value:
            setattr(model, field_name, value)
            changed.append(field_name)
    return changed
