from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(slots=True)
class CategorySnapshot:
    categoria_id: int
    nombre: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class PlayerSnapshot:
    jugador_id: int
    nombre: str
    apellido: str
    telefono_wsp: str | None
    contacto_visible_en_web: bool
    categoria_id: int | None
    club: str | None
    estado_participacion: str
    created_at: datetime
    updated_at: datetime

    @property
    def public_telefono_wsp(self) -> str | None:
        if not self.contacto_visible_en_web:
            return None
        return self.telefono_wsp


@dataclass(slots=True)
class TournamentSnapshot:
    torneo_id: int
    nombre: str
    anio: int
    fecha_inicio: date | None
    fecha_fin: date | None
    foto_url: str | None
    frase_destacada: str | None
    activo: bool
    created_at: datetime
    updated_at: datetime
