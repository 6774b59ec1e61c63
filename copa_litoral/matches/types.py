from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time


@dataclass(slots=True)
class SetScore:
    numero_set: int
    score_jugador1: int
    score_jugador2: int
    tie_break_j1: int | None = None
    tie_break_j2: int | None = None


@dataclass(slots=True)
class SetSnapshot:
    set_id: int
    numero_set: int
    score_jugador1: int
    score_jugador2: int
    tie_break_j1: int | None
    tie_break_j2: int | None


@dataclass(slots=True)
class ProposalSnapshot:
    fecha: date | None
    hora: time | None
    aceptada: bool


@dataclass(slots=True)
class MatchSnapshot:
    partido_id: int
    torneo_id: int | None
    categoria_id: int | None
    jugador1_id: int
    jugador2_id: int
    fase: str
    fecha_agendada: date | None
    hora_agendada: time | None
    propuesta_j1: ProposalSnapshot
    propuesta_j2: ProposalSnapshot
    estado: str
    resultado_sets_j1: int | None
    resultado_sets_j2: int | None
    ganador_id: int | None
    perdedor_id: int | None
    resultado_aprobado: bool
    version: int
    created_at: datetime
    updated_at: datetime
    jugador1_nombre: str | None = None
    jugador2_nombre: str | None = None
    categoria_nombre: str | None = None
    sets: tuple[SetSnapshot, ...] = ()


@dataclass(slots=True)
class AcceptTimeResult:
    match: MatchSnapshot
    schedule_agreed: bool


@dataclass(slots=True)
class ApproveResultOutcome:
    match: MatchSnapshot
    approved_now: bool
