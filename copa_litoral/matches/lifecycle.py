"""Match state machine.

Every mutation of a match's scheduling or result fields goes through one of
the ``apply_*`` functions below, which check the transition first and then
update ``estado`` together with the fields that depend on it. They work on
any object exposing the ``Partido`` attributes and never touch the database.
"""

from __future__ import annotations

from datetime import date, time
from typing import Any

from copa_litoral.matches.constants import (
    MATCH_SLOT_PLAYER_1,
    MATCH_SLOT_PLAYER_2,
    MatchAction,
    MatchStatus,
)
from copa_litoral.matches.errors import (
    InvalidMatchTransitionError,
    InvalidWinnerError,
    NoProposalError,
    NotParticipantError,
    ResultNotReportedError,
)

_ALL_STATUSES = frozenset(MatchStatus)

ALLOWED_FROM: dict[MatchAction, frozenset[MatchStatus]] = {
    MatchAction.UPDATE: _ALL_STATUSES - {MatchStatus.CANCELLED},
    MatchAction.PROPOSE_TIME: frozenset({MatchStatus.PENDING, MatchStatus.SCHEDULED}),
    MatchAction.ACCEPT_TIME: frozenset({MatchStatus.PENDING, MatchStatus.SCHEDULED}),
    MatchAction.REPORT_RESULT: frozenset(
        {MatchStatus.PENDING, MatchStatus.SCHEDULED, MatchStatus.DISPUTED}
    ),
    MatchAction.APPROVE_RESULT: frozenset({MatchStatus.FINISHED, MatchStatus.APPROVED}),
    MatchAction.DISPUTE_RESULT: frozenset({MatchStatus.FINISHED, MatchStatus.APPROVED}),
    MatchAction.CANCEL: _ALL_STATUSES - {MatchStatus.CANCELLED},
}


def current_status(partido: Any) -> MatchStatus:
    return MatchStatus(partido.estado)


def can_apply(status: MatchStatus | str, action: MatchAction) -> bool:
    return MatchStatus(status) in ALLOWED_FROM[action]


def ensure_can_apply(partido: Any, action: MatchAction) -> MatchStatus:
    status = current_status(partido)
    if not can_apply(status, action):
        raise InvalidMatchTransitionError(status=status.value, action=action.value)
    return status


def resolve_slot(partido: Any, jugador_id: int | None) -> int:
    if jugador_id is not None and jugador_id == partido.jugador1_id:
        return MATCH_SLOT_PLAYER_1
    if jugador_id is not None and jugador_id == partido.jugador2_id:
        return MATCH_SLOT_PLAYER_2
    raise NotParticipantError


def is_participant(partido: Any, jugador_id: int | None) -> bool:
    return jugador_id is not None and jugador_id in (partido.jugador1_id, partido.jugador2_id)


def status_for_schedule(*, fecha: date | None, hora: time | None) -> MatchStatus:
    if fecha is not None and hora is not None:
        return MatchStatus.SCHEDULED
    return MatchStatus.PENDING


def _opponent_slot(slot: int) -> int:
    return MATCH_SLOT_PLAYER_2 if slot == MATCH_SLOT_PLAYER_1 else MATCH_SLOT_PLAYER_1


def _proposal(partido: Any, slot: int) -> tuple[date | None, time | None]:
    return (
        getattr(partido, f"propuesta_fecha_j{slot}"),
        getattr(partido, f"propuesta_hora_j{slot}"),
    )


def apply_proposal(partido: Any, *, jugador_id: int, fecha: date, hora: time) -> int:
    slot = resolve_slot(partido, jugador_id)
    ensure_can_apply(partido, MatchAction.PROPOSE_TIME)

    setattr(partido, f"propuesta_fecha_j{slot}", fecha)
    setattr(partido, f"propuesta_hora_j{slot}", hora)
    # a new proposal withdraws any consent the opponent gave earlier
    setattr(partido, f"propuesta_aceptada_j{slot}", True)
    setattr(partido, f"propuesta_aceptada_j{_opponent_slot(slot)}", False)
    return slot


def apply_acceptance(partido: Any, *, jugador_id: int) -> bool:
    """Accept the opponent's proposal; returns True once the schedule is agreed."""
    slot = resolve_slot(partido, jugador_id)
    ensure_can_apply(partido, MatchAction.ACCEPT_TIME)

    opponent = _opponent_slot(slot)
    proposed_fecha, proposed_hora = _proposal(partido, opponent)
    if proposed_fecha is None or proposed_hora is None:
        raise NoProposalError

    setattr(partido, f"propuesta_aceptada_j{slot}", True)
    if not (partido.propuesta_aceptada_j1 and partido.propuesta_aceptada_j2):
        return False

    partido.fecha_agendada = proposed_fecha
    partido.hora_agendada = proposed_hora
    partido.estado = MatchStatus.SCHEDULED.value
    # only the promoted proposal stays on record
    setattr(partido, f"propuesta_fecha_j{slot}", None)
    setattr(partido, f"propuesta_hora_j{slot}", None)
    return True


def apply_agreed_schedule(partido: Any, *, fecha: date | None, hora: time | None) -> None:
    status = ensure_can_apply(partido, MatchAction.UPDATE)
    partido.fecha_agendada = fecha
    partido.hora_agendada = hora
    if status in (MatchStatus.PENDING, MatchStatus.SCHEDULED):
        partido.estado = status_for_schedule(fecha=fecha, hora=hora).value


def apply_result(
    partido: Any,
    *,
    sets_ganados_j1: int,
    sets_ganados_j2: int,
    ganador_id: int,
) -> MatchStatus:
    if ganador_id == partido.jugador1_id:
        perdedor_id = partido.jugador2_id
    elif ganador_id == partido.jugador2_id:
        perdedor_id = partido.jugador1_id
    else:
        raise InvalidWinnerError
    previous = ensure_can_apply(partido, MatchAction.REPORT_RESULT)

    partido.resultado_sets_j1 = sets_ganados_j1
    partido.resultado_sets_j2 = sets_ganados_j2
    partido.ganador_id = ganador_id
    partido.perdedor_id = perdedor_id
    partido.resultado_aprobado = False
    partido.estado = MatchStatus.FINISHED.value
    return previous


def has_reported_result(partido: Any) -> bool:
    return partido.ganador_id is not None and partido.perdedor_id is not None


def apply_approval(partido: Any) -> bool:
    """Returns False when the result was already approved."""
    status = current_status(partido)
    if status is MatchStatus.APPROVED:
        return False
    if status in (MatchStatus.PENDING, MatchStatus.SCHEDULED) or not has_reported_result(partido):
        raise ResultNotReportedError
    ensure_can_apply(partido, MatchAction.APPROVE_RESULT)

    partido.resultado_aprobado = True
    partido.estado = MatchStatus.APPROVED.value
    return True


def apply_dispute(partido: Any) -> None:
    ensure_can_apply(partido, MatchAction.DISPUTE_RESULT)
    partido.resultado_aprobado = False
    partido.estado = MatchStatus.DISPUTED.value


def apply_cancel(partido: Any) -> None:
    ensure_can_apply(partido, MatchAction.CANCEL)
    partido.resultado_aprobado = False
    partido.estado = MatchStatus.CANCELLED.value
