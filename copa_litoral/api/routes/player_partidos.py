from __future__ import annotations

from datetime import date, time

from fastapi import APIRouter, Depends, Path, status
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.accounts.constants import ROLE_ADMIN
from copa_litoral.accounts.errors import AccountNotFoundError
from copa_litoral.accounts.service import AccountService
from copa_litoral.accounts.types import TokenClaims
from copa_litoral.api.deps import get_current_identity
from copa_litoral.api.envelope import ApiResponse, StrictRequest, envelope
from copa_litoral.api.errors import (
    FORBIDDEN,
    INVALID_TOKEN,
    INVALID_WINNER,
    RESOURCE_CONFLICT,
    api_error,
)
from copa_litoral.api.routes.partidos import PartidoResponse, as_partido_response, match_conflict, match_not_found
from copa_litoral.db.session import SessionLocal
from copa_litoral.matches import service as match_service
from copa_litoral.matches.constants import MATCH_MAX_SETS
from copa_litoral.matches.errors import (
    InvalidMatchTransitionError,
    InvalidWinnerError,
    MatchConcurrentUpdateError,
    MatchNotFoundError,
    NoProposalError,
    NotParticipantError,
)
from copa_litoral.matches.types import SetScore

router = APIRouter(prefix="/api/v1/player", tags=["player"])


class ProposeTimeRequest(StrictRequest):
    fecha: date
    hora: time


class SetScoreRequest(StrictRequest):
    numero_set: int = Field(ge=1, le=MATCH_MAX_SETS)
    score_jugador1: int = Field(ge=0, le=99)
    score_jugador2: int = Field(ge=0, le=99)
    tie_break_j1: int | None = Field(default=None, ge=0, le=99)
    tie_break_j2: int | None = Field(default=None, ge=0, le=99)


class ReportResultRequest(StrictRequest):
    sets_ganados_j1: int = Field(ge=0, le=MATCH_MAX_SETS)
    sets_ganados_j2: int = Field(ge=0, le=MATCH_MAX_SETS)
    ganador_id: int = Field(gt=0)
    sets: list[SetScoreRequest] = Field(min_length=1, max_length=MATCH_MAX_SETS)


async def _acting_jugador_id(session: AsyncSession, identity: TokenClaims) -> int | None:
    try:
        account = await AccountService.get_account(session, account_id=identity.user_id)
    except AccountNotFoundError as exc:
        raise api_error(status.HTTP_401_UNAUTHORIZED, INVALID_TOKEN) from exc
    return account.jugador_id


def _no_linked_player() -> Exception:
    return api_error(
        status.HTTP_403_FORBIDDEN,
        FORBIDDEN,
        "la cuenta no está vinculada a ningún jugador",
    )


def _not_participant() -> Exception:
    return api_error(
        status.HTTP_403_FORBIDDEN,
        FORBIDDEN,
        "solo los jugadores del partido pueden realizar esta acción",
    )


@router.post("/partidos/{partido_id}/propose-time", response_model=ApiResponse[PartidoResponse])
async def propose_time(
    payload: ProposeTimeRequest,
    partido_id: int = Path(gt=0),
    identity: TokenClaims = Depends(get_current_identity),
) -> ApiResponse[PartidoResponse]:
    try:
        async with SessionLocal.begin() as session:
            jugador_id = await _acting_jugador_id(session, identity)
            if jugador_id is None:
                raise _no_linked_player()
            partido = await match_service.propose_time(
                session,
                partido_id=partido_id,
                jugador_id=jugador_id,
                fecha=payload.fecha,
                hora=payload.hora,
            )
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    except NotParticipantError as exc:
        raise _not_participant() from exc
    except (InvalidMatchTransitionError, MatchConcurrentUpdateError) as exc:
        raise match_conflict(exc) from exc
    return envelope(as_partido_response(partido), message="horario propuesto exitosamente")


@router.post("/partidos/{partido_id}/accept-time", response_model=ApiResponse[PartidoResponse])
async def accept_time(
    partido_id: int = Path(gt=0),
    identity: TokenClaims = Depends(get_current_identity),
) -> ApiResponse[PartidoResponse]:
    try:
        async with SessionLocal.begin() as session:
            jugador_id = await _acting_jugador_id(session, identity)
            if jugador_id is None:
                raise _no_linked_player()
            result = await match_service.accept_time(
                session,
                partido_id=partido_id,
                jugador_id=jugador_id,
            )
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    except NotParticipantError as exc:
        raise _not_participant() from exc
    except NoProposalError as exc:
        raise api_error(
            status.HTTP_409_CONFLICT,
            RESOURCE_CONFLICT,
            "el rival todavía no propuso un horario",
        ) from exc
    except (InvalidMatchTransitionError, MatchConcurrentUpdateError) as exc:
        raise match_conflict(exc) from exc

    message = "horario acordado, partido agendado" if result.schedule_agreed else "propuesta aceptada"
    return envelope(as_partido_response(result.match), message=message)


@router.post("/partidos/{partido_id}/report-result", response_model=ApiResponse[PartidoResponse])
async def report_result(
    payload: ReportResultRequest,
    partido_id: int = Path(gt=0),
    identity: TokenClaims = Depends(get_current_identity),
) -> ApiResponse[PartidoResponse]:
    is_admin = identity.role == ROLE_ADMIN
    try:
        async with SessionLocal.begin() as session:
            jugador_id = await _acting_jugador_id(session, identity)
            if jugador_id is None and not is_admin:
                raise _no_linked_player()
            partido = await match_service.report_result(
                session,
                partido_id=partido_id,
                sets_ganados_j1=payload.sets_ganados_j1,
                sets_ganados_j2=payload.sets_ganados_j2,
                ganador_id=payload.ganador_id,
                sets=[SetScore(**item.model_dump()) for item in payload.sets],
                reporter_jugador_id=jugador_id,
                reporter_is_admin=is_admin,
            )
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    except NotParticipantError as exc:
        raise _not_participant() from exc
    except InvalidWinnerError as exc:
        raise api_error(422, INVALID_WINNER, field="ganador_id") from exc
    except (InvalidMatchTransitionError, MatchConcurrentUpdateError) as exc:
        raise match_conflict(exc) from exc

    return envelope(as_partido_response(partido, include_sets=True), message="resultado reportado exitosamente")
