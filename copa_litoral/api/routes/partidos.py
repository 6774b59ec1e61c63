from __future__ import annotations

from datetime import date, datetime, time

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, Field

from copa_litoral.accounts.types import TokenClaims
from copa_litoral.api.deps import require_admin
from copa_litoral.api.envelope import ApiResponse, StrictRequest, envelope
from copa_litoral.api.errors import (
    RESOURCE_CONFLICT,
    RESOURCE_NOT_FOUND,
    VALIDATION_FAILED,
    api_error,
    reject_null_fields,
)
from copa_litoral.core.validation import SanitizedText
from copa_litoral.db.session import SessionLocal
from copa_litoral.league.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from copa_litoral.matches import service as match_service
from copa_litoral.matches.constants import MatchStatus
from copa_litoral.matches.errors import (
    InvalidMatchTransitionError,
    MatchConcurrentUpdateError,
    MatchNotFoundError,
    MatchReferenceNotFoundError,
    MatchSamePlayerError,
    ResultNotReportedError,
)
from copa_litoral.matches.types import MatchSnapshot

router = APIRouter(prefix="/api/v1", tags=["partidos"])


class SetResponse(BaseModel):
    id: int
    numero_set: int
    score_jugador1: int
    score_jugador2: int
    tie_break_j1: int | None = None
    tie_break_j2: int | None = None


class PartidoResponse(BaseModel):
    id: int
    torneo_id: int | None = None
    categoria_id: int | None = None
    jugador1_id: int
    jugador2_id: int
    jugador1_nombre: str | None = None
    jugador2_nombre: str | None = None
    categoria_nombre: str | None = None
    fase: str
    fecha_agendada: date | None = None
    hora_agendada: time | None = None
    propuesta_fecha_j1: date | None = None
    propuesta_hora_j1: time | None = None
    propuesta_fecha_j2: date | None = None
    propuesta_hora_j2: time | None = None
    propuesta_aceptada_j1: bool
    propuesta_aceptada_j2: bool
    estado: MatchStatus
    resultado_sets_j1: int | None = None
    resultado_sets_j2: int | None = None
    ganador_id: int | None = None
    perdedor_id: int | None = None
    resultado_aprobado: bool
    version: int
    created_at: datetime
    updated_at: datetime
    sets: list[SetResponse] | None = None


class PartidoCreateRequest(StrictRequest):
    torneo_id: int | None = Field(default=None, gt=0)
    categoria_id: int | None = Field(default=None, gt=0)
    jugador1_id: int = Field(gt=0)
    jugador2_id: int = Field(gt=0)
    fase: SanitizedText = Field(min_length=1, max_length=100)
    fecha_agendada: date | None = None
    hora_agendada: time | None = None


class PartidoUpdateRequest(StrictRequest):
    torneo_id: int | None = Field(default=None, gt=0)
    categoria_id: int | None = Field(default=None, gt=0)
    jugador1_id: int | None = Field(default=None, gt=0)
    jugador2_id: int | None = Field(default=None, gt=0)
    fase: SanitizedText | None = Field(default=None, min_length=1, max_length=100)
    fecha_agendada: date | None = None
    hora_agendada: time | None = None


_NON_NULLABLE_UPDATE_FIELDS = ("jugador1_id", "jugador2_id", "fase")


def as_partido_response(partido: MatchSnapshot, *, include_sets: bool = False) -> PartidoResponse:
    return PartidoResponse(
        id=partido.partido_id,
        torneo_id=partido.torneo_id,
        categoria_id=partido.categoria_id,
        jugador1_id=partido.jugador1_id,
        jugador2_id=partido.jugador2_id,
        jugador1_nombre=partido.jugador1_nombre,
        jugador2_nombre=partido.jugador2_nombre,
        categoria_nombre=partido.categoria_nombre,
        fase=partido.fase,
        fecha_agendada=partido.fecha_agendada,
        hora_agendada=partido.hora_agendada,
        propuesta_fecha_j1=partido.propuesta_j1.fecha,
        propuesta_hora_j1=partido.propuesta_j1.hora,
        propuesta_fecha_j2=partido.propuesta_j2.fecha,
        propuesta_hora_j2=partido.propuesta_j2.hora,
        propuesta_aceptada_j1=partido.propuesta_j1.aceptada,
        propuesta_aceptada_j2=partido.propuesta_j2.aceptada,
        estado=MatchStatus(partido.estado),
        resultado_sets_j1=partido.resultado_sets_j1,
        resultado_sets_j2=partido.resultado_sets_j2,
        ganador_id=partido.ganador_id,
        perdedor_id=partido.perdedor_id,
        resultado_aprobado=partido.resultado_aprobado,
        version=partido.version,
        created_at=partido.created_at,
        updated_at=partido.updated_at,
        sets=(
            [
                SetResponse(
                    id=item.set_id,
                    numero_set=item.numero_set,
                    score_jugador1=item.score_jugador1,
                    score_jugador2=item.score_jugador2,
                    tie_break_j1=item.tie_break_j1,
                    tie_break_j2=item.tie_break_j2,
                )
                for item in partido.sets
            ]
            if include_sets
            else None
        ),
    )


def match_not_found() -> Exception:
    return api_error(status.HTTP_404_NOT_FOUND, RESOURCE_NOT_FOUND, "partido no encontrado")


def match_conflict(exc: Exception) -> Exception:
    if isinstance(exc, InvalidMatchTransitionError):
        message = f"operación no permitida: el partido está en estado {exc.status}"
    elif isinstance(exc, ResultNotReportedError):
        message = "el partido no tiene un resultado reportado"
    elif isinstance(exc, MatchConcurrentUpdateError):
        message = "el partido fue modificado por otra solicitud, reintente"
    else:
        message = None
    return api_error(status.HTTP_409_CONFLICT, RESOURCE_CONFLICT, message)


@router.get("/partidos", response_model=ApiResponse[list[PartidoResponse]])
async def list_partidos(
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
    categoria_id: int | None = Query(default=None, gt=0),
    torneo_id: int | None = Query(default=None, gt=0),
    estado: MatchStatus | None = Query(default=None),
    jugador_id: int | None = Query(default=None, gt=0),
) -> ApiResponse[list[PartidoResponse]]:
    async with SessionLocal.begin() as session:
        partidos = await match_service.list_matches(
            session,
            limit=limit,
            offset=offset,
            categoria_id=categoria_id,
            torneo_id=torneo_id,
            estado=estado,
            jugador_id=jugador_id,
        )
    return envelope([as_partido_response(item) for item in partidos], message="partidos obtenidos")


@router.get("/partidos/{partido_id}", response_model=ApiResponse[PartidoResponse])
async def get_partido(partido_id: int = Path(gt=0)) -> ApiResponse[PartidoResponse]:
    try:
        async with SessionLocal.begin() as session:
            partido = await match_service.get_match(session, partido_id=partido_id)
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    return envelope(as_partido_response(partido, include_sets=True), message="partido obtenido")


@router.post(
    "/admin/partidos",
    response_model=ApiResponse[PartidoResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_partido(
    payload: PartidoCreateRequest,
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[PartidoResponse]:
    try:
        async with SessionLocal.begin() as session:
            partido = await match_service.create_match(session, **payload.model_dump())
    except MatchSamePlayerError as exc:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            VALIDATION_FAILED,
            "un jugador no puede enfrentarse a sí mismo",
            field="jugador2_id",
        ) from exc
    except MatchReferenceNotFoundError as exc:
        raise api_error(
            status.HTTP_404_NOT_FOUND,
            RESOURCE_NOT_FOUND,
            field=exc.reference,
        ) from exc
    return envelope(as_partido_response(partido, include_sets=True), message="partido creado exitosamente")


@router.put("/admin/partidos/{partido_id}", response_model=ApiResponse[PartidoResponse])
async def update_partido(
    payload: PartidoUpdateRequest,
    partido_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[PartidoResponse]:
    changes = payload.model_dump(exclude_unset=True)
    reject_null_fields(changes, _NON_NULLABLE_UPDATE_FIELDS)

    try:
        async with SessionLocal.begin() as session:
            partido = await match_service.update_match(
                session,
                partido_id=partido_id,
                changes=changes,
            )
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    except MatchSamePlayerError as exc:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            VALIDATION_FAILED,
            "un jugador no puede enfrentarse a sí mismo",
            field="jugador2_id",
        ) from exc
    except MatchReferenceNotFoundError as exc:
        raise api_error(
            status.HTTP_404_NOT_FOUND,
            RESOURCE_NOT_FOUND,
            field=exc.reference,
        ) from exc
    except (InvalidMatchTransitionError, MatchConcurrentUpdateError) as exc:
        raise match_conflict(exc) from exc
    return envelope(as_partido_response(partido, include_sets=True), message="partido actualizado exitosamente")


@router.delete("/admin/partidos/{partido_id}", response_model=ApiResponse[None])
async def delete_partido(
    partido_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[None]:
    try:
        async with SessionLocal.begin() as session:
            await match_service.delete_match(session, partido_id=partido_id)
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    return envelope(message="partido eliminado exitosamente")


@router.put("/admin/partidos/{partido_id}/approve-result", response_model=ApiResponse[PartidoResponse])
async def approve_partido_result(
    partido_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[PartidoResponse]:
    try:
        async with SessionLocal.begin() as session:
            outcome = await match_service.approve_result(session, partido_id=partido_id)
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    except (ResultNotReportedError, InvalidMatchTransitionError, MatchConcurrentUpdateError) as exc:
        raise match_conflict(exc) from exc

    message = "resultado aprobado exitosamente" if outcome.approved_now else "el resultado ya estaba aprobado"
    return envelope(as_partido_response(outcome.match, include_sets=True), message=message)


@router.put("/admin/partidos/{partido_id}/dispute-result", response_model=ApiResponse[PartidoResponse])
async def dispute_partido_result(
    partido_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[PartidoResponse]:
    try:
        async with SessionLocal.begin() as session:
            partido = await match_service.dispute_result(session, partido_id=partido_id)
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    except (InvalidMatchTransitionError, MatchConcurrentUpdateError) as exc:
        raise match_conflict(exc) from exc
    return envelope(as_partido_response(partido, include_sets=True), message="resultado marcado como disputado")


@router.put("/admin/partidos/{partido_id}/cancel", response_model=ApiResponse[PartidoResponse])
async def cancel_partido(
    partido_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[PartidoResponse]:
    try:
        async with SessionLocal.begin() as session:
            partido = await match_service.cancel_match(session, partido_id=partido_id)
    except MatchNotFoundError as exc:
        raise match_not_found() from exc
    except (InvalidMatchTransitionError, MatchConcurrentUpdateError) as exc:
        raise match_conflict(exc) from exc
    return envelope(as_partido_response(partido, include_sets=True), message="partido cancelado")
