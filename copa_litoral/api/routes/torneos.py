from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, Field, model_validator

from copa_litoral.accounts.types import TokenClaims
from copa_litoral.api.deps import require_admin
from copa_litoral.api.envelope import ApiResponse, StrictRequest, envelope
from copa_litoral.api.errors import RESOURCE_NOT_FOUND, VALIDATION_FAILED, api_error, reject_null_fields
from copa_litoral.core.validation import SanitizedText
from copa_litoral.db.session import SessionLocal
from copa_litoral.league import service as league_service
from copa_litoral.league.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from copa_litoral.league.errors import TournamentDatesError, TournamentNotFoundError
from copa_litoral.league.types import TournamentSnapshot

router = APIRouter(prefix="/api/v1", tags=["torneos"])


class TorneoCreateRequest(StrictRequest):
    nombre: SanitizedText = Field(min_length=1, max_length=255)
    anio: int = Field(ge=1900, le=2200)
    fecha_inicio: date | None = None
    fecha_fin: date | None = None
    foto_url: str | None = Field(default=None, max_length=2048)
    frase_destacada: SanitizedText | None = Field(default=None, max_length=1000)
    activo: bool = True

    @model_validator(mode="after")
    def _check_dates(self) -> TorneoCreateRequest:
        if self.fecha_inicio and self.fecha_fin and self.fecha_fin < self.fecha_inicio:
            raise ValueError("fecha_fin must not precede fecha_inicio")
        return self


class TorneoUpdateRequest(StrictRequest):
    nombre: SanitizedText | None = Field(default=None, min_length=1, max_length=255)
    anio: int | None = Field(default=None, ge=1900, le=2200)
    fecha_inicio: date | None = None
    fecha_fin: date | None = None
    foto_url: str | None = Field(default=None, max_length=2048)
    frase_destacada: SanitizedText | None = Field(default=None, max_length=1000)
    activo: bool | None = None


class TorneoResponse(BaseModel):
    id: int
    nombre: str
    anio: int
    fecha_inicio: date | None = None
    fecha_fin: date | None = None
    foto_url: str | None = None
    frase_destacada: str | None = None
    activo: bool
    created_at: datetime
    updated_at: datetime


_NON_NULLABLE_UPDATE_FIELDS = ("nombre", "anio", "activo")


def _as_response(torneo: TournamentSnapshot) -> TorneoResponse:
    return TorneoResponse(
        id=torneo.torneo_id,
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


def _not_found() -> Exception:
    return api_error(status.HTTP_404_NOT_FOUND, RESOURCE_NOT_FOUND, "torneo no encontrado")


def _invalid_dates() -> Exception:
    return api_error(
        status.HTTP_400_BAD_REQUEST,
        VALIDATION_FAILED,
        "la fecha de fin no puede ser anterior a la de inicio",
        field="fecha_fin",
    )


@router.get("/torneos", response_model=ApiResponse[list[TorneoResponse]])
async def list_torneos(
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
    activo: bool | None = Query(default=None),
) -> ApiResponse[list[TorneoResponse]]:
    async with SessionLocal.begin() as session:
        torneos = await league_service.list_tournaments(
            session,
            limit=limit,
            offset=offset,
            activo=activo,
        )
    return envelope([_as_response(item) for item in torneos], message="torneos obtenidos")


@router.get("/torneos/{torneo_id}", response_model=ApiResponse[TorneoResponse])
async def get_torneo(torneo_id: int = Path(gt=0)) -> ApiResponse[TorneoResponse]:
    try:
        async with SessionLocal.begin() as session:
            torneo = await league_service.get_tournament(session, torneo_id=torneo_id)
    except TournamentNotFoundError as exc:
        raise _not_found() from exc
    return envelope(_as_response(torneo), message="torneo obtenido")


@router.post(
    "/admin/torneos",
    response_model=ApiResponse[TorneoResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_torneo(
    payload: TorneoCreateRequest,
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[TorneoResponse]:
    try:
        async with SessionLocal.begin() as session:
            torneo = await league_service.create_tournament(session, **payload.model_dump())
    except TournamentDatesError as exc:
        raise _invalid_dates() from exc
    return envelope(_as_response(torneo), message="torneo creado exitosamente")


@router.put("/admin/torneos/{torneo_id}", response_model=ApiResponse[TorneoResponse])
async def update_torneo(
    payload: TorneoUpdateRequest,
    torneo_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[TorneoResponse]:
    changes = payload.model_dump(exclude_unset=True)
    reject_null_fields(changes, _NON_NULLABLE_UPDATE_FIELDS)

    try:
        async with SessionLocal.begin() as session:
            torneo = await league_service.update_tournament(
                session,
                torneo_id=torneo_id,
                changes=changes,
            )
    except TournamentNotFoundError as exc:
        raise _not_found() from exc
    except TournamentDatesError as exc:
        raise _invalid_dates() from exc
    return envelope(_as_response(torneo), message="torneo actualizado exitosamente")


@router.delete("/admin/torneos/{torneo_id}", response_model=ApiResponse[None])
async def delete_torneo(
    torneo_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[None]:
    try:
        async with SessionLocal.begin() as session:
            await league_service.delete_tournament(session, torneo_id=torneo_id)
    except TournamentNotFoundError as exc:
        raise _not_found() from exc
    return envelope(message="torneo eliminado exitosamente")
