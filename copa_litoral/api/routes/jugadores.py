from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, Field

from copa_litoral.accounts.types import TokenClaims
from copa_litoral.api.deps import require_admin
from copa_litoral.api.envelope import ApiResponse, StrictRequest, envelope
from copa_litoral.api.errors import RESOURCE_NOT_FOUND, api_error, reject_null_fields
from copa_litoral.core.validation import PhoneNumber, SanitizedText
from copa_litoral.db.session import SessionLocal
from copa_litoral.league import service as league_service
from copa_litoral.league.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, PARTICIPATION_ACTIVE
from copa_litoral.league.errors import CategoryNotFoundError, PlayerNotFoundError
from copa_litoral.league.types import PlayerSnapshot

router = APIRouter(prefix="/api/v1", tags=["jugadores"])


class JugadorCreateRequest(StrictRequest):
    nombre: SanitizedText = Field(min_length=1, max_length=255)
    apellido: SanitizedText = Field(min_length=1, max_length=255)
    telefono_wsp: PhoneNumber | None = Field(default=None, max_length=50)
    contacto_visible_en_web: bool = False
    categoria_id: int | None = Field(default=None, gt=0)
    club: SanitizedText | None = Field(default=None, max_length=255)
    estado_participacion: SanitizedText = Field(
        default=PARTICIPATION_ACTIVE,
        min_length=1,
        max_length=50,
    )


class JugadorUpdateRequest(StrictRequest):
    nombre: SanitizedText | None = Field(default=None, min_length=1, max_length=255)
    apellido: SanitizedText | None = Field(default=None, min_length=1, max_length=255)
    telefono_wsp: PhoneNumber | None = Field(default=None, max_length=50)
    contacto_visible_en_web: bool | None = None
    categoria_id: int | None = Field(default=None, gt=0)
    club: SanitizedText | None = Field(default=None, max_length=255)
    estado_participacion: SanitizedText | None = Field(default=None, min_length=1, max_length=50)


class JugadorResponse(BaseModel):
    id: int
    nombre: str
    apellido: str
    telefono_wsp: str | None = None
    contacto_visible_en_web: bool
    categoria_id: int | None = None
    club: str | None = None
    estado_participacion: str
    created_at: datetime
    updated_at: datetime


_NON_NULLABLE_UPDATE_FIELDS = ("nombre", "apellido", "contacto_visible_en_web", "estado_participacion")


def _as_response(jugador: PlayerSnapshot, *, public: bool) -> JugadorResponse:
    return JugadorResponse(
        id=jugador.jugador_id,
        nombre=jugador.nombre,
        apellido=jugador.apellido,
        telefono_wsp=jugador.public_telefono_wsp if public else jugador.telefono_wsp,
        contacto_visible_en_web=jugador.contacto_visible_en_web,
        categoria_id=jugador.categoria_id,
        club=jugador.club,
        estado_participacion=jugador.estado_participacion,
        created_at=jugador.created_at,
        updated_at=jugador.updated_at,
    )


def _not_found() -> Exception:
    return api_error(status.HTTP_404_NOT_FOUND, RESOURCE_NOT_FOUND, "jugador no encontrado")


def _category_not_found() -> Exception:
    return api_error(
        status.HTTP_404_NOT_FOUND,
        RESOURCE_NOT_FOUND,
        "categoría no encontrada",
        field="categoria_id",
    )


@router.get("/jugadores", response_model=ApiResponse[list[JugadorResponse]])
async def list_jugadores(
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
    categoria_id: int | None = Query(default=None, gt=0),
    estado_participacion: str | None = Query(default=None, max_length=50),
) -> ApiResponse[list[JugadorResponse]]:
    async with SessionLocal.begin() as session:
        jugadores = await league_service.list_players(
            session,
            limit=limit,
            offset=offset,
            categoria_id=categoria_id,
            estado_participacion=estado_participacion,
        )
    return envelope(
        [_as_response(item, public=True) for item in jugadores],
        message="jugadores obtenidos",
    )


@router.get("/jugadores/{jugador_id}", response_model=ApiResponse[JugadorResponse])
async def get_jugador(jugador_id: int = Path(gt=0)) -> ApiResponse[JugadorResponse]:
    try:
        async with SessionLocal.begin() as session:
            jugador = await league_service.get_player(session, jugador_id=jugador_id)
    except PlayerNotFoundError as exc:
        raise _not_found() from exc
    return envelope(_as_response(jugador, public=True), message="jugador obtenido")


@router.post(
    "/admin/jugadores",
    response_model=ApiResponse[JugadorResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_jugador(
    payload: JugadorCreateRequest,
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[JugadorResponse]:
    try:
        async with SessionLocal.begin() as session:
            jugador = await league_service.create_player(session, **payload.model_dump())
    except CategoryNotFoundError as exc:
        raise _category_not_found() from exc
    return envelope(_as_response(jugador, public=False), message="jugador creado exitosamente")


@router.put("/admin/jugadores/{jugador_id}", response_model=ApiResponse[JugadorResponse])
async def update_jugador(
    payload: JugadorUpdateRequest,
    jugador_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[JugadorResponse]:
    changes = payload.model_dump(exclude_unset=True)
    reject_null_fields(changes, _NON_NULLABLE_UPDATE_FIELDS)

    try:
        async with SessionLocal.begin() as session:
            jugador = await league_service.update_player(
                session,
                jugador_id=jugador_id,
                changes=changes,
            )
    except PlayerNotFoundError as exc:
        raise _not_found() from exc
    except CategoryNotFoundError as exc:
        raise _category_not_found() from exc
    return envelope(_as_response(jugador, public=False), message="jugador actualizado exitosamente")


@router.delete("/admin/jugadores/{jugador_id}", response_model=ApiResponse[None])
async def delete_jugador(
    jugador_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[None]:
    try:
        async with SessionLocal.begin() as session:
            await league_service.delete_player(session, jugador_id=jugador_id)
    except PlayerNotFoundError as exc:
        raise _not_found() from exc
    return envelope(message="jugador eliminado exitosamente")
