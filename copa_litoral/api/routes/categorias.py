from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, Field

from copa_litoral.accounts.types import TokenClaims
from copa_litoral.api.deps import require_admin
from copa_litoral.api.envelope import ApiResponse, StrictRequest, envelope
from copa_litoral.api.errors import RESOURCE_CONFLICT, RESOURCE_NOT_FOUND, api_error
from copa_litoral.core.validation import SanitizedText
from copa_litoral.db.session import SessionLocal
from copa_litoral.league import service as league_service
from copa_litoral.league.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from copa_litoral.league.errors import CategoryNameTakenError, CategoryNotFoundError
from copa_litoral.league.types import CategorySnapshot

router = APIRouter(prefix="/api/v1", tags=["categorias"])


class CategoriaCreateRequest(StrictRequest):
    nombre: SanitizedText = Field(min_length=1, max_length=100)


class CategoriaUpdateRequest(StrictRequest):
    nombre: SanitizedText = Field(min_length=1, max_length=100)


class CategoriaResponse(BaseModel):
    id: int
    nombre: str
    created_at: datetime
    updated_at: datetime


def _as_response(categoria: CategorySnapshot) -> CategoriaResponse:
    return CategoriaResponse(
        id=categoria.categoria_id,
        nombre=categoria.nombre,
        created_at=categoria.created_at,
        updated_at=categoria.updated_at,
    )


def _not_found() -> Exception:
    return api_error(status.HTTP_404_NOT_FOUND, RESOURCE_NOT_FOUND, "categoría no encontrada")


def _name_taken() -> Exception:
    return api_error(
        status.HTTP_409_CONFLICT,
        RESOURCE_CONFLICT,
        "ya existe una categoría con ese nombre",
        field="nombre",
    )


@router.get("/categorias", response_model=ApiResponse[list[CategoriaResponse]])
async def list_categorias(
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
) -> ApiResponse[list[CategoriaResponse]]:
    async with SessionLocal.begin() as session:
        categorias = await league_service.list_categories(session, limit=limit, offset=offset)
    return envelope([_as_response(item) for item in categorias], message="categorías obtenidas")


@router.get("/categorias/{categoria_id}", response_model=ApiResponse[CategoriaResponse])
async def get_categoria(categoria_id: int = Path(gt=0)) -> ApiResponse[CategoriaResponse]:
    try:
        async with SessionLocal.begin() as session:
            categoria = await league_service.get_category(session, categoria_id=categoria_id)
    except CategoryNotFoundError as exc:
        raise _not_found() from exc
    return envelope(_as_response(categoria), message="categoría obtenida")


@router.post(
    "/admin/categorias",
    response_model=ApiResponse[CategoriaResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_categoria(
    payload: CategoriaCreateRequest,
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[CategoriaResponse]:
    try:
        async with SessionLocal.begin() as session:
            categoria = await league_service.create_category(session, nombre=payload.nombre)
    except CategoryNameTakenError as exc:
        raise _name_taken() from exc
    return envelope(_as_response(categoria), message="categoría creada exitosamente")


@router.put("/admin/categorias/{categoria_id}", response_model=ApiResponse[CategoriaResponse])
async def update_categoria(
    payload: CategoriaUpdateRequest,
    categoria_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[CategoriaResponse]:
    try:
        async with SessionLocal.begin() as session:
            categoria = await league_service.update_category(
                session,
                categoria_id=categoria_id,
                changes=payload.model_dump(exclude_unset=True),
            )
    except CategoryNotFoundError as exc:
        raise _not_found() from exc
    except CategoryNameTakenError as exc:
        raise _name_taken() from exc
    return envelope(_as_response(categoria), message="categoría actualizada exitosamente")


@router.delete("/admin/categorias/{categoria_id}", response_model=ApiResponse[None])
async def delete_categoria(
    categoria_id: int = Path(gt=0),
    _admin: TokenClaims = Depends(require_admin),
) -> ApiResponse[None]:
    try:
        async with SessionLocal.begin() as session:
            await league_service.delete_category(session, categoria_id=categoria_id)
    except CategoryNotFoundError as exc:
        raise _not_found() from exc
    return envelope(message="categoría eliminada exitosamente")
