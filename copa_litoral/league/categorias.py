from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from copa_litoral.db.models.categorias import Categoria
from copa_litoral.db.repo.categorias_repo import CategoriasRepo
from copa_litoral.league.constants import CATEGORY_MUTABLE_FIELDS
from copa_litoral.league.errors import CategoryNameTakenError, CategoryNotFoundError
from copa_litoral.league.internal import apply_changes, build_category_snapshot, resolve_page
from copa_litoral.league.types import CategorySnapshot

logger = structlog.get_logger(__name__)


async def list_categories(
    session: AsyncSession,
    *,
    limit: int | None = None,
    offset: int | None = None,
) -> list[CategorySnapshot]:
    resolved_limit, resolved_offset = resolve_page(limit=limit, offset=offset)
    categorias = await CategoriasRepo.list(session, limit=resolved_limit, offset=resolved_offset)
    return [build_category_snapshot(categoria) for categoria in categorias]


async def get_category(session: AsyncSession, *, categoria_id: int) -> CategorySnapshot:
    categoria = await CategoriasRepo.get_by_id(session, categoria_id)
    if categoria is None:
        raise CategoryNotFoundError
    return build_category_snapshot(categoria)


async def create_category(session: AsyncSession, *, nombre: str) -> CategorySnapshot:
    if await CategoriasRepo.get_by_nombre(session, nombre) is not None:
        raise CategoryNameTakenError
    try:
        categoria = await CategoriasRepo.create(session, categoria=Categoria(nombre=nombre))
    except IntegrityError as exc:
        raise CategoryNameTakenError from exc
    logger.info("category_created", categoria_id=categoria.id)
    return build_category_snapshot(categoria)


async def update_category(
    session: AsyncSession,
    *,
    categoria_id: int,
    changes: Mapping[str, Any],
) -> CategorySnapshot:
    categoria = await CategoriasRepo.get_by_id(session, categoria_id)
    if categoria is None:
        raise CategoryNotFoundError

    nombre = changes.get("nombre")
    if nombre is not None and nombre != categoria.nombre:
        existing = await CategoriasRepo.get_by_nombre(session, nombre)
        if existing is not None:
            raise CategoryNameTakenError

    apply_changes(categoria, changes=changes, allowed=CATEGORY_MUTABLE_FIELDS)
    try:
        await session.flush()
    except IntegrityError as exc:
        raise CategoryNameTakenError from exc
    return build_category_snapshot(categoria)


async def delete_category(session: AsyncSession, *, categoria_id: int) -> None:
    # referenced categories are protected by ON DELETE RESTRICT
    if not await CategoriasRepo.delete_by_id(session, categoria_id):
        raise CategoryNotFoundError
    logger.info("category_deleted", categoria_id=categoria_id)
