"""Endpoints de gerenciamento de categorias.

Listagem e detalhe são públicos; criação, edição e remoção
exigem ROLE_ADMIN.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from ludoteca.core.deps import get_category_service, get_current_admin, get_pagination
from ludoteca.models.user import User
from ludoteca.schemas.base import PaginationParams
from ludoteca.services.category import CategoryService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_categories(
    pagination: PaginationParams = Depends(get_pagination),
    service: CategoryService = Depends(get_category_service)
):
    """Lista categorias paginadas, ordenadas por ID."""
    return await service.list(pagination.page, pagination.limit)


@router.get("/{category_id}", response_model=Dict[str, Any])
async def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service)
):
    """Obtém uma categoria pelo ID."""
    return await service.get(category_id)


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: Dict[str, Any] = Body(..., examples=[{"name": "Action"}]),
    current_user: User = Depends(get_current_admin),
    service: CategoryService = Depends(get_category_service)
):
    """Cria uma categoria.

    Args:
        payload: Campos do grupo ``category:write``
        current_user: Administrador autenticado
        service: Serviço de categorias

    Returns:
        Categoria criada
    """
    return await service.create(payload)


@router.put("/{category_id}", response_model=Dict[str, Any])
async def update_category(
    category_id: int,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_admin),
    service: CategoryService = Depends(get_category_service)
):
    """Atualiza os campos enviados de uma categoria."""
    return await service.update(category_id, payload)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_admin),
    service: CategoryService = Depends(get_category_service)
):
    """Remove uma categoria sem jogos associados."""
    await service.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
