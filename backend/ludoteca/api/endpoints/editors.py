"""Endpoints de gerenciamento de editoras."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from ludoteca.core.deps import get_current_admin, get_editor_service, get_pagination
from ludoteca.models.user import User
from ludoteca.schemas.base import PaginationParams
from ludoteca.services.editor import EditorService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_editors(
    pagination: PaginationParams = Depends(get_pagination),
    service: EditorService = Depends(get_editor_service)
):
    """Lista editoras paginadas, ordenadas por ID."""
    return await service.list(pagination.page, pagination.limit)


@router.get("/{editor_id}", response_model=Dict[str, Any])
async def get_editor(
    editor_id: int,
    service: EditorService = Depends(get_editor_service)
):
    return await service.get(editor_id)


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_editor(
    payload: Dict[str, Any] = Body(..., examples=[{"name": "Nintendo", "country": "Japan"}]),
    current_user: User = Depends(get_current_admin),
    service: EditorService = Depends(get_editor_service)
):
    """Cria uma editora (requer ROLE_ADMIN)."""
    return await service.create(payload)


@router.put("/{editor_id}", response_model=Dict[str, Any])
async def update_editor(
    editor_id: int,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_admin),
    service: EditorService = Depends(get_editor_service)
):
    """Atualiza os campos enviados de uma editora."""
    return await service.update(editor_id, payload)


@router.delete("/{editor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_editor(
    editor_id: int,
    current_user: User = Depends(get_current_admin),
    service: EditorService = Depends(get_editor_service)
):
    await service.delete(editor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
