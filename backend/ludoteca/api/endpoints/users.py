"""Endpoints de gerenciamento de usuários.

Todas as rotas exigem ROLE_ADMIN. A senha nunca aparece nas respostas.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from ludoteca.core.deps import get_current_admin, get_pagination, get_user_service
from ludoteca.models.user import User
from ludoteca.schemas.base import PaginationParams
from ludoteca.services.user import UserService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_users(
    pagination: PaginationParams = Depends(get_pagination),
    current_user: User = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    """Lista usuários paginados."""
    return await service.list(pagination.page, pagination.limit)


@router.get("/{user_id}", response_model=Dict[str, Any])
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    """Obtém um usuário pelo ID."""
    return await service.get(user_id)


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Dict[str, Any] = Body(..., examples=[{"email": "jogador@ludoteca.dev", "password": "segredo"}]),
    current_user: User = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    """Cria um usuário com ROLE_USER.

    Args:
        payload: ``email`` e ``password`` (obrigatória)
        current_user: Administrador autenticado
        service: Serviço de usuários

    Returns:
        Usuário criado, sem a senha
    """
    return await service.create(payload)


@router.put("/{user_id}", response_model=Dict[str, Any])
async def update_user(
    user_id: int,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    """Atualiza email e/ou senha de um usuário."""
    return await service.update(user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    await service.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
