"""Endpoints de gerenciamento de jogos.

Fornece endpoints para:
- Listagem paginada (pública, cacheada)
- Detalhe de um jogo com categoria e editora
- Criação, edição parcial e remoção (ROLE_ADMIN)
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from ludoteca.core.deps import get_current_admin, get_pagination, get_video_game_service
from ludoteca.models.user import User
from ludoteca.schemas.base import PaginationParams
from ludoteca.services.video_game import VideoGameService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_video_games(
    pagination: PaginationParams = Depends(get_pagination),
    service: VideoGameService = Depends(get_video_game_service)
):
    """Lista jogos paginados.

    Args:
        pagination: Página e limite
        service: Serviço de jogos

    Returns:
        Jogos projetados em ``game:read``
    """
    return await service.list(pagination.page, pagination.limit)


@router.get("/{video_game_id}", response_model=Dict[str, Any])
async def get_video_game(
    video_game_id: int,
    service: VideoGameService = Depends(get_video_game_service)
):
    """Obtém um jogo pelo ID."""
    return await service.get(video_game_id)


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_video_game(
    payload: Dict[str, Any] = Body(..., examples=[{
        "title": "Super Mario Odyssey",
        "releaseDate": "2017-10-27",
        "description": "Plataforma 3D",
        "category": {"id": 1},
        "editor": {"id": 1},
    }]),
    current_user: User = Depends(get_current_admin),
    service: VideoGameService = Depends(get_video_game_service)
):
    """Cria um jogo.

    ``category`` e ``editor`` aceitam o id ou ``{"id": n}``.
    """
    return await service.create(payload)


@router.put("/{video_game_id}", response_model=Dict[str, Any])
async def update_video_game(
    video_game_id: int,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_admin),
    service: VideoGameService = Depends(get_video_game_service)
):
    """Atualiza somente os campos enviados; os demais são mantidos."""
    return await service.update(video_game_id, payload)


@router.delete("/{video_game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video_game(
    video_game_id: int,
    current_user: User = Depends(get_current_admin),
    service: VideoGameService = Depends(get_video_game_service)
):
    """Remove um jogo."""
    await service.delete(video_game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
