"""Router principal da API.

Agrega todos os endpoints em um router que é incluído na aplicação
com o prefixo ``API_PREFIX`` (``/api``).
"""

from fastapi import APIRouter

from ludoteca.api.endpoints import (
    auth,
    categories,
    editors,
    users,
    video_games,
)

# Router principal da API
api_router = APIRouter()

# Login fica na raiz do prefixo: POST /api/login_check
api_router.include_router(
    auth.router,
    tags=["authentication"]
)

api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["categories"]
)

api_router.include_router(
    editors.router,
    prefix="/editors",
    tags=["editors"]
)

api_router.include_router(
    video_games.router,
    prefix="/video-games",
    tags=["video-games"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)
