"""Dependências do FastAPI.

Contém autenticação por token Bearer, o guard de roles, o acesso
ao cache compartilhado, a paginação e os provedores de serviços.
"""

from typing import Callable

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ludoteca.core.cache import TagAwareCache
from ludoteca.core.config import settings
from ludoteca.core.database import get_db
from ludoteca.core.logging import log_security_event
from ludoteca.core.security import ROLE_ADMIN, InvalidTokenError, decode_token, is_granted
from ludoteca.models.user import User
from ludoteca.repositories.user import UserRepository
from ludoteca.schemas.base import PaginationParams
from ludoteca.services import (
    AuthService,
    CategoryService,
    EditorService,
    UserService,
    VideoGameService,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX.lstrip('/')}/login_check")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Obtém o usuário atual a partir do token JWT.

    O usuário é recarregado do banco a cada requisição, então
    mudanças de role valem imediatamente.

    Args:
        request: Requisição atual
        token: Token JWT do esquema OAuth2
        db: Sessão do banco de dados

    Returns:
        Usuário autenticado

    Raises:
        HTTPException: Se token inválido ou usuário não encontrado
    """
    try:
        payload = decode_token(token)
    except InvalidTokenError as e:
        raise _unauthorized(str(e))

    try:
        user_id = int(payload.get("sub"))
    except (ValueError, TypeError):
        raise _unauthorized("Token inválido - ID de usuário malformado")

    user = await UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("Usuário não encontrado")

    request.state.user_id = str(user.id)
    return user


def require_role(role: str) -> Callable:
    """Cria uma dependência que exige a role informada.

    Args:
        role: Role exigida (ex: ``ROLE_ADMIN``)

    Returns:
        Dependência que devolve o usuário autorizado ou lança 403
    """
    async def dependency(
        request: Request,
        current_user: User = Depends(get_current_user)
    ) -> User:
        if not is_granted(current_user.get_roles(), role):
            log_security_event(
                "forbidden",
                client_ip=request.client.host if request.client else None,
                user_id=str(current_user.id),
                details={"required_role": role, "path": request.url.path},
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Privilégios insuficientes"
            )
        return current_user
    return dependency


get_current_admin = require_role(ROLE_ADMIN)


def get_cache(request: Request) -> TagAwareCache:
    """Cache compartilhado criado junto com a aplicação."""
    return request.app.state.cache


def get_pagination(
    page: int = Query(
        1,
        ge=1,
        le=settings.MAX_PAGE,
        description="Número da página (começando em 1)"
    ),
    limit: int = Query(
        settings.DEFAULT_PAGE_LIMIT,
        ge=1,
        le=settings.MAX_PAGE_LIMIT,
        description="Número de itens por página"
    ),
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit)


def get_category_service(
    db: AsyncSession = Depends(get_db),
    cache: TagAwareCache = Depends(get_cache)
) -> CategoryService:
    return CategoryService(db, cache)


def get_editor_service(
    db: AsyncSession = Depends(get_db),
    cache: TagAwareCache = Depends(get_cache)
) -> EditorService:
    return EditorService(db, cache)


def get_video_game_service(
    db: AsyncSession = Depends(get_db),
    cache: TagAwareCache = Depends(get_cache)
) -> VideoGameService:
    return VideoGameService(db, cache)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_auth_service(users: UserService = Depends(get_user_service)) -> AuthService:
    return AuthService(users)
