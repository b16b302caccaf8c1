"""Endpoint de autenticação.

``POST /login_check`` troca email e senha por um token JWT.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from ludoteca.core.deps import get_auth_service
from ludoteca.core.exceptions import AuthenticationError
from ludoteca.schemas.auth import LoginRequest, Token
from ludoteca.services.user import AuthService

router = APIRouter()


@router.post("/login_check", response_model=Token)
async def login_check(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Autentica usuário e retorna token de acesso.

    Args:
        credentials: Email e senha
        auth_service: Serviço de autenticação

    Returns:
        Token: ``{"token": <JWT>}``

    Raises:
        HTTPException: 401 se as credenciais forem inválidas
    """
    try:
        token = await auth_service.login(credentials.email, credentials.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(token=token)
