"""Módulo de segurança e autenticação.

Contém funções para tokens JWT, hashing de senhas e a
verificação de roles usada pelos guards das rotas.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

import jwt
from passlib.context import CryptContext

from ludoteca.core.config import settings


# Configuração do contexto de senha
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


class InvalidTokenError(Exception):
    """Token JWT inválido, expirado ou malformado."""


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """Cria token de acesso JWT.

    Args:
        data: Dados para incluir no token
        expires_delta: Tempo de expiração personalizado

    Returns:
        Token JWT codificado
    """
    to_encode = data.copy()

    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "iat": now})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decodifica e valida token JWT.

    Args:
        token: Token JWT para decodificar

    Returns:
        Payload decodificado

    Raises:
        InvalidTokenError: Se token inválido ou expirado
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token expirado") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError("Token inválido") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica se senha corresponde ao hash.

    Hash malformado ou vazio conta como senha incorreta.

    Args:
        plain_password: Senha em texto plano
        hashed_password: Hash da senha armazenado

    Returns:
        True se senha é válida
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Gera hash da senha usando bcrypt.

    Args:
        password: Senha em texto plano

    Returns:
        Hash da senha
    """
    return pwd_context.hash(password)


def is_granted(roles: Iterable[str], required_role: str) -> bool:
    """Decide se um conjunto de roles satisfaz a role exigida.

    Qualquer usuário autenticado tem ROLE_USER, inclusive administradores.
    """
    effective = set(roles or ())
    effective.add(ROLE_USER)
    return required_role in effective
