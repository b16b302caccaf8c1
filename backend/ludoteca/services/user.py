"""Serviços para gerenciamento de usuários.

Este módulo implementa a lógica de negócio para usuários e para
o login que emite os tokens JWT.
"""

from typing import Any, Dict, Mapping, Optional

from loguru import logger

from ludoteca.core.exceptions import AuthenticationError, ValidationError, Violation
from ludoteca.core.logging import log_security_event
from ludoteca.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
)
from ludoteca.models.user import User, UserRole
from ludoteca.repositories.user import UserRepository
from ludoteca.schemas.projections import project
from ludoteca.schemas.user import UserWrite
from ludoteca.schemas.validators import USER_CONSTRAINTS, merge, validate_record
from ludoteca.services.base import BaseService


class UserService(BaseService[User]):
    """Serviço para operações com usuários.

    Listagens de usuários não são cacheadas. A senha chega em texto
    plano e é guardada apenas como hash.
    """

    model = User
    repository_class = UserRepository
    resource_name = "Usuário"
    read_group = "user:read"
    write_group = "user:write"
    write_schema = UserWrite
    constraints = USER_CONSTRAINTS

    async def get_by_email(self, email: str) -> Optional[User]:
        """Busca usuário por email.

        Args:
            email: Email do usuário

        Returns:
            Usuário encontrado ou None
        """
        return await self.repository.get_by_email(email)

    async def create(self, payload: Any) -> Dict[str, Any]:
        """Cria um novo usuário com ROLE_USER.

        Args:
            payload: Corpo da requisição (``email``, ``password``)

        Returns:
            Usuário criado, projetado em ``user:read``

        Raises:
            ValidationError: Senha ausente, email inválido ou já em uso
        """
        password = payload.get("password") if isinstance(payload, Mapping) else None
        if password is None or password == "":
            raise ValidationError([
                Violation(field="password", rule="not_blank", message="A senha é obrigatória.")
            ])

        changes = self.deserialize(payload)
        await self._check_email_available(changes.get("email"))

        user = User(email=changes.get("email"), roles=[UserRole.USER.value])
        validate_record(user, self.constraints)
        user.password = get_password_hash(changes["password"])

        await self.repository.save(user)
        logger.info(f"Usuário criado: id={user.id} email={user.email}")
        return project(user, self.read_group)

    async def update(self, id: int, payload: Any) -> Dict[str, Any]:
        """Atualiza email e/ou senha.

        A senha só é trocada (e re-hasheada) se vier preenchida.

        Raises:
            NotFoundError: Se o usuário não existir
            ValidationError: Se o usuário resultante for inválido
        """
        user = await self.get_record(id)
        changes = self.deserialize(payload)

        updates: Dict[str, Any] = {}
        if "email" in changes:
            await self._check_email_available(changes["email"], exclude_id=user.id)
            updates["email"] = changes["email"]
        if changes.get("password"):
            updates["password"] = get_password_hash(changes["password"])

        merge(user, updates)
        await self._validate_or_discard(user)

        await self.repository.save(user)
        logger.info(f"Usuário atualizado: id={id} campos={sorted(updates)}")
        return project(user, self.read_group)

    async def _check_email_available(self, email: Optional[str], exclude_id: Optional[int] = None) -> None:
        if not email:
            return
        existing = await self.repository.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise ValidationError([
                Violation(field="email", rule="unique", message="Este email já está em uso.")
            ])


class AuthService:
    """Autenticação por email e senha."""

    def __init__(self, users: UserService):
        self.users = users

    async def authenticate(self, email: str, password: str) -> User:
        """Valida as credenciais.

        Raises:
            AuthenticationError: Usuário inexistente ou senha incorreta
        """
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            log_security_event("login_failed", details={"email": email})
            raise AuthenticationError("Credenciais inválidas")
        return user

    async def login(self, email: str, password: str) -> str:
        """Autentica e emite o token de acesso.

        Returns:
            JWT com ``sub`` (id), ``username`` (email) e ``roles``
        """
        user = await self.authenticate(email, password)
        token = create_access_token({
            "sub": str(user.id),
            "username": user.email,
            "roles": user.get_roles(),
        })
        log_security_event("login_success", user_id=str(user.id))
        return token
