"""Modelo de usuários e roles.

A senha é guardada somente como hash; nunca em texto plano.
"""

from enum import Enum
from typing import List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from ludoteca.models.base import BaseModel


class UserRole(str, Enum):
    """Roles de usuário no sistema."""
    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


class User(BaseModel):
    """Usuário da API, identificado pelo email."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(180),
        nullable=False,
        unique=True,
        index=True,
        doc="Email do usuário (identificador de login)"
    )

    roles: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: [UserRole.USER.value],
        doc="Roles atribuídas ao usuário"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Hash da senha"
    )

    def get_roles(self) -> List[str]:
        """Roles efetivas; todo usuário tem ao menos ROLE_USER."""
        roles = list(self.roles or [])
        if UserRole.USER.value not in roles:
            roles.append(UserRole.USER.value)
        return roles

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
