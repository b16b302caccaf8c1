"""Schemas de usuários."""

from typing import Optional

from pydantic import Field

from ludoteca.schemas.base import WriteSchema


class UserWrite(WriteSchema):
    """Campos aceitos na criação/atualização de usuário.

    A role não é aceita aqui: novos usuários sempre recebem ROLE_USER.
    """

    email: Optional[str] = Field(
        default=None,
        description="Email do usuário",
        examples=["jogador@ludoteca.dev"]
    )

    password: Optional[str] = Field(
        default=None,
        description="Senha em texto plano (armazenada apenas como hash)"
    )
