"""Schemas de categorias."""

from typing import Optional

from pydantic import Field

from ludoteca.schemas.base import WriteSchema


class CategoryWrite(WriteSchema):
    """Campos aceitos na criação/atualização de categoria."""

    name: Optional[str] = Field(
        default=None,
        description="Nome da categoria",
        examples=["Action", "RPG"]
    )
