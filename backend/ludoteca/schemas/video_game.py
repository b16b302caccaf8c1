"""Schemas de jogos."""

from datetime import date
from typing import Any, Optional

from pydantic import Field, field_validator

from ludoteca.schemas.base import WriteSchema


class VideoGameWrite(WriteSchema):
    """Campos aceitos na criação/atualização de jogo.

    ``category`` e ``editor`` aceitam o id inteiro ou um objeto
    ``{"id": n}``.
    """

    title: Optional[str] = Field(
        default=None,
        description="Título do jogo",
        examples=["Super Mario Odyssey"]
    )

    release_date: Optional[date] = Field(
        default=None,
        alias="releaseDate",
        description="Data de lançamento (YYYY-MM-DD)",
        examples=["2017-10-27"]
    )

    description: Optional[str] = Field(
        default=None,
        description="Descrição do jogo"
    )

    category: Optional[int] = Field(
        default=None,
        description="ID da categoria",
        examples=[1]
    )

    editor: Optional[int] = Field(
        default=None,
        description="ID da editora",
        examples=[3]
    )

    @field_validator("category", "editor", mode="before")
    @classmethod
    def extract_reference_id(cls, v: Any) -> Any:
        """Aceita ``{"id": n}`` além do id puro."""
        if isinstance(v, dict):
            return v.get("id")
        return v
