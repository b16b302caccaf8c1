"""Schemas de editoras."""

from typing import Optional

from pydantic import Field

from ludoteca.schemas.base import WriteSchema


class EditorWrite(WriteSchema):
    """Campos aceitos na criação/atualização de editora."""

    name: Optional[str] = Field(
        default=None,
        description="Nome da editora",
        examples=["Nintendo", "Ubisoft"]
    )

    country: Optional[str] = Field(
        default=None,
        description="País de origem",
        examples=["JP", "FR"]
    )
