"""Schemas base para validação e serialização.

Define classes base e utilitários comuns utilizados
por todos os schemas Pydantic do sistema.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ludoteca.core.exceptions import Violation


class BaseSchema(BaseModel):
    """Schema base para todos os schemas Pydantic.

    Fornece configuração padrão para todos os schemas do sistema.
    """

    model_config = ConfigDict(
        extra="forbid",
        use_enum_values=True,
        populate_by_name=True,
        from_attributes=True,
    )


class WriteSchema(BaseSchema):
    """Base dos schemas de escrita (grupo ``*:write``).

    Todos os campos são opcionais: o que não vier no payload
    não é tocado, e a obrigatoriedade é checada depois, sobre
    o registro completo.
    """


class PaginationParams(BaseSchema):
    """Parâmetros para paginação de resultados."""

    page: int = Field(
        default=1,
        ge=1,
        description="Número da página (começando em 1)",
        examples=[1]
    )

    limit: int = Field(
        default=10,
        ge=1,
        description="Número de itens por página",
        examples=[10]
    )

    @property
    def offset(self) -> int:
        """Calcula o offset para a consulta."""
        return (self.page - 1) * self.limit


def violations_from_pydantic(error: PydanticValidationError) -> List[Violation]:
    """Converte erros do Pydantic em violações (campo + regra)."""
    violations = []
    for err in error.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        violations.append(Violation(field=field, rule=err["type"], message=err["msg"]))
    return violations
