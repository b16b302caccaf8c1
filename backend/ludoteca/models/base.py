"""Classe base para os modelos SQLAlchemy.

Fornece a chave primária inteira gerada pelo banco e
utilitários comuns a todos os modelos.
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from ludoteca.core.database import Base


class BaseModel(Base):
    """Modelo base abstrato com ``id`` autoincremental.

    O ``id`` é atribuído exclusivamente pelo banco na criação
    e nunca muda depois disso.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Identificador único do registro"
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
