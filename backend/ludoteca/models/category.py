"""Modelo de categorias de jogos."""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ludoteca.models.base import BaseModel

if TYPE_CHECKING:
    from ludoteca.models.video_game import VideoGame


class Category(BaseModel):
    """Categoria de jogo (Action, RPG, Puzzle...)."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Nome da categoria"
    )

    # Relacionamento inverso, apenas informativo
    video_games: Mapped[List["VideoGame"]] = relationship(
        "VideoGame",
        back_populates="category",
        lazy="noload",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
