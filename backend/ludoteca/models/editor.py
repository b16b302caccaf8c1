"""Modelo de editoras (publishers) de jogos."""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ludoteca.models.base import BaseModel

if TYPE_CHECKING:
    from ludoteca.models.video_game import VideoGame


class Editor(BaseModel):
    """Editora responsável pela publicação de jogos."""

    __tablename__ = "editors"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Nome da editora"
    )

    country: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="País de origem (ex: US, FR, JP)"
    )

    video_games: Mapped[List["VideoGame"]] = relationship(
        "VideoGame",
        back_populates="editor",
        lazy="noload",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Editor(id={self.id}, name='{self.name}')>"
