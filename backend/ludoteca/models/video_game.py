"""Modelo de jogos do catálogo."""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ludoteca.models.base import BaseModel
from ludoteca.models.category import Category
from ludoteca.models.editor import Editor


class VideoGame(BaseModel):
    """Jogo do catálogo.

    Sempre referencia exatamente uma categoria e uma editora.
    """

    __tablename__ = "video_games"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Título do jogo"
    )

    release_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Data de lançamento"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Descrição do jogo"
    )

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    editor_id: Mapped[int] = mapped_column(
        ForeignKey("editors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    category: Mapped[Optional[Category]] = relationship(
        Category,
        back_populates="video_games",
        lazy="joined",
    )

    editor: Mapped[Optional[Editor]] = relationship(
        Editor,
        back_populates="video_games",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<VideoGame(id={self.id}, title='{self.title}')>"
