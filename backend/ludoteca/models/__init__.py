"""Modelos SQLAlchemy para o banco de dados.

Este módulo organiza todos os modelos SQLAlchemy usados para
definir a estrutura do banco de dados e relacionamentos.
"""

from ludoteca.core.database import Base

from .base import BaseModel
from .category import Category
from .editor import Editor
from .user import User, UserRole
from .video_game import VideoGame

__all__ = [
    "Base",
    "BaseModel",
    "Category",
    "Editor",
    "User",
    "UserRole",
    "VideoGame",
]
