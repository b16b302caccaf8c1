"""Repositórios: acesso ao banco para cada tipo de registro."""

from ludoteca.repositories.base import Repository
from ludoteca.repositories.category import CategoryRepository
from ludoteca.repositories.editor import EditorRepository
from ludoteca.repositories.user import UserRepository
from ludoteca.repositories.video_game import VideoGameRepository

__all__ = [
    "Repository",
    "CategoryRepository",
    "EditorRepository",
    "UserRepository",
    "VideoGameRepository",
]
