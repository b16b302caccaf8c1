"""Serviços de negócio da Ludoteca API.

Cada serviço implementa o CRUD de um tipo de registro: validação,
persistência via repositório, projeção da saída e invalidação do cache.
"""

from ludoteca.services.base import BaseService
from ludoteca.services.category import CategoryService
from ludoteca.services.editor import EditorService
from ludoteca.services.user import AuthService, UserService
from ludoteca.services.video_game import VideoGameService

__all__ = [
    "BaseService",
    "CategoryService",
    "EditorService",
    "VideoGameService",
    "UserService",
    "AuthService",
]
