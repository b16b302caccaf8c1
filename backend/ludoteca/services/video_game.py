"""Serviço de jogos.

Além do CRUD comum, converte as referências ``category`` e ``editor``
(ids) nos registros correspondentes antes do merge. Uma referência
que não existe vira ``None`` e falha na restrição not_null.
"""

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ludoteca.core.cache import TagAwareCache
from ludoteca.models.video_game import VideoGame
from ludoteca.repositories.base import Repository
from ludoteca.repositories.category import CategoryRepository
from ludoteca.repositories.editor import EditorRepository
from ludoteca.repositories.video_game import VideoGameRepository
from ludoteca.schemas.validators import VIDEO_GAME_CONSTRAINTS
from ludoteca.schemas.video_game import VideoGameWrite
from ludoteca.services.base import BaseService


class VideoGameService(BaseService[VideoGame]):
    """CRUD de jogos com listagem cacheada."""

    model = VideoGame
    repository_class = VideoGameRepository
    resource_name = "Jogo"
    read_group = "game:read"
    write_group = "game:write"
    write_schema = VideoGameWrite
    constraints = VIDEO_GAME_CONSTRAINTS

    cache_prefix = "video_games"
    cache_tag = "videoGamesCache"

    def __init__(
        self,
        db: AsyncSession,
        cache: Optional[TagAwareCache] = None,
        *,
        cache_ttl: Optional[int] = None,
    ):
        super().__init__(db, cache, cache_ttl=cache_ttl)
        self.references: Dict[str, Repository] = {
            "category": CategoryRepository(db),
            "editor": EditorRepository(db),
        }

    async def resolve(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Troca os ids de categoria/editora pelos registros.

        As consultas rodam antes de qualquer alteração no registro
        em edição.
        """
        resolved = dict(changes)
        for field, repository in self.references.items():
            if field not in resolved:
                continue
            ref_id = resolved[field]
            resolved[field] = await repository.get(ref_id) if ref_id is not None else None
        return resolved
