"""Serviço de editoras."""

from ludoteca.models.editor import Editor
from ludoteca.repositories.editor import EditorRepository
from ludoteca.schemas.editor import EditorWrite
from ludoteca.schemas.validators import EDITOR_CONSTRAINTS
from ludoteca.services.base import BaseService


class EditorService(BaseService[Editor]):
    """CRUD de editoras com listagem cacheada."""

    model = Editor
    repository_class = EditorRepository
    resource_name = "Editora"
    read_group = "editor:read"
    write_group = "editor:write"
    write_schema = EditorWrite
    constraints = EDITOR_CONSTRAINTS

    cache_prefix = "editors"
    cache_tag = "editorsCache"
