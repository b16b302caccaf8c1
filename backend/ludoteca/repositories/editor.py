"""Repositório de Editor."""

from ludoteca.models.editor import Editor
from ludoteca.repositories.base import Repository


class EditorRepository(Repository[Editor]):
    model = Editor
