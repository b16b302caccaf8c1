"""Repositório de Category."""

from ludoteca.models.category import Category
from ludoteca.repositories.base import Repository


class CategoryRepository(Repository[Category]):
    model = Category
