"""Serviço de categorias."""

from ludoteca.models.category import Category
from ludoteca.repositories.category import CategoryRepository
from ludoteca.schemas.category import CategoryWrite
from ludoteca.schemas.validators import CATEGORY_CONSTRAINTS
from ludoteca.services.base import BaseService


class CategoryService(BaseService[Category]):
    """CRUD de categorias com listagem cacheada."""

    model = Category
    repository_class = CategoryRepository
    resource_name = "Categoria"
    read_group = "category:read"
    write_group = "category:write"
    write_schema = CategoryWrite
    constraints = CATEGORY_CONSTRAINTS

    cache_prefix = "categories"
    cache_tag = "categoriesCache"
