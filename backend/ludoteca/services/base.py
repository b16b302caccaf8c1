"""Serviço base para operações CRUD de um tipo de registro.

Este módulo define a classe base que todos os serviços de recurso
herdam. O fluxo de cada operação é sempre o mesmo:
- valida a entrada (grupo de escrita + restrições da entidade)
- persiste ou lê pelo repositório
- projeta a saída no grupo de leitura
- invalida a tag de cache do tipo em toda mutação
"""

from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ludoteca.core.cache import TagAwareCache
from ludoteca.core.config import settings
from ludoteca.core.exceptions import NotFoundError, ValidationError, Violation
from ludoteca.models.base import BaseModel
from ludoteca.repositories.base import Repository
from ludoteca.schemas.base import WriteSchema, violations_from_pydantic
from ludoteca.schemas.projections import project, project_many, restrict_to_group
from ludoteca.schemas.validators import Constraints, merge, validate_record

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseService(Generic[ModelType]):
    """Serviço base com operações CRUD, paginação e cache de listas.

    Subclasses declaram o modelo, o repositório, os grupos de
    serialização e, se a listagem for cacheada, o prefixo da chave
    e a tag de cache.
    """

    model: Type[ModelType]
    repository_class: Type[Repository]
    resource_name: str = "Registro"
    read_group: str
    write_group: str
    write_schema: Type[WriteSchema]
    constraints: Constraints = ()

    # Listagens cacheadas em "<cache_prefix>_<page>_<limit>" com a tag cache_tag
    cache_prefix: Optional[str] = None
    cache_tag: Optional[str] = None

    def __init__(
        self,
        db: AsyncSession,
        cache: Optional[TagAwareCache] = None,
        *,
        cache_ttl: Optional[int] = None,
    ):
        self.db = db
        self.repository = self.repository_class(db)
        self.cache = cache
        self.cache_ttl = settings.CACHE_TTL if cache_ttl is None else cache_ttl

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------

    @property
    def uses_cache(self) -> bool:
        return self.cache is not None and self.cache_tag is not None

    def cache_key(self, page: int, limit: int) -> str:
        return f"{self.cache_prefix}_{page}_{limit}"

    async def list(self, page: int = 1, limit: int = 10) -> List[Dict[str, Any]]:
        """Lista registros paginados, ordenados por ID.

        Args:
            page: Número da página (começando em 1)
            limit: Itens por página

        Returns:
            Registros projetados no grupo de leitura
        """
        if not self.uses_cache:
            return await self._load_page(page, limit)

        return await self.cache.get_or_set(
            self.cache_key(page, limit),
            lambda: self._load_page(page, limit),
            ttl=self.cache_ttl,
            tags=[self.cache_tag],
        )

    async def _load_page(self, page: int, limit: int) -> List[Dict[str, Any]]:
        offset = (page - 1) * limit
        records = await self.repository.find_by(limit=limit, offset=offset)
        return project_many(records, self.read_group)

    async def get_record(self, id: int) -> ModelType:
        """Busca o registro ou lança NotFoundError."""
        record = await self.repository.get(id)
        if record is None:
            raise NotFoundError(
                f"{self.resource_name} não encontrado(a)",
                resource_type=self.model.__name__,
                resource_id=id,
            )
        return record

    async def get(self, id: int) -> Dict[str, Any]:
        """Retorna o registro projetado no grupo de leitura."""
        return project(await self.get_record(id), self.read_group)

    # ------------------------------------------------------------------
    # Escrita
    # ------------------------------------------------------------------

    def deserialize(self, payload: Any) -> Dict[str, Any]:
        """Converte o payload bruto nos campos do grupo de escrita.

        Chaves fora do grupo são ignoradas; campos ausentes não
        aparecem no resultado.

        Raises:
            ValidationError: Se algum campo tiver tipo inválido
        """
        if not isinstance(payload, Mapping):
            raise ValidationError([
                Violation(field="", rule="type", message="O corpo da requisição deve ser um objeto JSON.")
            ])

        restricted = restrict_to_group(payload, self.write_group)
        try:
            data = self.write_schema.model_validate(restricted)
        except PydanticValidationError as e:
            raise ValidationError(violations_from_pydantic(e))
        return data.model_dump(exclude_unset=True)

    async def resolve(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Hook para converter referências (ids) em registros."""
        return changes

    async def create(self, payload: Any) -> Dict[str, Any]:
        """Cria um registro a partir do payload.

        Nada é persistido nem invalidado se a validação falhar.

        Raises:
            ValidationError: Se o payload ou o registro forem inválidos
        """
        changes = await self.resolve(self.deserialize(payload))
        record = merge(self.model(), changes)
        validate_record(record, self.constraints)

        await self.repository.save(record)
        await self.invalidate_cache()

        logger.info(f"{self.model.__name__} criado(a): id={record.id}")
        return project(record, self.read_group)

    async def update(self, id: int, payload: Any) -> Dict[str, Any]:
        """Atualização parcial: só os campos presentes são alterados.

        Raises:
            NotFoundError: Se o registro não existir
            ValidationError: Se o registro resultante for inválido
        """
        record = await self.get_record(id)
        changes = await self.resolve(self.deserialize(payload))
        merge(record, changes)
        await self._validate_or_discard(record)

        await self.repository.save(record)
        await self.invalidate_cache()

        logger.info(f"{self.model.__name__} atualizado(a): id={id} campos={sorted(changes)}")
        return project(record, self.read_group)

    async def delete(self, id: int) -> None:
        """Remove o registro.

        Raises:
            NotFoundError: Se o registro não existir
            ConflictError: Se o registro ainda for referenciado
        """
        record = await self.get_record(id)
        await self.repository.delete(record)
        await self.invalidate_cache()

        logger.info(f"{self.model.__name__} removido(a): id={id}")

    async def _validate_or_discard(self, record: ModelType) -> None:
        try:
            validate_record(record, self.constraints)
        except ValidationError:
            await self.repository.discard_changes()
            raise

    async def invalidate_cache(self) -> int:
        """Descarta todas as páginas cacheadas deste tipo."""
        if not self.uses_cache:
            return 0
        return await self.cache.invalidate_by_tag(self.cache_tag)
