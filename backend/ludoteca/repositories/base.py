"""Repositório base para operações CRUD no banco.

Cada repositório cuida de um modelo e executa uma única operação
por chamada (um commit por mutação). Erros do SQLAlchemy são
convertidos em exceções da aplicação.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ludoteca.core.exceptions import ConflictError, DatabaseError
from ludoteca.models.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class Repository(Generic[ModelType]):
    """Repositório genérico sobre uma sessão SQLAlchemy async."""

    model: Type[ModelType]

    def __init__(self, db: AsyncSession, model: Optional[Type[ModelType]] = None):
        self.db = db
        if model is not None:
            self.model = model

    @property
    def table(self) -> str:
        return self.model.__tablename__

    async def get(self, id: int) -> Optional[ModelType]:
        """Busca um registro por ID."""
        return await self.find_one_by(id=id)

    async def find_one_by(self, **criteria: Any) -> Optional[ModelType]:
        """Busca o primeiro registro que satisfaz todos os critérios."""
        query = select(self.model).filter_by(**criteria).limit(1)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._database_error("select", e)
        return result.unique().scalars().first()

    async def find_by(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ModelType]:
        """Lista registros filtrados, ordenados por ID, com paginação.

        Args:
            criteria: Igualdades campo=valor (opcional)
            limit: Máximo de registros
            offset: Quantos registros pular
        """
        query = select(self.model).filter_by(**(criteria or {})).order_by(self.model.id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._database_error("select", e)
        return list(result.unique().scalars().all())

    async def count(self, **criteria: Any) -> int:
        query = select(func.count()).select_from(self.model).filter_by(**criteria)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._database_error("count", e)
        return result.scalar_one()

    async def save(self, obj: ModelType) -> ModelType:
        """Insere ou atualiza o registro e faz commit."""
        obj_id = obj.id
        self.db.add(obj)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Violação de integridade em {self.table}: {e.orig}")
            raise ConflictError(
                f"Operação viola uma restrição de integridade em {self.table}",
                resource_type=self.model.__name__,
                resource_id=obj_id,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._database_error("save", e)
        logger.debug(f"DB save on {self.table} (id={obj.id})")
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Remove o registro e faz commit."""
        obj_id = obj.id
        try:
            await self.db.delete(obj)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Remoção bloqueada por FK em {self.table}: {e.orig}")
            raise ConflictError(
                f"{self.model.__name__} {obj_id} ainda é referenciado por outros registros",
                resource_type=self.model.__name__,
                resource_id=obj_id,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._database_error("delete", e)
        logger.debug(f"DB delete on {self.table} (id={obj_id})")

    async def discard_changes(self) -> None:
        """Desfaz alterações pendentes (ex: merge que não passou na validação)."""
        await self.db.rollback()

    def _database_error(self, operation: str, error: SQLAlchemyError) -> DatabaseError:
        logger.error(f"Erro de banco em {operation} on {self.table}: {error}")
        return DatabaseError(
            f"Erro ao executar {operation} em {self.table}",
            operation=operation,
            table=self.table,
            details={"error": str(error)},
        )
