"""Configuração do banco de dados com SQLAlchemy async.

Cria o engine assíncrono, a fábrica de sessões e a dependency
que entrega uma sessão por requisição.
"""

from typing import AsyncGenerator

from loguru import logger
from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from ludoteca.core.config import settings


class Base(DeclarativeBase):
    """Classe base para todos os modelos SQLAlchemy.

    Define convenções de nomenclatura para tabelas e constraints.
    """

    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s",
        }
    )


def is_sqlite(url: str) -> bool:
    return str(url).startswith("sqlite")


def create_engine_from_url(url: str, **kwargs) -> AsyncEngine:
    """Cria engine assíncrono adaptado para SQLite ou PostgreSQL.

    No SQLite ativa a verificação de chaves estrangeiras, que vem
    desligada por padrão, para que a política de FK do banco valha.
    """
    if is_sqlite(url):
        kwargs.setdefault("poolclass", NullPool)
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        new_engine = create_async_engine(url, echo=settings.DEBUG, **kwargs)

        @event.listens_for(new_engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return new_engine

    return create_async_engine(
        url,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        **kwargs,
    )


# Engine assíncrono da aplicação
engine = create_engine_from_url(str(settings.DATABASE_URL))

# Session factory assíncrona
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=True,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency para obter sessão de banco de dados.

    Gerencia automaticamente o ciclo de vida da sessão:
    - Cria nova sessão
    - Faz yield da sessão para uso
    - Faz rollback em caso de erro
    - Fecha sessão automaticamente

    Yields:
        AsyncSession: Sessão de banco de dados configurada
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Erro na sessão de banco de dados: {str(e)}")
            raise
        finally:
            await session.close()


async def create_tables(target: AsyncEngine = None) -> None:
    """Cria as tabelas de todos os modelos registrados."""
    # Registra os modelos no metadata antes do create_all
    import ludoteca.models  # noqa: F401

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tabelas verificadas/criadas")
