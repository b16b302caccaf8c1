"""Configurações centralizadas da Ludoteca API.

Utiliza Pydantic Settings para validação e carregamento de variáveis de ambiente.
Todas as configurações são tipadas e validadas automaticamente.
"""

import secrets
from functools import lru_cache
from typing import Any, List, Optional, Union

from pydantic import AnyHttpUrl, ConfigDict, field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configurações principais da aplicação.

    Carrega configurações de variáveis de ambiente com validação automática.
    Suporta arquivos .env para desenvolvimento local.
    """

    # Informações do projeto
    PROJECT_NAME: str = "Ludoteca API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "API de catálogo de jogos, categorias e editoras"

    # API
    API_PREFIX: str = "/api"
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60  # 1 hora
    BCRYPT_ROUNDS: int = 12

    # Debug e desenvolvimento
    DEBUG: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Banco de dados
    DATABASE_URL: Optional[str] = None

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str]) -> Any:
        """Constrói URL de conexão do banco de dados."""
        if isinstance(v, str) and v:
            return v
        # Sem DATABASE_URL definida, usa SQLite para desenvolvimento
        return "sqlite+aiosqlite:///./ludoteca.db"

    # Pool de conexões do banco (ignorado no SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600

    # Cria as tabelas no startup (desenvolvimento)
    AUTO_CREATE_TABLES: bool = True

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: Optional[str] = None
    REDIS_DB: int = 0
    REDIS_URL: Optional[str] = None

    @model_validator(mode='after')
    def assemble_connections(self) -> 'Settings':
        """Monta URL de conexão do Redis."""
        if not self.REDIS_URL:
            if self.REDIS_PASSWORD:
                self.REDIS_URL = f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
            else:
                self.REDIS_URL = f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return self

    # Cache
    CACHE_BACKEND: str = "memory"  # memory | redis
    CACHE_TTL: int = 3600  # 1 hora
    CACHE_PREFIX: str = "ludoteca:cache:"
    CACHE_MAX_ENTRIES: int = 1000  # apenas no backend em memória

    @field_validator("CACHE_BACKEND")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "redis"):
            raise ValueError("CACHE_BACKEND deve ser 'memory' ou 'redis'")
        return v

    # Paginação
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100
    MAX_PAGE: int = 1_000_000

    @model_validator(mode="after")
    def validate_paging_bounds(self) -> "Settings":
        # offset = (page - 1) * limit precisa caber em um INTEGER de 64 bits
        if (self.MAX_PAGE - 1) * self.MAX_PAGE_LIMIT >= 2 ** 63:
            raise ValueError("MAX_PAGE * MAX_PAGE_LIMIT excede o offset suportado pelo banco")
        return self

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"

    # Métricas
    ENABLE_METRICS: bool = True

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="forbid"
    )


@lru_cache()
def get_settings() -> Settings:
    """Retorna instância das configurações baseada no ambiente."""
    return Settings()


# Instância global das configurações
settings = get_settings()
