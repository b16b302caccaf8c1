"""Cache com invalidação por tags.

Este módulo implementa a camada de cache usada pelas listagens paginadas:
- Provedor em memória (padrão) e provedor Redis (distribuído)
- Expiração por TTL
- Invalidação grosseira por tag: invalidar uma tag descarta todas as
  chaves já armazenadas com ela, qualquer que seja a página/limite
- Métricas de hit/miss via Prometheus
"""

import copy
import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Set

import redis.asyncio as redis
from loguru import logger
from prometheus_client import Counter
from redis.exceptions import RedisError

from ludoteca.core.exceptions import CacheError


CACHE_HITS = Counter("ludoteca_cache_hits_total", "Leituras atendidas pelo cache", ["backend"])
CACHE_MISSES = Counter("ludoteca_cache_misses_total", "Leituras não encontradas no cache", ["backend"])
CACHE_INVALIDATIONS = Counter(
    "ludoteca_cache_invalidated_keys_total",
    "Chaves descartadas por invalidação de tag",
    ["backend"],
)

_MISS = object()


@dataclass
class CacheEntry:
    """Entrada do cache com metadados."""
    key: str
    value: Any
    created_at: float = field(default_factory=time.time)
    expires_at: Optional[float] = None
    tags: Set[str] = field(default_factory=set)

    def is_expired(self) -> bool:
        """Verifica se a entrada expirou."""
        if self.expires_at is None:
            return False
        return time.time() >= self.expires_at

    @property
    def ttl(self) -> Optional[int]:
        """Segundos restantes de vida (None se não expira)."""
        if self.expires_at is None:
            return None
        return max(0, int(self.expires_at - time.time()))


class ICacheProvider(ABC):
    """Interface para provedores de cache."""

    name = "abstract"

    @abstractmethod
    async def get(self, key: str) -> Optional[CacheEntry]:
        """Obtém entrada do cache."""

    @abstractmethod
    async def set(self, entry: CacheEntry) -> bool:
        """Armazena entrada e a registra no índice de cada tag."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove entrada do cache."""

    @abstractmethod
    async def invalidate_tag(self, tag: str) -> int:
        """Remove todas as entradas registradas na tag."""

    @abstractmethod
    async def clear(self) -> bool:
        """Limpa todo o cache."""

    async def connect(self) -> None:
        """Abre conexões necessárias (opcional)."""

    async def close(self) -> None:
        """Fecha conexões abertas (opcional)."""


class MemoryCacheProvider(ICacheProvider):
    """Provedor de cache em memória do processo.

    Limitado a ``max_entries`` chaves: ao atingir o limite, entradas
    expiradas são descartadas e, se ainda faltar espaço, as mais antigas.
    """

    name = "memory"

    def __init__(self, max_entries: int = 1000):
        self.max_entries = max_entries
        self._entries: Dict[str, CacheEntry] = {}
        self._tag_index: Dict[str, Set[str]] = {}

    async def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired():
            await self.delete(key)
            return None
        return CacheEntry(
            key=entry.key,
            value=copy.deepcopy(entry.value),
            created_at=entry.created_at,
            expires_at=entry.expires_at,
            tags=set(entry.tags),
        )

    async def set(self, entry: CacheEntry) -> bool:
        stored = CacheEntry(
            key=entry.key,
            value=copy.deepcopy(entry.value),
            created_at=entry.created_at,
            expires_at=entry.expires_at,
            tags=set(entry.tags),
        )
        # reinserção move a chave para o fim da ordem de despejo
        await self.delete(entry.key)
        await self._ensure_space()

        self._entries[entry.key] = stored
        for tag in stored.tags:
            self._tag_index.setdefault(tag, set()).add(entry.key)
        return True

    async def _ensure_space(self) -> None:
        """Garante espaço para mais uma entrada."""
        if len(self._entries) < self.max_entries:
            return

        expired = [key for key, entry in self._entries.items() if entry.is_expired()]
        for key in expired:
            await self.delete(key)

        evicted = 0
        while self._entries and len(self._entries) >= self.max_entries:
            await self.delete(next(iter(self._entries)))
            evicted += 1

        if expired or evicted:
            logger.debug(f"Cache em memória: {len(expired)} expiradas e {evicted} antigas removidas")

    async def delete(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        for tag in entry.tags:
            keys = self._tag_index.get(tag)
            if keys is not None:
                keys.discard(key)
        return True

    async def invalidate_tag(self, tag: str) -> int:
        keys = self._tag_index.pop(tag, set())
        count = 0
        for key in keys:
            if self._entries.pop(key, None) is not None:
                count += 1
        return count

    async def clear(self) -> bool:
        self._entries.clear()
        self._tag_index.clear()
        return True

    def __len__(self) -> int:
        return len(self._entries)


class RedisCacheProvider(ICacheProvider):
    """Provedor de cache distribuído usando Redis.

    Valores são gravados como JSON com expiração nativa do Redis.
    Cada tag é um SET com as chaves associadas a ela.
    """

    name = "redis"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        prefix: str = "ludoteca:cache:",
        client: Optional[redis.Redis] = None,
    ):
        self.redis_url = redis_url
        self.prefix = prefix
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            if not self.redis_url:
                raise CacheError("URL do Redis não configurada", operation="connect")
            self._client = redis.from_url(self.redis_url, decode_responses=True)
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self.prefix}tag:{tag}"

    async def connect(self) -> None:
        try:
            await self.client.ping()
        except RedisError as e:
            logger.error(f"❌ Erro ao conectar com Redis: {e}")
            raise CacheError(f"Redis indisponível: {e}", operation="connect") from e
        logger.info("✅ Conexão com Redis estabelecida")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis desconectado")

    async def get(self, key: str) -> Optional[CacheEntry]:
        try:
            raw = await self.client.get(self._key(key))
        except RedisError as e:
            logger.error(f"Erro ao ler cache do Redis {key}: {e}")
            raise CacheError(str(e), operation="get") from e

        if raw is None:
            return None

        payload = json.loads(raw)
        return CacheEntry(
            key=key,
            value=payload["value"],
            created_at=payload.get("created_at", time.time()),
            expires_at=payload.get("expires_at"),
            tags=set(payload.get("tags", [])),
        )

    async def set(self, entry: CacheEntry) -> bool:
        ttl = entry.ttl
        if ttl == 0:
            return False

        payload = json.dumps({
            "value": entry.value,
            "created_at": entry.created_at,
            "expires_at": entry.expires_at,
            "tags": sorted(entry.tags),
        })

        try:
            await self.client.set(self._key(entry.key), payload, ex=ttl)
            for tag in entry.tags:
                await self._index_tag(self._tag_key(tag), entry.key, ttl)
        except RedisError as e:
            logger.error(f"Erro ao salvar cache no Redis {entry.key}: {e}")
            raise CacheError(str(e), operation="set") from e
        return True

    async def _index_tag(self, tag_key: str, key: str, ttl: Optional[int]) -> None:
        """Registra a chave na tag; o SET vive pelo menos tanto quanto seus membros."""
        current = await self.client.ttl(tag_key)
        await self.client.sadd(tag_key, key)
        if ttl is None:
            await self.client.persist(tag_key)
        elif current == -2 or 0 <= current < ttl:
            # -2: SET recém-criado; -1: já persistente por um membro sem expiração
            await self.client.expire(tag_key, ttl)

    async def delete(self, key: str) -> bool:
        try:
            return await self.client.delete(self._key(key)) > 0
        except RedisError as e:
            logger.error(f"Erro ao remover cache do Redis {key}: {e}")
            raise CacheError(str(e), operation="delete") from e

    async def invalidate_tag(self, tag: str) -> int:
        tag_key = self._tag_key(tag)
        try:
            members = await self.client.smembers(tag_key)
            count = 0
            if members:
                count = await self.client.delete(*(self._key(k) for k in members))
            await self.client.delete(tag_key)
            return count
        except RedisError as e:
            logger.error(f"Erro ao invalidar tag {tag} no Redis: {e}")
            raise CacheError(str(e), operation="invalidate_tag") from e

    async def clear(self) -> bool:
        try:
            keys = [key async for key in self.client.scan_iter(match=f"{self.prefix}*")]
            if keys:
                await self.client.delete(*keys)
        except RedisError as e:
            logger.error(f"Erro ao limpar cache do Redis: {e}")
            raise CacheError(str(e), operation="clear") from e
        return True


class TagAwareCache:
    """Fachada de cache usada pelos serviços.

    Encapsula um provedor e aplica TTL padrão, tags e métricas.
    """

    def __init__(self, provider: Optional[ICacheProvider] = None, default_ttl: int = 3600):
        self.provider = provider or MemoryCacheProvider()
        self.default_ttl = default_ttl

    async def connect(self) -> None:
        await self.provider.connect()

    async def close(self) -> None:
        await self.provider.close()

    async def get(self, key: str, default: Any = None) -> Any:
        """Obtém valor do cache ou ``default`` em caso de miss."""
        entry = await self.provider.get(key)
        if entry is None:
            CACHE_MISSES.labels(self.provider.name).inc()
            return default
        CACHE_HITS.labels(self.provider.name).inc()
        return entry.value

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> bool:
        """Armazena valor no cache.

        Args:
            key: Chave do cache
            value: Valor a ser armazenado
            ttl: Tempo de vida em segundos (padrão: ``default_ttl``)
            tags: Tags para invalidação em grupo
        """
        ttl = self.default_ttl if ttl is None else ttl
        entry = CacheEntry(
            key=key,
            value=value,
            expires_at=time.time() + ttl if ttl > 0 else None,
            tags=set(tags or ()),
        )
        return await self.provider.set(entry)

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl: Optional[int] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Any:
        """Retorna o valor em cache ou calcula, armazena e retorna.

        Requisições concorrentes para a mesma chave podem calcular o valor
        mais de uma vez; a última escrita prevalece.
        """
        value = await self.get(key, _MISS)
        if value is not _MISS:
            logger.debug(f"Cache hit: {key}")
            return value

        logger.debug(f"Cache miss: {key}")
        value = await factory()
        await self.set(key, value, ttl=ttl, tags=tags)
        return value

    async def delete(self, key: str) -> bool:
        return await self.provider.delete(key)

    async def invalidate_by_tag(self, tag: str) -> int:
        """Invalida todas as entradas com uma tag específica."""
        count = await self.provider.invalidate_tag(tag)
        CACHE_INVALIDATIONS.labels(self.provider.name).inc(count)
        logger.debug(f"Tag de cache invalidada: {tag} ({count} chaves)")
        return count

    async def clear(self) -> bool:
        return await self.provider.clear()


def create_cache(backend: str, redis_url: Optional[str] = None,
                 prefix: str = "ludoteca:cache:", default_ttl: int = 3600,
                 max_entries: int = 1000) -> TagAwareCache:
    """Cria o cache a partir do nome do backend configurado."""
    if backend == "redis":
        provider: ICacheProvider = RedisCacheProvider(redis_url=redis_url, prefix=prefix)
    else:
        provider = MemoryCacheProvider(max_entries=max_entries)
    return TagAwareCache(provider, default_ttl=default_ttl)
