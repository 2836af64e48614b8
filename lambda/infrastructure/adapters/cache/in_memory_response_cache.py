"""
In-Memory Response Cache - cache de descrições geradas (cachetools TTLCache)
Vive na memória do container; cada Lambda quente tem o seu
"""
import time
from typing import Callable, Optional

from cachetools import TTLCache

from domain.constants import Cache
from domain.entities.product_description_request import build_cache_key
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class InMemoryResponseCache:
    """
    Cache chave -> descrição com TTL de 5 minutos

    A chave combina nome e início das features normalizados,
    então pedidos iguais com caixa diferente reaproveitam a descrição.
    """

    def __init__(
        self,
        ttl_seconds: float = Cache.TTL_SECONDS,
        maxsize: int = Cache.MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl_seconds, timer=timer)

    @staticmethod
    def build_key(product_name: str, product_features: str) -> str:
        return build_cache_key(product_name, product_features)

    def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    def set(self, key: str, description: str) -> None:
        self._cache[key] = description.strip()

    def purge_expired(self) -> int:
        """Remove entradas vencidas; retorna quantas saíram"""
        expired = self._cache.expire()
        removed = len(expired) if expired else 0
        if removed:
            logger.debug("Expired cache entries removed", removed=removed)
        return removed

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
