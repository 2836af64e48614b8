"""
Rate Limiter - janela deslizante por IP na memória do container
"""
import math
import random
import time
from collections import deque
from typing import Callable, Deque, Dict

from domain.constants import RateLimit
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class SlidingWindowRateLimiter:
    """
    Limita requisições por chave (IP do cliente)

    - Guarda os timestamps aceitos dentro da janela
    - Requisição rejeitada não é registrada
    - Uma fração das chamadas varre o mapa inteiro para remover IPs inativos
    """

    def __init__(
        self,
        window_seconds: float = RateLimit.WINDOW_SECONDS,
        max_requests: int = RateLimit.MAX_REQUESTS,
        clock: Callable[[], float] = time.monotonic,
        rng: Callable[[], float] = random.random,
        sweep_probability: float = RateLimit.SWEEP_PROBABILITY
    ):
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.clock = clock
        self.rng = rng
        self.sweep_probability = sweep_probability
        self._requests: Dict[str, Deque[float]] = {}

    def _prune(self, timestamps: Deque[float], now: float) -> None:
        while timestamps and now - timestamps[0] >= self.window_seconds:
            timestamps.popleft()

    def allow(self, key: str) -> bool:
        """
        Registra a requisição se ainda houver espaço na janela

        Returns:
            True quando aceita, False quando o limite já foi atingido
        """
        now = self.clock()
        timestamps = self._requests.setdefault(key, deque())
        self._prune(timestamps, now)

        allowed = len(timestamps) < self.max_requests
        if allowed:
            timestamps.append(now)

        if self.rng() < self.sweep_probability:
            self.sweep()

        return allowed

    def retry_after(self, key: str) -> int:
        """Segundos até o timestamp mais antigo sair da janela"""
        timestamps = self._requests.get(key)
        if not timestamps:
            return 0
        now = self.clock()
        remaining = self.window_seconds - (now - timestamps[0])
        return max(0, math.ceil(remaining))

    def sweep(self) -> int:
        """Remove chaves sem requisições na janela; retorna quantas saíram"""
        now = self.clock()
        removed = 0
        for key in list(self._requests):
            timestamps = self._requests[key]
            self._prune(timestamps, now)
            if not timestamps:
                del self._requests[key]
                removed += 1
        if removed:
            logger.debug("Rate limiter sweep", removed=removed, tracked=len(self._requests))
        return removed

    def reset(self) -> None:
        self._requests.clear()

    def __len__(self) -> int:
        return len(self._requests)
