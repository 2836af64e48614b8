"""
Output Port: Interface para o cache de respostas geradas
Usado para desacoplar use cases de detalhes do cache (memória, Redis, etc.)
"""
from typing import Optional, Protocol


class IResponseCache(Protocol):
    """Interface para cache chave -> descrição"""

    def get(self, key: str) -> Optional[str]:
        """
        Busca descrição ainda válida
        """
        ...

    def set(self, key: str, description: str) -> None:
        """
        Armazena descrição com o TTL do cache
        """
        ...

    def purge_expired(self) -> int:
        """
        Remove entradas expiradas e retorna quantas saíram
        """
        ...
