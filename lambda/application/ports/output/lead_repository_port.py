"""
Output Port: Interface do Repositório de Leads
Define o contrato que deve ser implementado pela camada de infraestrutura
"""
from abc import ABC, abstractmethod
from datetime import datetime

from domain.entities.lead import Lead


class ILeadRepository(ABC):
    """Interface para repositório de leads"""

    @abstractmethod
    async def upsert_lead(self, lead: Lead) -> None:
        """
        Insere lead ou atualiza o existente (conflito por email)

        Raises:
            LeadRepositoryException: Se o banco rejeitar a escrita
        """
        pass

    @abstractmethod
    async def mark_unsubscribed(self, email: str, unsubscribed_at: datetime) -> None:
        """
        Marca todas as linhas do email como descadastradas

        Raises:
            LeadRepositoryException: Se o banco rejeitar a escrita
        """
        pass

    @abstractmethod
    async def ping(self) -> None:
        """
        Consulta mínima para health check

        Raises:
            LeadRepositoryException: Se o banco não responder
        """
        pass
