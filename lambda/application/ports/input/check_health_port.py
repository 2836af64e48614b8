"""
Input Port: Interface para o health check
"""
from abc import ABC, abstractmethod

from application.dtos.responses import HealthReport


class ICheckHealthUseCase(ABC):
    """Interface para caso de uso de health check"""

    @abstractmethod
    async def execute(self) -> HealthReport:
        """Verifica banco e configuração dos providers"""
        pass
