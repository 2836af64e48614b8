"""
Input Port: Interface para descadastrar um lead
"""
from abc import ABC, abstractmethod

from application.dtos.requests import UnsubscribeRequest
from application.dtos.responses import UnsubscribeResponse


class IUnsubscribeLeadUseCase(ABC):
    """Interface para caso de uso de unsubscribe"""

    @abstractmethod
    async def execute(self, request: UnsubscribeRequest) -> UnsubscribeResponse:
        """
        Marca o email como descadastrado

        Raises:
            InvalidInputException: Se o email tiver formato inválido
        """
        pass
