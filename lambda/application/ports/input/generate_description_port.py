"""
Input Port: Interface para gerar descrição de produto
"""
from abc import ABC, abstractmethod

from application.dtos.requests import GenerateDescriptionRequest
from application.dtos.responses import GenerateDescriptionResponse


class IGenerateDescriptionUseCase(ABC):
    """Interface para caso de uso de geração de descrição"""

    @abstractmethod
    async def execute(self, request: GenerateDescriptionRequest) -> GenerateDescriptionResponse:
        """
        Gera (ou reaproveita do cache) a descrição, salva o lead e envia emails

        Args:
            request: Pedido sanitizado + request_id

        Returns:
            GenerateDescriptionResponse

        Raises:
            DescriptionGenerationException: Se o LLM falhar ou exceder o timeout
        """
        pass
