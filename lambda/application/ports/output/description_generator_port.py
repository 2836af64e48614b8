"""Description Generator Port - Interface genérica para provedores de LLM"""
from abc import ABC, abstractmethod


class IDescriptionGenerator(ABC):
    """
    Interface genérica para geração de texto.
    Hoje só Gemini, mas a interface facilita troca futura de provider.
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Gera texto a partir do prompt

        Args:
            prompt: Prompt completo

        Returns:
            Texto gerado (pode vir vazio; o use case valida)

        Raises:
            DescriptionGenerationException: Se o provider falhar
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex: 'Gemini')"""
        pass
