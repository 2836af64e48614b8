"""Gemini Description Generator - generateContent via API REST do Google"""

import asyncio
from typing import Any, Dict, Optional
from ddtrace import tracer
import aiohttp

from application.ports.output.description_generator_port import IDescriptionGenerator
from domain.constants import API
from domain.exceptions import DescriptionGenerationException
from infrastructure.adapters.output.http.aiohttp_session_manager import (
    AiohttpSessionManager,
    get_aiohttp_session_manager
)
from infrastructure.adapters.output.http.retry_policy import (
    TransientHTTPError,
    check_status,
    error_details,
    transient_retry
)


class GeminiDescriptionGenerator(IDescriptionGenerator):
    """
    Provider para Google Gemini (generativelanguage API)

    O timeout total da geração é controlado pelo use case;
    aqui ficam só os retries de erros transitórios.
    """

    def __init__(
        self,
        api_key: str,
        model: str = API.GEMINI_DEFAULT_MODEL,
        session_manager: Optional[AiohttpSessionManager] = None,
        retry_attempts: int = API.RETRY_ATTEMPTS,
        retry_wait_max: float = API.RETRY_WAIT_MAX
    ):
        self.api_key = api_key
        self.model = model
        self.url = f"{API.GEMINI_BASE_URL}/models/{model}:generateContent"
        self.session_manager = session_manager or get_aiohttp_session_manager()
        self.retry_attempts = retry_attempts
        self.retry_wait_max = retry_wait_max

    @property
    def provider_name(self) -> str:
        return "Gemini"

    @staticmethod
    def extract_text(data: Dict[str, Any]) -> str:
        """
        Concatena as partes de texto do primeiro candidato

        Resposta sem candidatos (ex: bloqueada por safety) vira string vazia.
        """
        candidates = (data or {}).get('candidates') or []
        if not candidates or not isinstance(candidates[0], dict):
            return ''
        parts = (candidates[0].get('content') or {}).get('parts') or []
        return ''.join(part.get('text', '') for part in parts if isinstance(part, dict))

    @tracer.wrap(resource="gemini.generate")
    async def generate(self, prompt: str) -> str:
        payload = {'contents': [{'parts': [{'text': prompt}]}]}
        headers = {
            'x-goog-api-key': self.api_key,
            'Content-Type': 'application/json'
        }
        session = await self.session_manager.get_session()

        @transient_retry(attempts=self.retry_attempts, wait_max=self.retry_wait_max)
        async def generate_with_retry():
            async with session.post(self.url, json=payload, headers=headers) as response:
                return await check_status(response)

        try:
            data = await generate_with_retry()
        except (TransientHTTPError, aiohttp.ClientError, asyncio.TimeoutError) as ex:
            details = error_details(ex)
            details['model'] = self.model
            raise DescriptionGenerationException(
                "Gemini generation request failed",
                details=details
            ) from ex

        if not isinstance(data, dict):
            raise DescriptionGenerationException(
                "Gemini returned an unexpected payload",
                details={"model": self.model}
            )

        return self.extract_text(data)
