"""
Retry Policy - backoff exponencial (tenacity) compartilhado pelos providers HTTP
Só erros transitórios são repetidos: 429/5xx, falha de conexão e timeout
"""
import asyncio
import json
import logging
from typing import Any, Dict

import aiohttp
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log
)

from domain.constants import API
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class TransientHTTPError(Exception):
    """Resposta 429/5xx que merece nova tentativa"""
    def __init__(self, status: int, payload: Any = None):
        super().__init__(f"HTTP {status}")
        self.status = status
        self.payload = payload


def is_transient_error(exc: BaseException) -> bool:
    return isinstance(exc, (TransientHTTPError, aiohttp.ClientConnectionError, asyncio.TimeoutError))


def transient_retry(attempts: int = API.RETRY_ATTEMPTS, wait_max: float = API.RETRY_WAIT_MAX):
    """
    Decorator de retry para chamadas HTTP async

    Args:
        attempts: Total de tentativas (1 = sem retry)
        wait_max: Espera máxima entre tentativas (segundos)
    """
    return retry(
        retry=retry_if_exception(is_transient_error),
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=min(API.RETRY_WAIT_MIN, wait_max), max=wait_max),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True
    )


async def read_payload(response: aiohttp.ClientResponse) -> Any:
    """Corpo JSON quando houver; texto cru caso contrário"""
    text = await response.text()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


async def check_status(response: aiohttp.ClientResponse) -> Any:
    """
    Lê o corpo e classifica o status

    Returns:
        Payload de respostas 2xx

    Raises:
        TransientHTTPError: Para 429/5xx (retry)
        aiohttp.ClientResponseError: Para os demais 4xx
    """
    payload = await read_payload(response)
    if response.status in API.RETRYABLE_STATUS:
        raise TransientHTTPError(response.status, payload)
    if response.status >= 400:
        raise aiohttp.ClientResponseError(
            request_info=response.request_info,
            history=response.history,
            status=response.status,
            message=_error_message(payload)
        )
    return payload


def _error_message(payload: Any) -> str:
    if isinstance(payload, dict):
        return str(payload.get('message') or payload.get('error') or payload)
    return str(payload or '')


def error_details(exc: BaseException) -> Dict[str, Any]:
    """Detalhes estruturados para as exceções de domínio"""
    if isinstance(exc, TransientHTTPError):
        return {"status": exc.status, "body": exc.payload}
    if isinstance(exc, aiohttp.ClientResponseError):
        return {"status": exc.status, "message": exc.message}
    return {"error_type": type(exc).__name__}
