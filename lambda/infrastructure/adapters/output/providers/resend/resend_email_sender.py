"""Resend Email Sender - envio imediato e agendado via API REST da Resend"""

import asyncio
from typing import Any, Dict, Optional
from ddtrace import tracer
import aiohttp

from application.ports.output.email_sender_port import IEmailSender
from domain.constants import API
from domain.entities.email_message import EmailMessage
from domain.exceptions import EmailDeliveryException
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


class ResendEmailSender(IEmailSender):
    """
    Provider de email transacional (Resend)

    Emails com scheduled_at são agendados no próprio provider;
    o Idempotency-Key garante que retries não dupliquem o envio.
    """

    def __init__(
        self,
        api_key: str,
        session_manager: Optional[AiohttpSessionManager] = None,
        retry_attempts: int = API.RETRY_ATTEMPTS,
        retry_wait_max: float = API.RETRY_WAIT_MAX
    ):
        self.api_key = api_key
        self.url = f"{API.RESEND_BASE_URL}/emails"
        self.session_manager = session_manager or get_aiohttp_session_manager()
        self.retry_attempts = retry_attempts
        self.retry_wait_max = retry_wait_max

    @property
    def provider_name(self) -> str:
        return "Resend"

    @staticmethod
    def build_payload(message: EmailMessage, to: str, sender: str) -> Dict[str, Any]:
        payload = {
            'from': sender,
            'to': [to],
            'subject': message.subject,
            'html': message.html
        }
        if message.is_scheduled:
            payload['scheduled_at'] = message.scheduled_at.isoformat()
        return payload

    @tracer.wrap(resource="resend.send")
    async def send(
        self,
        message: EmailMessage,
        to: str,
        sender: str,
        idempotency_key: Optional[str] = None
    ) -> str:
        headers = {
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json'
        }
        if idempotency_key:
            headers['Idempotency-Key'] = idempotency_key

        payload = self.build_payload(message, to, sender)
        session = await self.session_manager.get_session()

        @transient_retry(attempts=self.retry_attempts, wait_max=self.retry_wait_max)
        async def send_with_retry():
            async with session.post(self.url, json=payload, headers=headers) as response:
                return await check_status(response)

        try:
            data = await send_with_retry()
        except (TransientHTTPError, aiohttp.ClientError, asyncio.TimeoutError) as ex:
            details = error_details(ex)
            details['template'] = message.template
            raise EmailDeliveryException(
                f"Resend rejected '{message.template}' email",
                details=details
            ) from ex

        return (data or {}).get('id', '') if isinstance(data, dict) else ''
