"""Supabase Lead Repository - tabela de leads via PostgREST (HTTP async)"""

import asyncio
from datetime import datetime
from typing import Any, Dict, Optional
from ddtrace import tracer
import aiohttp

from application.ports.output.lead_repository_port import ILeadRepository
from domain.constants import API
from domain.entities.lead import Lead
from domain.exceptions import LeadRepositoryException
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


class SupabaseLeadRepository(ILeadRepository):
    """
    Repositório de leads no Supabase

    - upsert com conflito por email (merge-duplicates)
    - update de unsubscribe por filtro eq.email
    - ping com select id limit 1 para o health check
    """

    def __init__(
        self,
        supabase_url: str,
        service_key: str,
        table_name: str = 'leads',
        session_manager: Optional[AiohttpSessionManager] = None,
        retry_attempts: int = API.RETRY_ATTEMPTS,
        retry_wait_max: float = API.RETRY_WAIT_MAX
    ):
        self.base_url = f"{supabase_url.rstrip('/')}{API.SUPABASE_REST_PATH}/{table_name}"
        self.service_key = service_key
        self.table_name = table_name
        self.session_manager = session_manager or get_aiohttp_session_manager()
        self.retry_attempts = retry_attempts
        self.retry_wait_max = retry_wait_max

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            'apikey': self.service_key,
            'Authorization': f"Bearer {self.service_key}",
            'Content-Type': 'application/json'
        }
        if prefer:
            headers['Prefer'] = prefer
        return headers

    async def _request(
        self,
        method: str,
        operation: str,
        params: Dict[str, str],
        headers: Dict[str, str],
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        session = await self.session_manager.get_session()

        @transient_retry(attempts=self.retry_attempts, wait_max=self.retry_wait_max)
        async def request_with_retry():
            async with session.request(
                method,
                self.base_url,
                params=params,
                json=payload,
                headers=headers
            ) as response:
                return await check_status(response)

        try:
            return await request_with_retry()
        except (TransientHTTPError, aiohttp.ClientError, asyncio.TimeoutError) as ex:
            details = error_details(ex)
            body = details.get('body')
            if isinstance(body, dict):
                details.update({
                    'code': body.get('code'),
                    'details': body.get('details'),
                    'hint': body.get('hint')
                })
            details['operation'] = operation
            raise LeadRepositoryException(
                f"Supabase {operation} failed",
                details=details
            ) from ex

    @tracer.wrap(resource="supabase.upsert_lead")
    async def upsert_lead(self, lead: Lead) -> None:
        await self._request(
            'POST',
            'upsert',
            params={'on_conflict': 'email'},
            headers=self._headers(prefer='resolution=merge-duplicates,return=minimal'),
            payload=lead.to_record()
        )

    @tracer.wrap(resource="supabase.mark_unsubscribed")
    async def mark_unsubscribed(self, email: str, unsubscribed_at: datetime) -> None:
        await self._request(
            'PATCH',
            'unsubscribe',
            params={'email': f"eq.{email}"},
            headers=self._headers(prefer='return=minimal'),
            payload={
                'unsubscribed': True,
                'unsubscribed_at': unsubscribed_at.isoformat()
            }
        )

    @tracer.wrap(resource="supabase.ping")
    async def ping(self) -> None:
        await self._request(
            'GET',
            'ping',
            params={'select': 'id', 'limit': '1'},
            headers=self._headers()
        )
