"""
Request Context - request_id e IP do cliente por invocação

Usage:
    from shared.utils.request_context import get_request_id, set_request_id

    request_id = resolve_request_id(headers)
    set_request_id(request_id)
"""
import random
import string
import time
from contextvars import ContextVar
from typing import Any, Dict, Optional

_request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

_BASE36 = string.ascii_lowercase + string.digits


def get_request_id() -> Optional[str]:
    """Get current request_id (None outside a request)."""
    return _request_id_var.get()


def set_request_id(request_id: str) -> None:
    """Set request_id for current context."""
    _request_id_var.set(request_id)


def clear_request_id() -> None:
    """Clear request_id from context."""
    _request_id_var.set(None)


def generate_request_id(now_ms: Optional[int] = None) -> str:
    """req_<epoch ms>_<9 chars base36>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = ''.join(random.choices(_BASE36, k=9))
    return f"req_{now_ms}_{suffix}"


def normalize_headers(headers: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """API Gateway não garante o case dos headers"""
    if not headers:
        return {}
    return {str(key).lower(): str(value) for key, value in headers.items() if value is not None}


def resolve_request_id(headers: Optional[Dict[str, Any]]) -> str:
    """Reaproveita X-Request-ID do cliente ou gera um novo"""
    incoming = normalize_headers(headers).get('x-request-id', '').strip()
    return incoming or generate_request_id()


def get_client_ip(event: Dict[str, Any]) -> str:
    """
    IP de origem do cliente

    Ordem: primeiro item de X-Forwarded-For, X-Real-IP,
    sourceIp do API Gateway, 'unknown'.
    """
    headers = normalize_headers(event.get('headers'))

    forwarded = headers.get('x-forwarded-for', '').split(',')[0].strip()
    if forwarded:
        return forwarded

    real_ip = headers.get('x-real-ip', '').strip()
    if real_ip:
        return real_ip

    request_context = event.get('requestContext', {}) or {}
    identity = request_context.get('identity', {}) or {}
    return identity.get('sourceIp') or 'unknown'
