"""
Configurações e fixtures compartilhadas para testes unitários
"""
import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from domain.entities.product_description_request import ProductDescriptionRequest
from shared.config.settings import Settings


FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Relógio fixo para timestamps determinísticos"""
    return lambda: FIXED_NOW


@pytest.fixture
def make_product():
    """
    Factory fixture para criar ProductDescriptionRequest com valores padrão

    Usage:
        def test_something(make_product):
            product = make_product(product_name='Caneca')
    """
    def _make(
        product_name: str = 'Smart Water Bottle',
        product_features: str = 'Keeps drinks cold for 24h, tracks hydration',
        email: str = 'buyer@example.com'
    ) -> ProductDescriptionRequest:
        return ProductDescriptionRequest(
            product_name=product_name,
            product_features=product_features,
            email=email
        )

    return _make


@pytest.fixture
def make_settings():
    """Factory fixture para Settings com todas as credenciais preenchidas"""
    def _make(**overrides) -> Settings:
        values = dict(
            supabase_url='https://project.supabase.co',
            supabase_service_key='service-key',
            resend_api_key='re_test',
            gemini_api_key='gemini-test',
            gemini_model='gemini-pro',
            from_email='Team <team@example.com>',
            base_url='https://app.example.com',
            stripe_checkout_link=None,
            environment='production',
            service_name='product-description-generator',
            cors_origin='*',
            leads_table_name='leads'
        )
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def make_http_response():
    """
    Factory fixture para respostas aiohttp mockadas (async context manager)

    Usage:
        response = make_http_response(200, {"id": "abc"})
        mock_session.post = MagicMock(return_value=response)
    """
    def _make(status: int = 200, payload=None):
        mock_response = AsyncMock()
        mock_response.status = status
        mock_response.text = AsyncMock(
            return_value='' if payload is None else (
                payload if isinstance(payload, str) else json.dumps(payload)
            )
        )
        mock_response.request_info = MagicMock()
        mock_response.history = ()
        mock_response.__aenter__ = AsyncMock(return_value=mock_response)
        mock_response.__aexit__ = AsyncMock(return_value=False)
        return mock_response

    return _make
