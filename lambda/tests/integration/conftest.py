"""
Fixtures compartilhadas para testes de integração
"""
import json
import os
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import infrastructure.adapters.input.lambda_handler as handler_module


CREDENTIALS = {
    'SUPABASE_URL': 'https://project.supabase.co',
    'SUPABASE_SERVICE_KEY': 'service-key',
    'RESEND_API_KEY': 're_test',
    'GEMINI_API_KEY': 'gemini-test',
    'BASE_URL': 'https://app.example.com',
    'FROM_EMAIL': 'Team <team@example.com>',
    'ENVIRONMENT': 'production'
}


class MockContext:
    """Mock do Lambda Context para testes locais"""
    def __init__(self):
        self.function_name = 'product-description-generator'
        self.function_version = '$LATEST'
        self.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:product-description-generator'
        self.memory_limit_in_mb = '512'
        self.aws_request_id = 'test-request-id-12345'
        self.log_group_name = '/aws/lambda/product-description-generator'
        self.log_stream_name = '2025/01/15/[$LATEST]test'

    def get_remaining_time_in_millis(self):
        return 30000  # 30 segundos


@pytest.fixture
def mock_context():
    """Fixture que retorna MockContext para todos os testes"""
    return MockContext()


@pytest.fixture(autouse=True)
def fresh_container_state():
    """Rate limiter e cache são estado do container: zerar entre testes"""
    handler_module.rate_limiter.reset()
    handler_module.response_cache.clear()
    yield
    handler_module.rate_limiter.reset()
    handler_module.response_cache.clear()


@pytest.fixture
def env():
    """Ambiente de produção com todas as credenciais"""
    with patch.dict(os.environ, CREDENTIALS):
        yield


@pytest.fixture
def providers():
    """
    Factory mockada com os três providers

    Usage:
        def test_x(providers):
            providers.generator.generate.return_value = 'Texto'
    """
    repository = AsyncMock()
    sender = AsyncMock()
    sender.provider_name = 'Resend'
    sender.send.return_value = 'email_123'
    generator = AsyncMock()
    generator.provider_name = 'Gemini'
    generator.generate.return_value = '  Stay hydrated in style.  '

    factory = MagicMock()
    factory.get_lead_repository.return_value = repository
    factory.get_email_sender.return_value = sender
    factory.get_description_generator.return_value = generator
    factory.repository = repository
    factory.sender = sender
    factory.generator = generator

    with patch.object(handler_module, 'get_provider_factory', return_value=factory):
        yield factory


def build_api_gateway_event(
    method: str,
    path: str,
    body: Any = None,
    query_parameters: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
    source_ip: str = '203.0.113.10'
) -> Dict[str, Any]:
    """
    Builder genérico para eventos do API Gateway

    Args:
        method: HTTP method (GET, POST, etc)
        path: Request path (/api/generate)
        body: dict (JSON encoded) ou string crua
        query_parameters: Query string params dict
        headers: Headers extras (sobrescrevem os padrões)
        source_ip: requestContext.identity.sourceIp
    """
    event_headers = {
        'Accept': 'application/json',
        'Content-Type': 'application/json',
        'User-Agent': 'pytest'
    }
    event_headers.update(headers or {})

    if isinstance(body, dict):
        body = json.dumps(body)

    return {
        'resource': path,
        'path': path,
        'httpMethod': method,
        'headers': event_headers,
        'multiValueHeaders': {},
        'pathParameters': None,
        'queryStringParameters': query_parameters,
        'multiValueQueryStringParameters': (
            {key: [value] for key, value in query_parameters.items()} if query_parameters else None
        ),
        'body': body,
        'isBase64Encoded': False,
        'requestContext': {
            'httpMethod': method,
            'path': path,
            'stage': 'test',
            'requestId': 'apigw-request-id',
            'identity': {'sourceIp': source_ip}
        }
    }


def build_generate_event(
    product_name: str = 'Smart Water Bottle',
    product_features: str = 'Keeps drinks cold for 24h, tracks hydration',
    email: str = 'buyer@example.com',
    **kwargs
) -> Dict[str, Any]:
    """Builder para evento POST /api/generate"""
    return build_api_gateway_event(
        method='POST',
        path='/api/generate',
        body={'productName': product_name, 'productFeatures': product_features, 'email': email},
        **kwargs
    )
