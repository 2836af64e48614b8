"""
Testes de integração do Lambda - Product Description Generator
Eventos sintéticos do API Gateway passando pelo lambda_handler completo,
com os providers externos (Supabase, Resend, Gemini) mockados
Executar: pytest tests/integration/test_lambda_integration.py -v
"""
import json
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import infrastructure.adapters.input.lambda_handler as handler_module
from domain.exceptions import (
    ConfigurationException,
    DescriptionGenerationException,
    LeadRepositoryException
)
from infrastructure.adapters.input.lambda_handler import lambda_handler
from tests.integration.assertions import (
    assert_json_error,
    assert_security_headers,
    assert_status,
    get_header
)
from tests.integration.conftest import build_api_gateway_event, build_generate_event

pytestmark = pytest.mark.integration


class TestGenerateEndpoint:
    """Testes do endpoint POST /api/generate"""

    def test_generate_success(self, mock_context, env, providers):
        """Descrição gerada, lead salvo e sequência de emails disparada"""
        response = lambda_handler(build_generate_event(), mock_context)

        assert_status(response, 200)
        assert json.loads(response['body']) == {'description': 'Stay hydrated in style.'}

        providers.repository.upsert_lead.assert_awaited_once()
        providers.generator.generate.assert_awaited_once()
        # Sem STRIPE_CHECKOUT_LINK: imediato + 2 horas
        assert providers.sender.send.await_count == 2

    def test_second_request_uses_cache(self, mock_context, env, providers):
        """REGRA: Mesmo produto em 5 minutos não chama o LLM de novo"""
        lambda_handler(build_generate_event(email='first@example.com'), mock_context)
        response = lambda_handler(build_generate_event(email='second@example.com'), mock_context)

        assert_status(response, 200)
        assert json.loads(response['body'])['description'] == 'Stay hydrated in style.'
        providers.generator.generate.assert_awaited_once()
        # Cache hit envia só o email imediato
        assert providers.sender.send.await_count == 3

    @pytest.mark.parametrize('payload,message', [
        ({'productName': 'Mug', 'productFeatures': 'Ceramic', 'email': 'not-an-email'},
         'Invalid email address format'),
        ({'productFeatures': 'Ceramic', 'email': 'buyer@example.com'},
         'Product name is required and must be text'),
        ({'productName': 'Mug', 'productFeatures': '<>', 'email': 'buyer@example.com'},
         'Product features cannot be empty')
    ])
    def test_invalid_payload_returns_400(self, mock_context, env, providers, payload, message):
        event = build_api_gateway_event('POST', '/api/generate', body=payload)
        response = lambda_handler(event, mock_context)

        assert_json_error(response, 400, message)
        providers.generator.generate.assert_not_awaited()

    def test_invalid_json_returns_400(self, mock_context, env, providers):
        event = build_api_gateway_event('POST', '/api/generate', body='{not json')
        response = lambda_handler(event, mock_context)

        assert_json_error(response, 400, 'Invalid JSON body')

    @pytest.mark.parametrize('method', ['GET', 'PUT', 'DELETE'])
    def test_other_methods_return_405(self, mock_context, method):
        response = lambda_handler(build_api_gateway_event(method, '/api/generate'), mock_context)

        assert_json_error(response, 405, 'Method Not Allowed')

    def test_rate_limit_returns_429(self, mock_context, env, providers):
        """REGRA: 6ª requisição do mesmo IP em 60s -> 429 com Retry-After"""
        headers = {'X-Forwarded-For': '198.51.100.7, 10.0.0.1'}
        for _ in range(5):
            response = lambda_handler(
                build_api_gateway_event('POST', '/api/generate', body={}, headers=headers),
                mock_context
            )
            assert response['statusCode'] == 400

        response = lambda_handler(build_generate_event(headers=headers), mock_context)

        assert_json_error(response, 429, 'Too many requests. Please try again later.')
        assert 0 < int(get_header(response, 'Retry-After')) <= 60
        providers.generator.generate.assert_not_awaited()

        # Outro IP não é afetado
        other = lambda_handler(build_generate_event(source_ip='192.0.2.55'), mock_context)
        assert other['statusCode'] == 200

    def test_missing_credentials_returns_generic_500(self, mock_context, providers):
        headers = {'X-Request-ID': 'req-from-client'}
        with patch.dict(os.environ, {'GEMINI_API_KEY': '', 'ENVIRONMENT': 'production'}):
            response = lambda_handler(build_generate_event(headers=headers), mock_context)

        assert_json_error(response, 500, 'An error occurred while generating your description.')
        assert json.loads(response['body'])['requestId'] == 'req-from-client'

    def test_llm_failure_returns_500(self, mock_context, env, providers):
        providers.generator.generate.side_effect = DescriptionGenerationException(
            "Gemini generation request failed"
        )

        response = lambda_handler(build_generate_event(), mock_context)

        assert_json_error(response, 500, 'An error occurred while generating your description.')
        providers.sender.send.assert_not_awaited()

    def test_database_failure_does_not_block_generation(self, mock_context, env, providers):
        providers.repository.upsert_lead.side_effect = LeadRepositoryException("Supabase upsert failed")

        response = lambda_handler(build_generate_event(), mock_context)

        assert_status(response, 200)


class TestCommonHeaders:

    def test_security_headers_and_request_id_echo(self, mock_context, env, providers):
        event = build_api_gateway_event('GET', '/api/health', headers={'X-Request-ID': 'abc-123'})
        response = lambda_handler(event, mock_context)

        assert_security_headers(response)
        assert get_header(response, 'X-Request-ID') == 'abc-123'
        assert get_header(response, 'Access-Control-Allow-Origin') == '*'

    def test_generated_request_id(self, mock_context):
        response = lambda_handler(build_api_gateway_event('GET', '/privacy'), mock_context)

        assert get_header(response, 'X-Request-ID').startswith('req_')

    def test_unknown_route_returns_404(self, mock_context):
        response = lambda_handler(build_api_gateway_event('GET', '/api/unknown'), mock_context)

        assert_json_error(response, 404, 'Not Found')
        assert_security_headers(response)


class TestUnsubscribeEndpoint:
    """Testes de GET/POST /api/unsubscribe"""

    def test_link_success(self, mock_context, env, providers):
        event = build_api_gateway_event(
            'GET', '/api/unsubscribe', query_parameters={'email': 'Buyer@Example.com'}
        )
        response = lambda_handler(event, mock_context)

        assert_status(response, 200, 'text/html')
        assert 'Buyer@Example.com' in response['body']
        email, _ = providers.repository.mark_unsubscribed.await_args.args
        assert email == 'buyer@example.com'

    @pytest.mark.parametrize('query', [None, {'email': 'not-an-email'}, {'email': 'a@b.co\n'}])
    def test_invalid_link_returns_400_html(self, mock_context, env, providers, query):
        event = build_api_gateway_event('GET', '/api/unsubscribe', query_parameters=query)
        response = lambda_handler(event, mock_context)

        assert_status(response, 400, 'text/html')
        assert 'Invalid unsubscribe link' in response['body']
        providers.repository.mark_unsubscribed.assert_not_awaited()

    def test_link_database_error_still_shows_success(self, mock_context, env, providers):
        providers.repository.mark_unsubscribed.side_effect = LeadRepositoryException("Supabase update failed")

        event = build_api_gateway_event(
            'GET', '/api/unsubscribe', query_parameters={'email': 'buyer@example.com'}
        )
        response = lambda_handler(event, mock_context)

        assert_status(response, 200, 'text/html')

    def test_link_unexpected_error_returns_500_html(self, mock_context, env, providers):
        providers.get_lead_repository.side_effect = ConfigurationException("Missing required environment variables")

        event = build_api_gateway_event(
            'GET', '/api/unsubscribe', query_parameters={'email': 'buyer@example.com'}
        )
        response = lambda_handler(event, mock_context)

        assert_status(response, 500, 'text/html')
        assert 'error processing your unsubscribe request' in response['body']

    def test_post_json(self, mock_context, env, providers):
        event = build_api_gateway_event('POST', '/api/unsubscribe', body={'email': 'buyer@example.com'})
        response = lambda_handler(event, mock_context)

        assert_status(response, 200)
        assert json.loads(response['body']) == {'success': True, 'message': 'Successfully unsubscribed'}

    def test_post_form(self, mock_context, env, providers):
        event = build_api_gateway_event(
            'POST',
            '/api/unsubscribe',
            body='email=buyer%40example.com',
            headers={'Content-Type': 'application/x-www-form-urlencoded'}
        )
        response = lambda_handler(event, mock_context)

        assert_status(response, 200)
        providers.repository.mark_unsubscribed.assert_awaited_once()

    @pytest.mark.parametrize('body,message', [
        ({}, 'Email is required'),
        ({'email': 'not-an-email'}, 'Invalid email format'),
        ({'email': 42}, 'Invalid email format')
    ])
    def test_post_invalid_returns_400(self, mock_context, env, providers, body, message):
        event = build_api_gateway_event('POST', '/api/unsubscribe', body=body)
        response = lambda_handler(event, mock_context)

        assert_json_error(response, 400, message)

    def test_post_unexpected_error_returns_500(self, mock_context, env, providers):
        providers.get_lead_repository.side_effect = RuntimeError('pool exhausted')

        event = build_api_gateway_event('POST', '/api/unsubscribe', body={'email': 'buyer@example.com'})
        response = lambda_handler(event, mock_context)

        assert_json_error(response, 500, 'Failed to unsubscribe. Please try again.')

    def test_other_methods_return_405(self, mock_context):
        response = lambda_handler(build_api_gateway_event('DELETE', '/api/unsubscribe'), mock_context)

        assert_json_error(response, 405, 'Method Not Allowed')


class TestPrivacyEndpoint:

    @pytest.mark.parametrize('path', ['/privacy', '/api/privacy'])
    def test_privacy_page(self, mock_context, path):
        response = lambda_handler(build_api_gateway_event('GET', path), mock_context)

        assert_status(response, 200, 'text/html')
        assert 'Privacy Policy' in response['body']
        assert 'Last updated:' in response['body']

    def test_post_returns_405(self, mock_context):
        response = lambda_handler(build_api_gateway_event('POST', '/privacy'), mock_context)

        assert_json_error(response, 405, 'Method Not Allowed')


class TestHealthEndpoint:
    """Testes do endpoint GET /api/health"""

    def test_all_services_ok(self, mock_context, env, providers):
        response = lambda_handler(build_api_gateway_event('GET', '/api/health'), mock_context)

        assert_status(response, 200)
        body = json.loads(response['body'])
        assert body['status'] == 'ok'
        assert body['environment'] == 'production'
        assert body['services']['database'] == {'status': 'ok', 'message': 'Database connection successful'}
        providers.repository.ping.assert_awaited_once()

    def test_missing_key_is_degraded(self, mock_context, env, providers):
        with patch.dict(os.environ, {'RESEND_API_KEY': ''}):
            response = lambda_handler(build_api_gateway_event('GET', '/api/health'), mock_context)

        assert_status(response, 200)
        body = json.loads(response['body'])
        assert body['status'] == 'degraded'
        assert body['services']['resend_api']['status'] == 'not_configured'

    def test_database_error_returns_503(self, mock_context, env, providers):
        providers.repository.ping.side_effect = LeadRepositoryException("Supabase ping failed")

        response = lambda_handler(build_api_gateway_event('GET', '/api/health'), mock_context)

        assert_status(response, 503)
        body = json.loads(response['body'])
        assert body['status'] == 'error'
        assert body['services']['database']['status'] == 'error'

    def test_probe_failure_returns_503(self, mock_context, env, providers):
        with patch.object(
            handler_module.CheckHealthUseCase, 'execute', new=AsyncMock(side_effect=RuntimeError('boom'))
        ):
            response = lambda_handler(build_api_gateway_event('GET', '/api/health'), mock_context)

        assert_status(response, 503)
        body = json.loads(response['body'])
        assert body['message'] == 'Health check failed'
        assert body['error'] == 'Internal server error'

    def test_post_returns_405(self, mock_context):
        response = lambda_handler(build_api_gateway_event('POST', '/api/health'), mock_context)

        assert_status(response, 405)
        assert json.loads(response['body']) == {'status': 'error', 'message': 'Method Not Allowed'}


class TestWarmup:

    @pytest.mark.parametrize('event', [
        {'warmup': True},
        {'source': 'aws.events', 'detail-type': 'Scheduled Event'}
    ])
    def test_warmup_ping(self, mock_context, event):
        session_manager = MagicMock()
        session_manager.get_session = AsyncMock()

        with patch.object(handler_module.warmup_service, 'get_session_manager', return_value=session_manager):
            response = lambda_handler(event, mock_context)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'ok': True, 'warmup': True}
        session_manager.get_session.assert_awaited_once()
        assert_security_headers(response)
        assert get_header(response, 'X-Request-ID').startswith('req_')
        assert get_header(response, 'Access-Control-Allow-Origin') == '*'


def test_entrypoint_exports_handler():
    import lambda_function

    assert lambda_function.lambda_handler is lambda_handler
