"""
Unit Tests: política de retry e classificação de status HTTP
"""
import asyncio
from unittest.mock import AsyncMock

import aiohttp
import pytest

from infrastructure.adapters.output.http.retry_policy import (
    TransientHTTPError,
    check_status,
    error_details,
    is_transient_error,
    read_payload,
    transient_retry
)


class TestCheckStatus:

    @pytest.mark.asyncio
    async def test_success_returns_json(self, make_http_response):
        response = make_http_response(200, {'id': 'abc'})
        assert await check_status(response) == {'id': 'abc'}

    @pytest.mark.asyncio
    async def test_empty_body(self, make_http_response):
        response = make_http_response(201)
        assert await check_status(response) is None

    @pytest.mark.asyncio
    async def test_non_json_body(self, make_http_response):
        response = make_http_response(200, 'plain text')
        assert await read_payload(response) == 'plain text'

    @pytest.mark.asyncio
    @pytest.mark.parametrize('status', [429, 500, 502, 503, 504])
    async def test_transient_status(self, make_http_response, status):
        response = make_http_response(status, {'message': 'busy'})

        with pytest.raises(TransientHTTPError) as exc_info:
            await check_status(response)

        assert exc_info.value.status == status
        assert exc_info.value.payload == {'message': 'busy'}

    @pytest.mark.asyncio
    async def test_client_error(self, make_http_response):
        response = make_http_response(422, {'message': 'validation_error'})

        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await check_status(response)

        assert exc_info.value.status == 422
        assert exc_info.value.message == 'validation_error'


class TestTransientRetry:

    def test_is_transient_error(self):
        assert is_transient_error(TransientHTTPError(503))
        assert is_transient_error(asyncio.TimeoutError())
        assert is_transient_error(aiohttp.ClientConnectionError())
        assert not is_transient_error(ValueError('boom'))

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        call = AsyncMock(side_effect=[TransientHTTPError(503), TransientHTTPError(502), 'ok'])

        @transient_retry(attempts=3, wait_max=0)
        async def fetch():
            return await call()

        assert await fetch() == 'ok'
        assert call.await_count == 3

    @pytest.mark.asyncio
    async def test_reraises_after_last_attempt(self):
        call = AsyncMock(side_effect=TransientHTTPError(503))

        @transient_retry(attempts=2, wait_max=0)
        async def fetch():
            return await call()

        with pytest.raises(TransientHTTPError):
            await fetch()
        assert call.await_count == 2

    @pytest.mark.asyncio
    async def test_does_not_retry_non_transient(self):
        call = AsyncMock(side_effect=ValueError('bad'))

        @transient_retry(attempts=3, wait_max=0)
        async def fetch():
            return await call()

        with pytest.raises(ValueError):
            await fetch()
        assert call.await_count == 1


class TestErrorDetails:

    def test_transient(self):
        assert error_details(TransientHTTPError(503, {'x': 1})) == {'status': 503, 'body': {'x': 1}}

    def test_timeout(self):
        assert error_details(asyncio.TimeoutError()) == {'error_type': 'TimeoutError'}
