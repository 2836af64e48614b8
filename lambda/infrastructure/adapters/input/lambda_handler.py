"""
Input Adapter: Lambda Handler HTTP (100% ASYNC)
Presentation Layer: gerencia requisições HTTP e delega para use cases
"""
import json
import time
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict
from urllib.parse import parse_qs
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig, Response
from aws_lambda_powertools.utilities.typing import LambdaContext

# Application Layer - Use Cases (ASYNC)
from application.dtos.requests import GenerateDescriptionRequest, UnsubscribeRequest
from application.use_cases.check_health_use_case import CheckHealthUseCase
from application.use_cases.generate_description_use_case import GenerateDescriptionUseCase
from application.use_cases.unsubscribe_lead_use_case import UnsubscribeLeadUseCase

# Domain Layer
from domain.constants import Messages, RateLimit
from domain.exceptions import (
    ConfigurationException,
    DescriptionGenerationException,
    InvalidInputException,
    MethodNotAllowedException,
    RateLimitExceededException
)
from domain.services.email_templates import EmailTemplates

# Infrastructure Layer - Adapters
from infrastructure.adapters.cache.in_memory_response_cache import InMemoryResponseCache
from infrastructure.adapters.input.exception_handler_service import ExceptionHandlerService
from infrastructure.adapters.input.html_pages import (
    privacy_policy_page,
    unsubscribe_error_page,
    unsubscribe_invalid_link_page,
    unsubscribe_success_page
)
from infrastructure.adapters.input.rate_limiter import SlidingWindowRateLimiter
from infrastructure.adapters.input.warmup_service import WarmupService
from infrastructure.adapters.output.http.aiohttp_session_manager import get_aiohttp_session_manager
from infrastructure.adapters.output.providers.provider_factory import get_provider_factory

# Shared Layer - Utilities
from shared.config.settings import load_settings
from shared.config.logger_config import get_logger
from shared.utils.request_context import (
    clear_request_id,
    get_client_ip,
    get_request_id,
    normalize_headers,
    resolve_request_id,
    set_request_id
)
from shared.utils.validators import EmailValidator, ProductRequestValidator

# Configurar Logger com service name do DD_SERVICE
logger = get_logger()

CORS_ORIGIN = load_settings().cors_origin
CORS_ALLOW_HEADERS = 'Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token,X-Requested-With,X-Request-ID'
SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'X-XSS-Protection': '1; mode=block',
    'Referrer-Policy': 'strict-origin-when-cross-origin'
}

app = APIGatewayRestResolver(
    cors=CORSConfig(
        allow_origin=CORS_ORIGIN,
        allow_headers=['X-Request-ID'],
        expose_headers=['X-Request-ID'],
        max_age=86400
    )
)

# =============================
# Estado do container (persistente entre invocações Lambda)
# =============================
_global_event_loop = None

rate_limiter = SlidingWindowRateLimiter()
response_cache = InMemoryResponseCache()

# =============================
# Exception Handlers (Delegados para ExceptionHandlerService)
# =============================

exception_service = ExceptionHandlerService()

app.exception_handler(InvalidInputException)(exception_service.handle_invalid_input)
app.exception_handler(RateLimitExceededException)(exception_service.handle_rate_limit_exceeded)
app.exception_handler(MethodNotAllowedException)(exception_service.handle_method_not_allowed)
app.exception_handler(ConfigurationException)(exception_service.handle_configuration_error)
app.exception_handler(DescriptionGenerationException)(exception_service.handle_generation_error)
app.exception_handler(Exception)(exception_service.handle_unexpected_error)
app.not_found(exception_service.handle_not_found)


def _json_response(status_code: int, body: Dict[str, Any], headers: Dict[str, str] = None) -> Response:
    return Response(
        status_code=status_code,
        content_type="application/json",
        headers=headers,
        body=json.dumps(body)
    )


def _html_response(status_code: int, page: str) -> Response:
    return Response(status_code=status_code, content_type="text/html", body=page)


def _apply_common_headers(response: Dict[str, Any], request_id: str) -> Dict[str, Any]:
    """Headers de segurança, X-Request-ID e CORS em toda resposta (inclusive warm-up)"""
    if response.get('headers') is None:
        response['headers'] = {}

    response['headers'].update(SECURITY_HEADERS)
    response['headers']['X-Request-ID'] = request_id
    response['headers']['Access-Control-Allow-Origin'] = CORS_ORIGIN
    response['headers']['Access-Control-Allow-Headers'] = CORS_ALLOW_HEADERS
    response['headers']['Access-Control-Allow-Methods'] = 'GET,POST,OPTIONS'
    response['headers']['Access-Control-Max-Age'] = '86400'
    return response


def _reject_method():
    raise MethodNotAllowedException(
        Messages.METHOD_NOT_ALLOWED,
        details={
            "method": app.current_event.http_method,
            "path": app.current_event.path
        }
    )


def _parse_body() -> Dict[str, Any]:
    """
    Corpo JSON ou form-urlencoded como dict

    Raises:
        InvalidInputException: Se o JSON for inválido ou não for objeto
    """
    raw_body = app.current_event.decoded_body or ''
    headers = normalize_headers(app.current_event.raw_event.get('headers'))

    if 'application/x-www-form-urlencoded' in headers.get('content-type', '').lower():
        return {key: values[0] for key, values in parse_qs(raw_body).items()}

    if not raw_body.strip():
        return {}

    try:
        payload = json.loads(raw_body)
    except ValueError as ex:
        raise InvalidInputException(
            "Invalid JSON body",
            details={"error": str(ex)}
        ) from ex

    if not isinstance(payload, dict):
        raise InvalidInputException("Request body must be a JSON object")
    return payload


# =============================
# Routes (Async execution with sync wrappers for AWS Powertools compatibility)
# =============================

@app.post("/api/generate")
def generate_description_route():
    """
    POST /api/generate
    Body: { "productName": "...", "productFeatures": "...", "email": "..." }

    Rate limit por IP -> validação -> LLM (com cache) -> sequência de emails
    """
    client_ip = get_client_ip(app.current_event.raw_event)
    if not rate_limiter.allow(client_ip):
        raise RateLimitExceededException(
            RateLimit.MESSAGE,
            details={"ip": client_ip},
            retry_after=rate_limiter.retry_after(client_ip)
        )

    product = ProductRequestValidator.validate(_parse_body())

    settings = load_settings()
    settings.require_generation_credentials()
    factory = get_provider_factory(settings)

    use_case = GenerateDescriptionUseCase(
        lead_repository=factory.get_lead_repository(),
        email_sender=factory.get_email_sender(),
        description_generator=factory.get_description_generator(),
        response_cache=response_cache,
        templates=EmailTemplates(settings.base_url),
        from_email=settings.from_email,
        checkout_link=settings.stripe_checkout_link
    )

    # Run async code with persistent loop
    result = run_async(use_case.execute(
        GenerateDescriptionRequest(product=product, request_id=get_request_id())
    ))

    return result.to_api_response()


@app.route("/api/generate", method=["GET", "PUT", "PATCH", "DELETE"])
def generate_method_not_allowed_route():
    _reject_method()


@app.get("/api/unsubscribe")
def unsubscribe_link_route():
    """
    GET /api/unsubscribe?email=user@example.com

    Link dos emails: sempre responde HTML
    """
    email = app.current_event.get_query_string_value(name="email", default_value=None)

    if not email or not EmailValidator.is_valid_loose(email):
        logger.warning("Invalid unsubscribe link", email=email)
        return _html_response(400, unsubscribe_invalid_link_page())

    try:
        settings = load_settings()
        repository = get_provider_factory(settings).get_lead_repository()
        use_case = UnsubscribeLeadUseCase(repository)
        run_async(use_case.execute(UnsubscribeRequest(email=email)))
    except Exception as ex:
        logger.error("Unsubscribe error", error=str(ex), exc_info=True)
        return _html_response(500, unsubscribe_error_page())

    return _html_response(200, unsubscribe_success_page(email))


@app.post("/api/unsubscribe")
def unsubscribe_form_route():
    """
    POST /api/unsubscribe
    Body: { "email": "user@example.com" } (JSON ou form)
    """
    email = _parse_body().get('email')
    if not email:
        raise InvalidInputException("Email is required")
    if not isinstance(email, str):
        raise InvalidInputException("Invalid email format")

    try:
        settings = load_settings()
        repository = get_provider_factory(settings).get_lead_repository()
        use_case = UnsubscribeLeadUseCase(repository)
        run_async(use_case.execute(UnsubscribeRequest(email=email)))
    except InvalidInputException:
        raise
    except Exception as ex:
        logger.error("Unsubscribe error", error=str(ex), exc_info=True)
        return _json_response(500, {"error": "Failed to unsubscribe. Please try again."})

    return {"success": True, "message": "Successfully unsubscribed"}


@app.route("/api/unsubscribe", method=["PUT", "PATCH", "DELETE"])
def unsubscribe_method_not_allowed_route():
    _reject_method()


@app.get("/privacy")
@app.get("/api/privacy")
def privacy_policy_route():
    """GET /privacy - política de privacidade (HTML)"""
    return _html_response(200, privacy_policy_page())


@app.route("/privacy", method=["POST", "PUT", "PATCH", "DELETE"])
@app.route("/api/privacy", method=["POST", "PUT", "PATCH", "DELETE"])
def privacy_method_not_allowed_route():
    _reject_method()


@app.get("/api/health")
def health_route():
    """
    GET /api/health

    200 para ok/degraded, 503 quando alguma dependência está com erro
    """
    settings = load_settings()
    use_case = CheckHealthUseCase(
        settings=settings,
        lead_repository_factory=lambda: get_provider_factory(settings).get_lead_repository()
    )

    try:
        report = run_async(use_case.execute())
    except Exception as ex:
        logger.error("Health check failed", error=str(ex), exc_info=True)
        return _json_response(503, {
            "status": "error",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "message": "Health check failed",
            "error": str(ex) if settings.is_development else "Internal server error"
        })

    return _json_response(report.http_status, report.to_api_response())


@app.route("/api/health", method=["POST", "PUT", "PATCH", "DELETE"])
def health_method_not_allowed_route():
    return _json_response(405, {"status": "error", "message": Messages.METHOD_NOT_ALLOWED})


# =============================
# Lambda Handler (100% ASYNC)
# =============================

@logger.inject_lambda_context()
def lambda_handler(event, context: LambdaContext):
    """
    AWS Lambda main function - 100% ASYNC

    AWS Lambda Powertools manages:
    - REST routing with exception handlers
    - CORS
    - JSON serialization
    - Structured logging

    Available routes:
    - POST     /api/generate
    - GET/POST /api/unsubscribe
    - GET      /privacy, /api/privacy
    - GET      /api/health
    """
    headers = (event.get('headers') if isinstance(event, dict) else None) or {}
    request_id = resolve_request_id(headers)

    warmup_response = warmup_service.handle_warmup_ping(event)
    if warmup_response is not None:
        return _apply_common_headers(warmup_response, request_id)

    started_at = time.perf_counter()
    set_request_id(request_id)
    logger.append_keys(request_id=request_id)

    logger.info(
        "Request received",
        method=event.get('httpMethod', 'N/A'),
        path=event.get('path', 'N/A'),
        ip=get_client_ip(event),
        user_agent=normalize_headers(headers).get('user-agent', 'N/A')
    )

    try:
        response = app.resolve(event, context)
    finally:
        clear_request_id()

    _apply_common_headers(response, request_id)

    status_code = response.get('statusCode', 'N/A')
    logger.info(
        "Request completed",
        status_code=status_code,
        duration_ms=round((time.perf_counter() - started_at) * 1000, 2)
    )
    logger.remove_keys(['request_id'])

    return response


def get_or_create_event_loop():
    """
    Retorna event loop global persistente

    - Reutiliza event loop entre invocações Lambda (warm starts)
    - Sessão aiohttp permanece válida entre invocações
    """
    global _global_event_loop

    # Se loop existe e não está fechado, reutilizar
    if _global_event_loop is not None and not _global_event_loop.is_closed():
        return _global_event_loop

    # Criar novo loop se necessário
    _global_event_loop = asyncio.new_event_loop()
    asyncio.set_event_loop(_global_event_loop)

    return _global_event_loop


def run_async(coro):
    """
    Executa coroutine no event loop global (NÃO fecha o loop)

    Args:
        coro: Coroutine a ser executada

    Returns:
        Resultado da coroutine
    """
    loop = get_or_create_event_loop()
    return loop.run_until_complete(coro)


warmup_service = WarmupService(
    logger=logger,
    get_or_create_event_loop=get_or_create_event_loop,
    run_async=run_async,
    get_session_manager=get_aiohttp_session_manager,
    cors_origin=CORS_ORIGIN
)
