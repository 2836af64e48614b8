"""
Exception Handler Service
Centraliza tratamento de exceções com logging estruturado
"""
import json
from aws_lambda_powertools.event_handler import Response

from domain.constants import Messages, RateLimit
from domain.exceptions import (
    ConfigurationException,
    DescriptionGenerationException,
    InvalidInputException,
    MethodNotAllowedException,
    RateLimitExceededException,
)
from shared.config.logger_config import logger as app_logger
from shared.config.settings import load_settings
from shared.utils.request_context import get_request_id


class ExceptionHandlerService:
    """
    Service para centralizar tratamento de exceções da aplicação
    Responsável por converter exceções em respostas HTTP apropriadas
    """
    logger = app_logger

    def __init__(self, logger=app_logger):
        # Permite injeção de logger compartilhado para manter contexto de correlação
        if logger:
            ExceptionHandlerService.logger = logger

    @staticmethod
    def _server_error(ex: Exception, generic_message: str) -> Response:
        """500 com a mensagem real só em development"""
        message = str(ex) if load_settings().is_development else generic_message
        return Response(
            status_code=500,
            content_type="application/json",
            body=json.dumps({
                "error": message,
                "requestId": get_request_id()
            })
        )

    @staticmethod
    def handle_invalid_input(ex: InvalidInputException) -> Response:
        """Handle 400 - Validation errors"""
        ExceptionHandlerService.logger.warning("Invalid input", error=str(ex), details=ex.details)
        return Response(
            status_code=400,
            content_type="application/json",
            body=json.dumps({
                "type": "InvalidInputException",
                "error": str(ex),
                "details": ex.details
            })
        )

    @staticmethod
    def handle_rate_limit_exceeded(ex: RateLimitExceededException) -> Response:
        """Handle 429 - Too many requests"""
        ExceptionHandlerService.logger.warning(
            "Rate limit exceeded",
            details=ex.details,
            retry_after=ex.retry_after
        )
        return Response(
            status_code=429,
            content_type="application/json",
            headers={"Retry-After": str(ex.retry_after)},
            body=json.dumps({"error": RateLimit.MESSAGE})
        )

    @staticmethod
    def handle_method_not_allowed(ex: MethodNotAllowedException) -> Response:
        """Handle 405 - Unsupported HTTP method"""
        ExceptionHandlerService.logger.warning("Method not allowed", details=ex.details)
        return Response(
            status_code=405,
            content_type="application/json",
            body=json.dumps({"error": Messages.METHOD_NOT_ALLOWED})
        )

    @staticmethod
    def handle_configuration_error(ex: ConfigurationException) -> Response:
        """Handle 500 - Missing environment variables"""
        ExceptionHandlerService.logger.error("Configuration error", error=str(ex), details=ex.details)
        return ExceptionHandlerService._server_error(ex, Messages.GENERIC_GENERATION_ERROR)

    @staticmethod
    def handle_generation_error(ex: DescriptionGenerationException) -> Response:
        """Handle 500 - LLM failed, timed out or returned nothing"""
        ExceptionHandlerService.logger.error(
            "Description generation failed",
            error=str(ex),
            details=ex.details,
            exc_info=True
        )
        return ExceptionHandlerService._server_error(ex, Messages.GENERIC_GENERATION_ERROR)

    @staticmethod
    def handle_not_found(ex: Exception) -> Response:
        """Handle 404 - Route not found"""
        ExceptionHandlerService.logger.warning("Route not found", error=str(ex))
        return Response(
            status_code=404,
            content_type="application/json",
            body=json.dumps({
                "error": "Not Found",
                "message": "Route not found"
            })
        )

    @staticmethod
    def handle_unexpected_error(ex: Exception) -> Response:
        """Handle 500 - Unexpected errors"""
        ExceptionHandlerService.logger.error("Unexpected error", error=str(ex), exc_info=True)
        return ExceptionHandlerService._server_error(ex, Messages.GENERIC_UNEXPECTED_ERROR)
