"""
Validators Utility
Input validation with domain exceptions
"""
import re
from typing import Any, Type

from domain.constants import Input
from domain.entities.product_description_request import ProductDescriptionRequest
from domain.exceptions import InvalidInputException


# Formulário de geração: regex estrita
STRICT_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*$"
)
# Links de unsubscribe: regex permissiva
LOOSE_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")
_ANGLE_BRACKETS = re.compile(r"[<>]")


class GenericValidator:
    """Validador genérico para reduzir duplicação de código"""

    @staticmethod
    def validate_text(
        value: Any,
        message: str,
        exception_class: Type[Exception] = InvalidInputException
    ) -> str:
        """
        Valida que o valor é string não vazia

        Args:
            value: Valor bruto do payload
            message: Mensagem de erro exposta ao cliente
            exception_class: Classe de exceção a lançar

        Returns:
            A própria string (sem alterações)

        Raises:
            exception_class: Se não for string ou estiver vazia
        """
        if not value or not isinstance(value, str):
            raise exception_class(message)
        return value

    @staticmethod
    def validate_not_empty(
        value: str,
        message: str,
        exception_class: Type[Exception] = InvalidInputException
    ) -> str:
        if len(value) == 0:
            raise exception_class(message)
        return value


class TextSanitizer:
    """Remove caracteres de controle e possíveis tags HTML"""

    @staticmethod
    def sanitize(text: str) -> str:
        text = _CONTROL_CHARS.sub('', text)
        text = _ANGLE_BRACKETS.sub('', text)
        return text.strip()


class EmailValidator:
    """Validação de formato de email"""

    @staticmethod
    def is_valid_strict(email: Any) -> bool:
        return isinstance(email, str) and bool(STRICT_EMAIL_PATTERN.fullmatch(email.strip()))

    @staticmethod
    def is_valid_loose(email: Any) -> bool:
        return isinstance(email, str) and bool(LOOSE_EMAIL_PATTERN.fullmatch(email))


class ProductRequestValidator:
    """Validate and sanitize the description generation payload"""

    @staticmethod
    def validate(payload: Any) -> ProductDescriptionRequest:
        """
        Validate generation payload

        Args:
            payload: Parsed JSON body ({productName, productFeatures, email})

        Returns:
            Sanitized ProductDescriptionRequest

        Raises:
            InvalidInputException: On the first failing rule
        """
        if not isinstance(payload, dict):
            raise InvalidInputException(
                "Request body must be a JSON object",
                details={"received": type(payload).__name__}
            )

        email = payload.get('email')
        product_name = payload.get('productName')
        product_features = payload.get('productFeatures')

        if not email or not EmailValidator.is_valid_strict(email):
            raise InvalidInputException("Invalid email address format")

        GenericValidator.validate_text(product_name, "Product name is required and must be text")
        GenericValidator.validate_text(product_features, "Product features are required and must be text")

        clean_name = product_name.strip()[:Input.PRODUCT_NAME_MAX]
        clean_features = product_features.strip()[:Input.PRODUCT_FEATURES_MAX]
        clean_email = email.strip().lower()

        GenericValidator.validate_not_empty(clean_name, "Product name cannot be empty")
        GenericValidator.validate_not_empty(clean_features, "Product features cannot be empty")

        # Sanitização pode esvaziar o texto ("<>"), então revalida
        sanitized_name = GenericValidator.validate_not_empty(
            TextSanitizer.sanitize(clean_name), "Product name cannot be empty"
        )
        sanitized_features = GenericValidator.validate_not_empty(
            TextSanitizer.sanitize(clean_features), "Product features cannot be empty"
        )

        return ProductDescriptionRequest(
            product_name=sanitized_name,
            product_features=sanitized_features,
            email=TextSanitizer.sanitize(clean_email)
        )
