"""Request DTOs - Contratos de entrada para use cases"""

from dataclasses import dataclass

from domain.entities.product_description_request import ProductDescriptionRequest


@dataclass(frozen=True)
class GenerateDescriptionRequest:
    """Request para gerar descrição e disparar a sequência de emails"""
    product: ProductDescriptionRequest
    request_id: str


@dataclass(frozen=True)
class UnsubscribeRequest:
    """Request para descadastrar um email"""
    email: str
