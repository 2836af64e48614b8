"""Application Use Cases - 100% ASYNC com providers desacoplados"""
from .generate_description_use_case import GenerateDescriptionUseCase
from .unsubscribe_lead_use_case import UnsubscribeLeadUseCase
from .check_health_use_case import CheckHealthUseCase

__all__ = [
    'GenerateDescriptionUseCase',
    'UnsubscribeLeadUseCase',
    'CheckHealthUseCase'
]
