"""Application DTOs - Data Transfer Objects para contratos de API"""

from application.dtos.requests import (
    GenerateDescriptionRequest,
    UnsubscribeRequest
)
from application.dtos.responses import (
    GenerateDescriptionResponse,
    UnsubscribeResponse,
    ServiceStatus,
    HealthReport
)

__all__ = [
    'GenerateDescriptionRequest',
    'UnsubscribeRequest',
    'GenerateDescriptionResponse',
    'UnsubscribeResponse',
    'ServiceStatus',
    'HealthReport'
]
