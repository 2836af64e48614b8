"""Response DTOs - Contratos de saída dos use cases"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class GenerateDescriptionResponse:
    """Descrição final + como ela foi obtida"""
    description: str
    cache_hit: bool
    emails_sent: int = 0

    def to_api_response(self) -> Dict[str, Any]:
        """Frontend só recebe a descrição"""
        return {'description': self.description}


@dataclass
class UnsubscribeResponse:
    """Resultado do descadastro"""
    email: str
    persisted: bool


@dataclass
class ServiceStatus:
    """Status de uma dependência externa"""
    status: str  # ok | error | not_configured
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {'status': self.status, 'message': self.message}


@dataclass
class HealthReport:
    """Relatório do health check"""
    status: str  # ok | degraded | error
    timestamp: str
    uptime: float
    version: str
    environment: str
    services: Dict[str, ServiceStatus] = field(default_factory=dict)

    @property
    def http_status(self) -> int:
        return 503 if self.status == 'error' else 200

    def to_api_response(self) -> Dict[str, Any]:
        return {
            'status': self.status,
            'timestamp': self.timestamp,
            'uptime': self.uptime,
            'version': self.version,
            'environment': self.environment,
            'services': {name: service.to_dict() for name, service in self.services.items()}
        }
