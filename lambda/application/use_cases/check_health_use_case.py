"""
Async Use Case: Health Check
Probe para monitoramento e load balancers
"""
import time
from datetime import datetime, timezone
from typing import Callable, Optional
from ddtrace import tracer

from application.dtos.responses import HealthReport, ServiceStatus
from application.ports.input.check_health_port import ICheckHealthUseCase
from application.ports.output.lead_repository_port import ILeadRepository
from domain.constants import App
from domain.exceptions import LeadRepositoryException
from shared.config.logger_config import get_logger
from shared.config.settings import Settings

logger = get_logger(child=True)

_PROCESS_STARTED_AT = time.monotonic()


def process_uptime() -> float:
    """Segundos desde o cold start do container"""
    return round(time.monotonic() - _PROCESS_STARTED_AT, 3)


class CheckHealthUseCase(ICheckHealthUseCase):
    """Async use case: report database and provider configuration status"""

    def __init__(
        self,
        settings: Settings,
        lead_repository_factory: Callable[[], ILeadRepository],
        uptime: Callable[[], float] = process_uptime,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.settings = settings
        self.lead_repository_factory = lead_repository_factory
        self.uptime = uptime
        self.clock = clock

    @tracer.wrap(resource="use_case.check_health")
    async def execute(self) -> HealthReport:
        report = HealthReport(
            status='ok',
            timestamp=self.clock().isoformat(),
            uptime=self.uptime(),
            version=App.VERSION,
            environment=self.settings.environment
        )

        report.services['database'] = await self._check_database()
        report.services['gemini_api'] = self._configured(self.settings.gemini_api_key)
        report.services['resend_api'] = self._configured(self.settings.resend_api_key)

        statuses = [service.status for service in report.services.values()]
        if 'error' in statuses:
            report.status = 'error'
        elif 'not_configured' in statuses:
            report.status = 'degraded'

        return report

    async def _check_database(self) -> ServiceStatus:
        if not self.settings.database_configured:
            return ServiceStatus('not_configured', 'Database credentials not configured')

        repository: Optional[ILeadRepository] = None
        try:
            repository = self.lead_repository_factory()
            await repository.ping()
        except LeadRepositoryException as ex:
            logger.warning("Database ping failed", error=str(ex), details=ex.details)
            return ServiceStatus('error', 'Database connection failed')
        except Exception as ex:
            logger.warning(
                "Database service unavailable",
                error=str(ex),
                repository_created=repository is not None
            )
            return ServiceStatus('error', 'Database service unavailable')

        return ServiceStatus('ok', 'Database connection successful')

    @staticmethod
    def _configured(value: Optional[str]) -> ServiceStatus:
        if value:
            return ServiceStatus('ok', 'Service configured')
        return ServiceStatus('not_configured', 'Service not configured')
