"""
Async Use Case: Unsubscribe Lead
Compliance dos emails: marca o lead como descadastrado
"""
from datetime import datetime, timezone
from typing import Callable
from ddtrace import tracer

from application.dtos.requests import UnsubscribeRequest
from application.dtos.responses import UnsubscribeResponse
from application.ports.input.unsubscribe_lead_port import IUnsubscribeLeadUseCase
from application.ports.output.lead_repository_port import ILeadRepository
from domain.exceptions import InvalidInputException, LeadRepositoryException
from shared.config.logger_config import get_logger
from shared.utils.validators import EmailValidator

logger = get_logger(child=True)


class UnsubscribeLeadUseCase(IUnsubscribeLeadUseCase):
    """Async use case: flag every lead row of an email as unsubscribed"""

    def __init__(
        self,
        lead_repository: ILeadRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.lead_repository = lead_repository
        self.clock = clock

    @tracer.wrap(resource="use_case.unsubscribe_lead")
    async def execute(self, request: UnsubscribeRequest) -> UnsubscribeResponse:
        """
        Execute use case asynchronously

        Erros de banco não são expostos ao usuário: ficam no log
        e o resultado volta com persisted=False.

        Raises:
            InvalidInputException: If the email format is invalid
        """
        if not EmailValidator.is_valid_loose(request.email):
            raise InvalidInputException(
                "Invalid email format",
                details={"email": request.email}
            )

        email = request.email.lower()

        try:
            await self.lead_repository.mark_unsubscribed(email, self.clock())
        except LeadRepositoryException as ex:
            logger.error(
                "Unsubscribe database error",
                email=email,
                error=str(ex),
                details=ex.details
            )
            return UnsubscribeResponse(email=email, persisted=False)

        logger.info("Lead unsubscribed", email=email)
        return UnsubscribeResponse(email=email, persisted=True)
