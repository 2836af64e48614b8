"""
Async Use Case: Generate Product Description
Cache -> lead upsert -> LLM -> sequência de emails
"""
import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from ddtrace import tracer

from application.dtos.requests import GenerateDescriptionRequest
from application.dtos.responses import GenerateDescriptionResponse
from application.ports.input.generate_description_port import IGenerateDescriptionUseCase
from application.ports.output.description_generator_port import IDescriptionGenerator
from application.ports.output.email_sender_port import IEmailSender
from application.ports.output.lead_repository_port import ILeadRepository
from application.ports.output.response_cache_port import IResponseCache
from domain.constants import API, Email
from domain.entities.lead import Lead
from domain.entities.product_description_request import ProductDescriptionRequest
from domain.exceptions import (
    DescriptionGenerationException,
    EmailDeliveryException,
    LeadRepositoryException
)
from domain.services.email_templates import EmailTemplates
from domain.services.prompt_builder import build_description_prompt
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GenerateDescriptionUseCase(IGenerateDescriptionUseCase):
    """Async use case: generate a description and start the email sequence"""

    def __init__(
        self,
        lead_repository: ILeadRepository,
        email_sender: IEmailSender,
        description_generator: IDescriptionGenerator,
        response_cache: IResponseCache,
        templates: EmailTemplates,
        from_email: str = Email.DEFAULT_FROM,
        checkout_link: Optional[str] = None,
        llm_timeout: float = API.LLM_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex
    ):
        self.lead_repository = lead_repository
        self.email_sender = email_sender
        self.description_generator = description_generator
        self.response_cache = response_cache
        self.templates = templates
        self.from_email = from_email
        self.checkout_link = checkout_link
        self.llm_timeout = llm_timeout
        self.clock = clock
        self.id_factory = id_factory

    @tracer.wrap(resource="use_case.generate_description")
    async def execute(self, request: GenerateDescriptionRequest) -> GenerateDescriptionResponse:
        """
        Execute use case asynchronously

        Args:
            request: Sanitized product request + request id

        Returns:
            GenerateDescriptionResponse with the trimmed description

        Raises:
            DescriptionGenerationException: If the LLM fails, times out or returns nothing
        """
        product = request.product
        request_id = request.request_id
        cache_key = product.cache_key()

        self.response_cache.purge_expired()
        cached_description = self.response_cache.get(cache_key)

        if cached_description is not None:
            logger.info("Cache hit for description", request_id=request_id, cache_key=cache_key)
            emails_sent = await self._handle_cache_hit(product, cached_description, request_id)
            return GenerateDescriptionResponse(
                description=cached_description.strip(),
                cache_hit=True,
                emails_sent=emails_sent
            )

        logger.info("Cache miss", request_id=request_id, cache_key=cache_key)

        # === STEP 1: Save to Database ===
        if await self._save_lead(product, request_id):
            logger.info("Data saved to database", request_id=request_id)

        # === STEP 2: Call LLM API ===
        description = await self._generate(product)
        logger.info(
            "LLM description generated successfully",
            request_id=request_id,
            description_length=len(description),
            provider=self.description_generator.provider_name
        )

        self.response_cache.set(cache_key, description)

        # === STEP 3: Trigger Email Sequence ===
        emails_sent = await self._send_sequence(product.email, description, request_id)

        return GenerateDescriptionResponse(
            description=description,
            cache_hit=False,
            emails_sent=emails_sent
        )

    async def _handle_cache_hit(
        self,
        product: ProductDescriptionRequest,
        cached_description: str,
        request_id: str
    ) -> int:
        """Cache hit ainda salva o lead e manda o email imediato"""
        # Chave de idempotência única por execução
        execution_id = self.id_factory()
        if await self._save_lead(product, request_id):
            logger.info("Data saved to database (cache hit)", request_id=request_id)

        message = self.templates.immediate(cached_description, product.email)
        try:
            await self.email_sender.send(
                message,
                to=product.email,
                sender=self.from_email,
                idempotency_key=f"{execution_id}-{message.template}"
            )
        except EmailDeliveryException as ex:
            logger.warning(
                "Cache hit processing failed",
                request_id=request_id,
                error=str(ex),
                details=ex.details
            )
            return 0
        return 1

    async def _save_lead(self, product: ProductDescriptionRequest, request_id: str) -> bool:
        """Upsert do lead; falha de banco não interrompe o fluxo"""
        lead = Lead.capture(product.email, product.product_name, now=self.clock())
        try:
            await self.lead_repository.upsert_lead(lead)
        except LeadRepositoryException as ex:
            logger.warning(
                "Database error occurred",
                request_id=request_id,
                error=str(ex),
                details=ex.details
            )
            return False
        return True

    async def _generate(self, product: ProductDescriptionRequest) -> str:
        prompt = build_description_prompt(product.product_name, product.product_features)

        try:
            description = await asyncio.wait_for(
                self.description_generator.generate(prompt),
                timeout=self.llm_timeout
            )
        except asyncio.TimeoutError as ex:
            raise DescriptionGenerationException(
                "Request timeout",
                details={"timeout_seconds": self.llm_timeout}
            ) from ex

        if not description or not description.strip():
            raise DescriptionGenerationException(
                "LLM failed to generate a valid description.",
                details={"provider": self.description_generator.provider_name}
            )

        return description.strip()

    async def _send_sequence(self, email: str, description: str, request_id: str) -> int:
        """
        Envia os emails em sequência (imediato, +2h, +6h se houver checkout)

        A primeira falha interrompe a sequência; o request não falha por email.
        """
        now = self.clock()
        execution_id = self.id_factory()
        messages = [
            self.templates.immediate(description, email),
            self.templates.two_hour(email).schedule(
                now + timedelta(seconds=Email.TWO_HOUR_DELAY_SECONDS)
            )
        ]
        if self.checkout_link:
            messages.append(
                self.templates.six_hour(self.checkout_link, email).schedule(
                    now + timedelta(seconds=Email.SIX_HOUR_DELAY_SECONDS)
                )
            )

        sent = 0
        try:
            for message in messages:
                await self.email_sender.send(
                    message,
                    to=email,
                    sender=self.from_email,
                    idempotency_key=f"{execution_id}-{message.template}"
                )
                sent += 1
        except EmailDeliveryException as ex:
            logger.error(
                "Email sending failed",
                request_id=request_id,
                email=email,
                error=str(ex),
                details=ex.details,
                sent_before_failure=sent
            )
            return sent

        logger.info(
            "All emails sent successfully",
            request_id=request_id,
            email=email,
            stripe_link_configured=bool(self.checkout_link),
            emails_sent=sent
        )
        return sent
