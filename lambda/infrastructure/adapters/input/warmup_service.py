"""
Warm-up service to prepare dependencies and short-circuit scheduled pings.
"""
import json
from typing import Callable, Optional, Any

from ddtrace import tracer


class WarmupService:
    def __init__(
        self,
        *,
        logger,
        get_or_create_event_loop: Callable[[], Any],
        run_async: Callable[[Any], Any],
        get_session_manager: Callable[[], Any],
        cors_origin: str = "*",
    ):
        self.logger = logger
        self.get_or_create_event_loop = get_or_create_event_loop
        self.run_async = run_async
        self.get_session_manager = get_session_manager
        self.cors_origin = cors_origin

    @staticmethod
    def is_warmup_event(event: Optional[dict]) -> bool:
        if not isinstance(event, dict):
            return False
        return bool(event.get("warmup") or event.get("source") == "aws.events")

    @tracer.wrap(resource="warmup.init")
    def warmup_init(self) -> bool:
        """Prepara loop global e sessão HTTP para reuso em warm starts."""
        try:
            self.get_or_create_event_loop()
            session_manager = self.get_session_manager()
        except Exception as exc:  # pragma: no cover - best-effort
            self.logger.warning("Warm-up init sync step failed", error=str(exc))
            return False

        async def preload_async():
            # Sessão aiohttp compartilhada por Supabase, Resend e Gemini
            await session_manager.get_session()

        try:
            self.run_async(preload_async())
        except Exception as exc:  # pragma: no cover - best-effort
            self.logger.warning("Warm-up init async step failed", error=str(exc))
            return False
        return True

    @tracer.wrap(resource="warmup.handle_ping")
    def handle_warmup_ping(self, event: Optional[dict]):
        """
        Warm-up short-circuit para pings agendados (EventBridge/cron).
        """
        if not self.is_warmup_event(event):
            return None

        self.logger.info("Warm-up ping received", source=event.get("source", "manual"))
        self.warmup_init()
        return {
            "statusCode": 200,
            "headers": {
                "Content-Type": "application/json",
                "Access-Control-Allow-Origin": self.cors_origin,
            },
            "body": json.dumps({"ok": True, "warmup": True})
        }
