"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Optional

from ..domain.services.fact_checking_service import FactCheckingService
from ..domain.services.rate_limiter import SlidingWindowRateLimiter
from .ai.factory import VisionProviderFactory
from .settings import ServiceSettings, load_dotenv_if_present

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "openai"


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, settings: Optional[ServiceSettings] = None):
        """Initialize service container.

        Args:
            settings: Service settings, read from the environment when omitted

        Raises:
            ConfigurationError: If required settings are missing
        """
        if settings is None:
            load_dotenv_if_present()
            settings = ServiceSettings.from_env()
        self.settings = settings
        self.provider_factory = VisionProviderFactory()
        self.rate_limiter = SlidingWindowRateLimiter(
            window_seconds=settings.rate_limit_window_seconds,
            max_requests=settings.rate_limit_max_requests,
        )
        self._fact_checking_service: Optional[FactCheckingService] = None
        logger.info("✅ Service container setup completed")

    def _build_service(self, provider) -> FactCheckingService:
        return FactCheckingService(
            provider,
            rate_limiter=self.rate_limiter,
            request_timeout=self.settings.request_timeout_seconds,
            max_image_bytes=self.settings.max_image_bytes,
        )

    async def get_fact_checking_service(self) -> FactCheckingService:
        """Get the shared fact checking service, creating its provider on first use."""
        if self._fact_checking_service is None:
            logger.info("🔧 Creating FactCheckingService with vision provider...")
            provider = await self.provider_factory.create_provider(
                DEFAULT_PROVIDER,
                api_key=self.settings.openai_api_key,
                model=self.settings.vision_model,
            )
            self._fact_checking_service = self._build_service(provider)
        return self._fact_checking_service

    async def create_fact_checking_service(self) -> FactCheckingService:
        """Create a service with its own provider client.

        Used by short-lived handlers that run each invocation on a fresh event
        loop. The rate limiter is still shared. The caller must shut the
        provider down.
        """
        provider = await self.provider_factory.build_provider(
            DEFAULT_PROVIDER,
            api_key=self.settings.openai_api_key,
            model=self.settings.vision_model,
        )
        return self._build_service(provider)

    async def shutdown(self) -> None:
        """Release provider resources."""
        await self.provider_factory.shutdown()
        self._fact_checking_service = None


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


async def get_fact_checking_service() -> FactCheckingService:
    """FastAPI dependency for fact checking service."""
    return await get_service_container().get_fact_checking_service()
