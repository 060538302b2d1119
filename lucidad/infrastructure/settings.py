"""Environment-driven configuration for the fact-checking service."""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..domain.errors import ConfigurationError
from ..domain.services.fact_checking_service import DEFAULT_REQUEST_TIMEOUT
from ..domain.services.input_validation import MAX_IMAGE_BYTES

logger = logging.getLogger(__name__)

DEFAULT_VISION_MODEL = "gpt-4o"


class ServiceSettings(BaseModel):
    """Deployment settings, read once per process."""

    openai_api_key: str = Field(..., description="OpenAI API key")
    vision_model: str = Field(default=DEFAULT_VISION_MODEL, description="Vision model identifier")
    rate_limit_window_seconds: float = Field(default=60.0, gt=0, description="Rate-limit window length")
    rate_limit_max_requests: int = Field(default=10, ge=1, description="Requests per client per window")
    request_timeout_seconds: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0, description="Overall analysis deadline")
    max_image_bytes: int = Field(default=MAX_IMAGE_BYTES, ge=1, description="Maximum estimated image size")
    log_level: str = Field(default="INFO", description="Root logging level")

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        """Create settings from environment variables.

        Raises:
            ConfigurationError: If the API key is missing or a value is invalid
        """
        api_key = os.getenv("OPENAI_API_KEY", "")
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")

        overrides = {
            "vision_model": os.getenv("OPENAI_VISION_MODEL"),
            "rate_limit_window_seconds": os.getenv("LUCIDAD_RATE_LIMIT_WINDOW_SECONDS"),
            "rate_limit_max_requests": os.getenv("LUCIDAD_RATE_LIMIT_MAX_REQUESTS"),
            "request_timeout_seconds": os.getenv("LUCIDAD_REQUEST_TIMEOUT_SECONDS"),
            "max_image_bytes": os.getenv("LUCIDAD_MAX_IMAGE_BYTES"),
            "log_level": os.getenv("LUCIDAD_LOG_LEVEL"),
        }

        try:
            settings = cls(
                openai_api_key=api_key,
                **{k: v for k, v in overrides.items() if v},
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid service settings: {e}")

        logger.info(f"✅ OpenAI API key loaded: {len(api_key)} chars")
        logger.info(f"🤖 Vision model: {settings.vision_model}")
        return settings


def load_dotenv_if_present(path: Optional[str] = None) -> None:
    """Load a .env file into the environment when one exists."""
    if load_dotenv(path):
        logger.info("📁 Environment variables loaded from .env file via python-dotenv")
