"""OpenAI implementation of the vision provider interface."""

import logging
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from ...domain.errors import (
    ConfigurationError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
    UpstreamServiceError,
)
from ...domain.models.analysis_request import AnalysisPrompt
from ...domain.ports.vision_provider import VisionProvider

logger = logging.getLogger(__name__)

QUOTA_ERROR_CODE = "insufficient_quota"
RATE_LIMIT_ERROR_CODE = "rate_limit_exceeded"


class OpenAIVisionConfig(BaseModel):
    """Configuration for the OpenAI vision adapter."""

    api_key: str = Field(..., description="OpenAI API key")
    model: str = Field(default="gpt-4o", description="Vision-capable model to use")
    max_retries: int = Field(default=3, description="Retries performed by the client")
    timeout: float = Field(default=45.0, description="Per-call timeout in seconds")
    base_url: Optional[str] = Field(default=None, description="Override for the API base URL")


class OpenAIVisionAdapter(VisionProvider):
    """Calls the OpenAI Responses API with a strict JSON-schema output format."""

    def __init__(
        self,
        config: Optional[OpenAIVisionConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            client: Pre-built client, used as-is instead of creating one
        """
        self._config = config or OpenAIVisionConfig(api_key="")
        self._client = client
        self._initialized = client is not None

    async def initialize(self) -> None:
        """Create the API client."""
        if self._client is None:
            if not self._config.api_key:
                raise ConfigurationError("OpenAI API key is not configured")
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                max_retries=self._config.max_retries,
                timeout=self._config.timeout,
            )
        self._initialized = True

    @staticmethod
    def _build_input(prompt: AnalysisPrompt) -> List[Dict[str, Any]]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": prompt.instructions},
                    {"type": "input_image", "image_url": prompt.image_url},
                ],
            }
        ]

    async def analyze_image(self, prompt: AnalysisPrompt) -> str:
        """Send one analysis prompt and return the model's raw text output.

        Raises:
            RuntimeError: If the adapter was not initialized
            UpstreamQuotaError: If the account quota is exhausted
            UpstreamRateLimitError: If the provider throttles the call
            UpstreamServiceError: On any other API or network failure
        """
        if not self._client:
            raise RuntimeError("Provider not initialized")

        logger.info(f"🤖 Calling {self._config.model} for image analysis")
        try:
            response = await self._client.responses.create(
                model=self._config.model,
                temperature=prompt.temperature,
                max_output_tokens=prompt.max_output_tokens,
                input=self._build_input(prompt),
                text={
                    "format": {
                        "type": "json_schema",
                        "name": prompt.schema_name,
                        "schema": prompt.json_schema,
                        "strict": True,
                    }
                },
            )
        except openai.APIError as e:
            raise self._translate_error(e) from e

        return response.output_text

    @staticmethod
    def _translate_error(error: "openai.APIError") -> Exception:
        code = getattr(error, "code", None)
        if code == QUOTA_ERROR_CODE:
            return UpstreamQuotaError(f"OpenAI quota exhausted: {error}")
        if code == RATE_LIMIT_ERROR_CODE or isinstance(error, openai.RateLimitError):
            return UpstreamRateLimitError(f"OpenAI rate limited the request: {error}")
        return UpstreamServiceError(f"OpenAI request failed: {error}")

    async def shutdown(self) -> None:
        """Close the API client."""
        if self._client:
            await self._client.close()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the name of the provider."""
        return "OpenAI"

    @property
    def model(self) -> str:
        """Identifier of the model calls are made against."""
        return self._config.model

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._initialized and self._client is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        return {
            "image_input": True,
            "structured_output": True,
            "strict_schema": True,
        }
