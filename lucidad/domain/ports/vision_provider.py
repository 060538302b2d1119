"""Protocol for vision-capable model providers."""

from typing import Dict, Protocol

from ..models.analysis_request import AnalysisPrompt


class VisionProvider(Protocol):
    """Protocol defining the interface for vision model providers.

    Implementations translate provider failures into the pipeline's error
    kinds (``UpstreamQuotaError``, ``UpstreamRateLimitError``,
    ``UpstreamServiceError``) so callers never branch on provider-specific
    exception types.
    """

    async def initialize(self) -> None:
        """Initialize the provider."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def analyze_image(self, prompt: AnalysisPrompt) -> str:
        """Send one analysis prompt and return the model's raw text output."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the name of the provider."""
        ...

    @property
    def model(self) -> str:
        """Identifier of the model calls are made against."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is ready to serve calls."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        ...
