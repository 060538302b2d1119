"""Factory for creating and managing vision providers."""

from typing import Any, Callable, Dict, Optional

from ...domain.ports.vision_provider import VisionProvider
from .openai_vision_adapter import OpenAIVisionAdapter, OpenAIVisionConfig


class VisionProviderFactory:
    """Factory for creating and managing vision providers."""

    def __init__(self):
        """Initialize the factory."""
        self._providers: Dict[str, Callable[..., VisionProvider]] = {}
        self._instances: Dict[str, VisionProvider] = {}

        # Register default providers
        self.register_provider("openai", self._create_openai)

    @staticmethod
    def _create_openai(api_key: str = "", model: Optional[str] = None, **kwargs: Any) -> VisionProvider:
        if model:
            kwargs["model"] = model
        return OpenAIVisionAdapter(config=OpenAIVisionConfig(api_key=api_key, **kwargs))

    def register_provider(self, name: str, provider_factory: Callable[..., VisionProvider]) -> None:
        """Register a new vision provider.

        Args:
            name: Provider name
            provider_factory: Callable building an uninitialized provider
        """
        self._providers[name] = provider_factory

    async def build_provider(self, name: str, **kwargs: Any) -> VisionProvider:
        """Create and initialize a provider without registering the instance.

        Raises:
            ValueError: If provider not found
        """
        if name not in self._providers:
            raise ValueError(f"Provider '{name}' not found")

        provider = self._providers[name](**kwargs)
        await provider.initialize()
        return provider

    async def create_provider(self, name: str, **kwargs: Any) -> VisionProvider:
        """Create and initialize a provider instance.

        An existing instance with the same name is returned unchanged.

        Args:
            name: Provider name
            **kwargs: Provider-specific configuration

        Returns:
            Initialized provider instance

        Raises:
            ValueError: If provider not found
        """
        if name not in self._instances:
            self._instances[name] = await self.build_provider(name, **kwargs)

        return self._instances[name]

    def get_provider(self, name: str) -> Optional[VisionProvider]:
        """Get an existing provider instance.

        Args:
            name: Provider name

        Returns:
            Provider instance if exists, None otherwise
        """
        return self._instances.get(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Get dictionary of registered providers and their availability."""
        return {
            name: name in self._instances and self._instances[name].is_available
            for name in self._providers
        }

    async def shutdown(self) -> None:
        """Shutdown all provider instances."""
        for provider in self._instances.values():
            await provider.shutdown()
        self._instances.clear()
