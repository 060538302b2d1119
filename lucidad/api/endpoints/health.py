"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> Dict[str, Any]:
    """Report provider availability and the configured model.

    Returns:
        Health status of the service
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        return {"status": "unconfigured", "vision_providers": {}, "model": None}

    return {
        "status": "healthy",
        "vision_providers": {
            name.title(): is_active
            for name, is_active in container.provider_factory.available_providers.items()
        },
        "model": container.settings.vision_model,
    }
