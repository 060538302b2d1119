"""Serverless function entry point.

Accepts proxy-style events (``httpMethod``, ``headers``, ``body``) as sent
by Netlify Functions or AWS API Gateway and runs the same pipeline as the
HTTP application.
"""

import asyncio
import base64
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..domain.errors import ValidationError
from ..domain.services.error_mapping import map_error
from ..domain.services.fact_checking_service import FactCheckingService
from ..domain.services.rate_limiter import client_key_from_headers
from ..infrastructure.dependencies import get_service_container
from .cors import CORS_HEADERS

logger = logging.getLogger(__name__)

ServiceGetter = Callable[[], Awaitable[FactCheckingService]]


def _response(status_code: int, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    headers = dict(CORS_HEADERS)
    if body is None:
        return {"statusCode": status_code, "headers": headers, "body": ""}

    headers["Content-Type"] = "application/json"
    return {"statusCode": status_code, "headers": headers, "body": json.dumps(body)}


def _decode_body(event: Dict[str, Any]) -> Any:
    body = event.get("body")
    try:
        if body and event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        return json.loads(body or "")
    except ValueError:
        raise ValidationError("Request body must be valid JSON")


def _peer_address(event: Dict[str, Any]) -> Optional[str]:
    identity = (event.get("requestContext") or {}).get("identity") or {}
    return identity.get("sourceIp")


async def handle_event(event: Dict[str, Any], get_service: ServiceGetter) -> Dict[str, Any]:
    """Handle one proxy event.

    Args:
        event: Proxy event with ``httpMethod``, ``headers`` and ``body``
        get_service: Coroutine returning the fact checking service

    Returns:
        Proxy response with ``statusCode``, ``headers`` and ``body``
    """
    method = (event.get("httpMethod") or "").upper()
    if method == "OPTIONS":
        return _response(200)
    if method != "POST":
        return _response(405, {"error": "Method not allowed"})

    client_key = client_key_from_headers(event.get("headers") or {}, _peer_address(event))

    try:
        payload = _decode_body(event)
        service = await get_service()
        result = await service.analyze(payload, client_key)
    except Exception as e:
        status_code, body = map_error(e)
        return _response(status_code, body.to_dict())

    return _response(200, result.to_dict())


async def _handle_with_fresh_provider(event: Dict[str, Any]) -> Dict[str, Any]:
    opened: List[FactCheckingService] = []

    async def get_service() -> FactCheckingService:
        service = await get_service_container().create_fact_checking_service()
        opened.append(service)
        return service

    try:
        return await handle_event(event, get_service)
    finally:
        for service in opened:
            await service.vision.shutdown()


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Synchronous entry point invoked by the function runtime."""
    return asyncio.run(_handle_with_fresh_provider(event))
