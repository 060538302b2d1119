"""Tests for the serverless function entry point."""

import base64
import json

import pytest

from lucidad.api.function_handler import handle_event, handler
from lucidad.domain.errors import UpstreamQuotaError
from lucidad.infrastructure.dependencies import get_service_container

from conftest import TEST_MODEL

ANALYSIS_FAILED = "Analysis failed. Please try again or contact support if the problem persists."


@pytest.fixture
def get_service(service):
    async def _get_service():
        return service
    return _get_service


def post_event(body, headers=None, **extra):
    event = {
        "httpMethod": "POST",
        "headers": headers if headers is not None else {"x-forwarded-for": "203.0.113.7"},
        "body": body if isinstance(body, str) else json.dumps(body),
    }
    event.update(extra)
    return event


@pytest.mark.asyncio
async def test_success(get_service, image_data_url):
    """Test a successful invocation."""
    response = await handle_event(post_event({"image": image_data_url}), get_service)

    assert response["statusCode"] == 200
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    assert response["headers"]["Content-Type"] == "application/json"
    data = json.loads(response["body"])
    assert data["truthScore"] == 73
    assert data["model"] == TEST_MODEL
    assert "analyzedAt" in data


@pytest.mark.asyncio
async def test_base64_encoded_body(get_service, image_data_url):
    """Test that base64-encoded proxy bodies are decoded."""
    raw = json.dumps({"image": image_data_url}).encode("utf-8")
    event = post_event(base64.b64encode(raw).decode("ascii"), isBase64Encoded=True)

    response = await handle_event(event, get_service)
    assert response["statusCode"] == 200


@pytest.mark.asyncio
async def test_preflight(get_service):
    """Test that OPTIONS returns CORS headers and no body."""
    response = await handle_event({"httpMethod": "OPTIONS"}, get_service)

    assert response["statusCode"] == 200
    assert response["body"] == ""
    assert response["headers"] == {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", None])
async def test_method_not_allowed(get_service, method):
    """Test that only POST is accepted."""
    response = await handle_event({"httpMethod": method}, get_service)
    assert response["statusCode"] == 405
    assert json.loads(response["body"]) == {"error": "Method not allowed"}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["", "not json", None])
async def test_invalid_body(get_service, body):
    """Test that unparsable bodies are bad input."""
    event = post_event("")
    event["body"] = body
    response = await handle_event(event, get_service)
    assert response["statusCode"] == 400


@pytest.mark.asyncio
async def test_validation_error(get_service):
    """Test that validation messages are returned to the caller."""
    response = await handle_event(post_event({"image": "ftp://ad.png"}), get_service)
    assert response["statusCode"] == 400
    assert json.loads(response["body"]) == {"error": "Invalid image format. Please provide a valid data URL."}


@pytest.mark.asyncio
async def test_schema_validation_applies(get_service, vision_provider, model_output, image_data_url):
    """Test that the function handler validates model output like the HTTP app."""
    model_output["truthScore"] = 150
    vision_provider.output = json.dumps(model_output)

    response = await handle_event(post_event({"image": image_data_url}), get_service)
    assert response["statusCode"] == 422
    assert "truthScore" in json.loads(response["body"])["details"]["fieldErrors"]


@pytest.mark.asyncio
async def test_upstream_quota(get_service, vision_provider, image_data_url):
    """Test that quota exhaustion maps to 503."""
    vision_provider.error = UpstreamQuotaError("quota")
    response = await handle_event(post_event({"image": image_data_url}), get_service)
    assert response["statusCode"] == 503


@pytest.mark.asyncio
async def test_rate_limit_uses_source_ip(get_service, image_data_url):
    """Test that clients without a forwarded header are keyed by source IP."""
    for _ in range(10):
        event = post_event({"image": image_data_url}, headers={}, requestContext={"identity": {"sourceIp": "192.0.2.1"}})
        assert (await handle_event(event, get_service))["statusCode"] == 200

    event = post_event({"image": image_data_url}, headers={}, requestContext={"identity": {"sourceIp": "192.0.2.1"}})
    assert (await handle_event(event, get_service))["statusCode"] == 429

    event = post_event({"image": image_data_url}, headers={}, requestContext={"identity": {"sourceIp": "192.0.2.2"}})
    assert (await handle_event(event, get_service))["statusCode"] == 200


def test_handler_preflight():
    """Test the synchronous entry point for preflight requests."""
    response = handler({"httpMethod": "OPTIONS"}, None)
    assert response["statusCode"] == 200


def test_handler_without_credentials(monkeypatch, image_data_url):
    """Test that a missing API key yields a generic failure."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr("lucidad.infrastructure.dependencies.load_dotenv_if_present", lambda: None)
    get_service_container.cache_clear()
    try:
        response = handler(post_event({"image": image_data_url}), None)
    finally:
        get_service_container.cache_clear()

    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": ANALYSIS_FAILED}
