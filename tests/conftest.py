"""Test configuration and common fixtures."""

import asyncio
import base64
import json
from typing import Any, Dict, List, Optional

import pytest

from lucidad.domain.models.analysis_request import AnalysisPrompt
from lucidad.domain.services.fact_checking_service import FactCheckingService
from lucidad.domain.services.rate_limiter import SlidingWindowRateLimiter

TEST_MODEL = "gpt-4o-test"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeVisionProvider:
    """In-memory vision provider returning canned output."""

    def __init__(
        self,
        output: Optional[str] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        model: str = TEST_MODEL,
    ):
        self.output = output
        self.error = error
        self.delay = delay
        self._model = model
        self.calls: List[AnalysisPrompt] = []
        self._initialized = False

    async def initialize(self) -> None:
        self._initialized = True

    async def shutdown(self) -> None:
        self._initialized = False

    async def analyze_image(self, prompt: AnalysisPrompt) -> str:
        self.calls.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.output

    @property
    def provider_name(self) -> str:
        return "Fake"

    @property
    def model(self) -> str:
        return self._model

    @property
    def is_available(self) -> bool:
        return self._initialized

    @property
    def capabilities(self) -> Dict[str, bool]:
        return {}


@pytest.fixture
def image_data_url() -> str:
    """A small but well-formed PNG data URL."""
    payload = base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64).decode("ascii")
    return f"data:image/png;base64,{payload}"


@pytest.fixture
def model_output() -> Dict[str, Any]:
    """A schema-conforming model response."""
    return {
        "productName": "HydraBoost",
        "company": "Acme Beverages",
        "keyNumbers": ["3x", "24 hours"],
        "measurableFacts": ["Hydrates 3x faster than water", "Lasts 24 hours"],
        "category": "health claim",
        "briefContext": "Sports drink billboard at a train station",
        "truthScore": 73,
        "report": "The hydration claim is partly supported. The 3x figure is not.",
        "sources": [
            {"title": "Hydration study", "url": "https://example.org/hydration"},
            {"title": None, "url": "https://example.org/label"},
        ],
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(window_seconds=60, max_requests=10, clock=clock)


@pytest.fixture
def vision_provider(model_output: Dict[str, Any]) -> FakeVisionProvider:
    return FakeVisionProvider(output=json.dumps(model_output))


@pytest.fixture
def service(
    vision_provider: FakeVisionProvider,
    rate_limiter: SlidingWindowRateLimiter,
) -> FactCheckingService:
    return FactCheckingService(vision_provider, rate_limiter=rate_limiter)
