"""Service coordinating one advertisement fact-check."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from ..errors import AnalysisTimeoutError, RateLimitError
from ..models.fact_check_result import AnalyzedFactCheck
from ..ports.rate_limiter import RateLimiter
from ..ports.vision_provider import VisionProvider
from .input_validation import MAX_IMAGE_BYTES, validate_analysis_payload
from .rate_limiter import SlidingWindowRateLimiter
from .request_builder import build_analysis_prompt
from .response_validation import parse_fact_check

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 60.0


class FactCheckingService:
    """Runs the validate, rate-limit, call and verify pipeline.

    Both the HTTP application and the serverless handler go through this
    service, so every response is schema-validated the same way.
    """

    def __init__(
        self,
        vision_provider: VisionProvider,
        rate_limiter: Optional[RateLimiter] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_image_bytes: int = MAX_IMAGE_BYTES,
    ):
        """Initialize the service.

        Args:
            vision_provider: Provider used for the model call
            rate_limiter: Per-client limiter, sliding window by default
            request_timeout: Overall deadline for one analysis, in seconds
            max_image_bytes: Ceiling on the estimated decoded image size
        """
        self.vision = vision_provider
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter()
        self.request_timeout = request_timeout
        self.max_image_bytes = max_image_bytes
        logger.info("🔧 FactCheckingService initialized")

    async def analyze(self, payload: Any, client_key: str) -> AnalyzedFactCheck:
        """Fact-check the advertisement image in a request payload.

        Args:
            payload: Decoded JSON request body
            client_key: Identifier used for rate limiting

        Returns:
            Validated fact-check annotated with analysis metadata

        Raises:
            LucidAdError: Any pipeline failure, see ``map_error``
        """
        started = time.perf_counter()

        request = validate_analysis_payload(payload, self.max_image_bytes)
        if not self.rate_limiter.allow(client_key):
            logger.warning(f"🚦 Rate limit exceeded for client {client_key}")
            raise RateLimitError(f"client {client_key} exceeded local quota")

        logger.info(f"🔍 Analyzing image (~{request.estimated_size} bytes) for client {client_key}")
        prompt = build_analysis_prompt(request)

        try:
            raw_text = await asyncio.wait_for(
                self.vision.analyze_image(prompt),
                timeout=self.request_timeout,
            )
        except asyncio.TimeoutError:
            raise AnalysisTimeoutError(f"analysis exceeded {self.request_timeout:g}s deadline")

        result = parse_fact_check(raw_text)
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            f"✅ Fact check complete: truth score {result.truth_score}, "
            f"{len(result.sources)} sources, {elapsed_ms}ms"
        )
        return AnalyzedFactCheck.from_result(
            result,
            analyzed_at=datetime.now(timezone.utc),
            model=self.vision.model,
            processing_time=elapsed_ms,
        )
