"""Error taxonomy for the advertisement fact-checking pipeline."""

from typing import Any, Dict, Optional


class LucidAdError(Exception):
    """Base class for all pipeline errors.

    Each subclass carries the HTTP status code it maps to and the fixed
    message shown to callers. The constructor message is internal detail
    and is only ever logged.
    """

    status_code: int = 500
    public_message: str = (
        "Analysis failed. Please try again or contact support if the problem persists."
    )

    def __init__(self, detail: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message
        self.details = details


class ConfigurationError(LucidAdError):
    """The service is deployed without a required setting."""


class ValidationError(LucidAdError):
    """The submitted payload is missing, malformed or oversized.

    Unlike the other errors, the specific validation message is safe to
    return to the caller.
    """

    status_code = 400

    def __init__(self, detail: str = "Invalid request", details: Optional[Dict[str, Any]] = None):
        super().__init__(detail, details)
        self.public_message = self.detail


class RateLimitError(LucidAdError):
    """The client exceeded the local request quota."""

    status_code = 429
    public_message = "Rate limit exceeded. Please try again in a minute."


class UpstreamQuotaError(LucidAdError):
    """The model provider reports the account quota is exhausted."""

    status_code = 503
    public_message = "Service temporarily unavailable. Please try again later."


class UpstreamRateLimitError(LucidAdError):
    """The model provider is throttling our requests."""

    status_code = 429
    public_message = "Service is busy. Please try again in a few minutes."


class MalformedOutputError(LucidAdError):
    """The model returned text that is not valid JSON."""


class SchemaValidationError(LucidAdError):
    """The model returned JSON that violates the fact-check schema."""

    status_code = 422
    public_message = "Invalid response format from AI service"


class UnknownError(LucidAdError):
    """Catch-all for failures with no more specific kind."""


class UpstreamServiceError(UnknownError):
    """Network or provider failure other than throttling."""


class AnalysisTimeoutError(UnknownError):
    """The overall request deadline expired before analysis finished."""
