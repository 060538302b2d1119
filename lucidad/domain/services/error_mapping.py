"""Conversion of pipeline failures into caller-facing error responses."""

import logging
from typing import Tuple

from ..errors import (
    LucidAdError,
    SchemaValidationError,
    UnknownError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)
from ..models.analysis_request import ErrorResponse

logger = logging.getLogger(__name__)

# Checked in order; the first matching kind wins.
ERROR_TABLE: Tuple[type, ...] = (
    SchemaValidationError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)


def map_error(error: BaseException) -> Tuple[int, ErrorResponse]:
    """Map an exception to an HTTP status code and error body.

    Input validation and local rate-limit errors keep their own status and
    message. Anything not in the table becomes a generic 500 and is logged
    with full detail, which is never returned to the caller.

    Args:
        error: The failure raised by the pipeline

    Returns:
        Tuple of (status code, error response)
    """
    for kind in ERROR_TABLE:
        if isinstance(error, kind):
            logger.warning(f"⚠️ {type(error).__name__}: {error}")
            return error.status_code, ErrorResponse(
                error=error.public_message,
                details=error.details,
            )

    if isinstance(error, LucidAdError) and error.status_code < 500:
        logger.warning(f"⚠️ Rejected request ({type(error).__name__}): {error.detail}")
        return error.status_code, ErrorResponse(error=error.public_message)

    logger.error(f"❌ Analysis failed: {type(error).__name__}: {error}", exc_info=error)
    return UnknownError.status_code, ErrorResponse(error=UnknownError.public_message)
