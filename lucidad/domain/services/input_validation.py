"""Validation of inbound analysis payloads."""

import math
from typing import Any

from ..errors import ValidationError
from ..models.analysis_request import AnalysisRequest

DATA_URL_PREFIX = "data:image"
MAX_IMAGE_BYTES = 10 * 1024 * 1024  # 10 MiB


def estimate_decoded_size(base64_data: str) -> int:
    """Upper-bound estimate of the decoded size of a base64 payload.

    Padding is not subtracted, so the estimate can exceed the true size
    by up to two bytes.
    """
    return math.ceil(len(base64_data) * 3 / 4)


def validate_analysis_payload(payload: Any, max_bytes: int = MAX_IMAGE_BYTES) -> AnalysisRequest:
    """Check that a decoded request body carries a usable image data URL.

    Args:
        payload: Decoded JSON request body
        max_bytes: Ceiling on the estimated decoded image size

    Returns:
        The validated analysis request

    Raises:
        ValidationError: With a caller-facing message describing the problem
    """
    image = payload.get("image") if isinstance(payload, dict) else None
    if not image or not isinstance(image, str):
        raise ValidationError("Image data is required")

    if not image.startswith(DATA_URL_PREFIX):
        raise ValidationError("Invalid image format. Please provide a valid data URL.")

    _, separator, base64_data = image.partition(",")
    if not separator:
        raise ValidationError("Invalid image format. Please provide a valid data URL.")

    size = estimate_decoded_size(base64_data)
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationError(f"Image too large. Please use an image under {limit_mb}MB.")

    return AnalysisRequest(image=image, estimated_size=size)
