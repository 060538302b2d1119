"""Parsing and validation of the model's structured output."""

import json
import logging
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from ..errors import MalformedOutputError, SchemaValidationError
from ..models.fact_check_result import FactCheckResult

logger = logging.getLogger(__name__)


def flatten_errors(error: PydanticValidationError) -> Dict[str, Any]:
    """Flatten pydantic errors into form-level and per-field messages.

    Field paths use the wire names joined with dots, e.g. ``sources.0.url``.
    Errors about the document as a whole are listed under ``formErrors``.
    """
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}

    for item in error.errors(include_url=False):
        path = ".".join(str(part) for part in item["loc"])
        if path:
            field_errors.setdefault(path, []).append(item["msg"])
        else:
            form_errors.append(item["msg"])

    return {"formErrors": form_errors, "fieldErrors": field_errors}


def parse_fact_check(raw_text: str) -> FactCheckResult:
    """Parse and strictly validate the model's raw output.

    Args:
        raw_text: Text returned by the vision provider

    Returns:
        The validated fact-check result

    Raises:
        MalformedOutputError: If the text is not valid JSON
        SchemaValidationError: If the JSON does not match the fact-check schema
    """
    try:
        parsed = json.loads(raw_text)
    except (TypeError, json.JSONDecodeError) as e:
        raise MalformedOutputError(f"Model output is not valid JSON: {e}")

    try:
        return FactCheckResult.model_validate(parsed)
    except PydanticValidationError as e:
        details = flatten_errors(e)
        logger.warning(f"⚠️ Model output failed schema validation: {details}")
        raise SchemaValidationError(str(e), details=details)
