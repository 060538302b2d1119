"""Advertisement analysis endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...domain.errors import ValidationError
from ...domain.models.analysis_request import ErrorResponse
from ...domain.models.fact_check_result import AnalyzedFactCheck
from ...domain.services.error_mapping import map_error
from ...domain.services.fact_checking_service import FactCheckingService
from ...domain.services.rate_limiter import client_key_from_headers
from ...infrastructure.dependencies import get_fact_checking_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


@router.post(
    "/analyze",
    response_model=AnalyzedFactCheck,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid image payload"},
        422: {"model": ErrorResponse, "description": "Model output failed schema validation"},
        429: {"model": ErrorResponse, "description": "Rate limited locally or upstream"},
        500: {"model": ErrorResponse, "description": "Analysis failed"},
        503: {"model": ErrorResponse, "description": "Upstream service unavailable"},
    },
)
async def analyze_advertisement(
    request: Request,
    service: FactCheckingService = Depends(get_fact_checking_service),
) -> JSONResponse:
    """Fact-check an advertisement image submitted as a data URL.

    The body is read directly rather than through a pydantic request model
    so malformed input is reported as 400 with the pipeline's own messages.
    """
    peer = request.client.host if request.client else None
    client_key = client_key_from_headers(request.headers, peer)

    try:
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError("Request body must be valid JSON")

        result = await service.analyze(payload, client_key)
    except Exception as e:
        status_code, body = map_error(e)
        return JSONResponse(status_code=status_code, content=body.to_dict())

    return JSONResponse(content=result.to_dict())
