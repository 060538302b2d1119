"""Domain models for inbound analysis requests and outbound prompts."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalysisRequest(BaseModel):
    """A validated request to fact-check an advertisement image."""

    model_config = ConfigDict(frozen=True)

    image: str = Field(..., description="Image as a data URL (data:image/...;base64,...)")
    estimated_size: int = Field(..., description="Upper-bound estimate of the decoded image size in bytes")


class AnalysisPrompt(BaseModel):
    """Everything the vision model needs for one fact-check call."""

    model_config = ConfigDict(frozen=True)

    instructions: str = Field(..., description="Fixed natural-language analysis procedure")
    image_url: str = Field(..., description="Inline image reference (data URL)")
    schema_name: str = Field(..., description="Name of the structured output schema")
    json_schema: Dict[str, Any] = Field(..., description="Strict JSON schema the output must match")
    temperature: float = Field(..., description="Sampling temperature")
    max_output_tokens: int = Field(..., description="Output token ceiling")


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Caller-facing error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Machine-readable error details")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting details when there are none."""
        return self.model_dump(exclude_none=True)
