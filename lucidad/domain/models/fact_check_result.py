"""Domain models for advertisement fact-check results."""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class Source(BaseModel):
    """A reference supporting or refuting the advertised claims."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
    )

    title: Optional[StrictStr] = Field(None, description="Title of the source, if known")
    url: StrictStr = Field(..., description="Link to the source")


class FactCheckResult(BaseModel):
    """Structured fact-check of a single advertisement image.

    Field names are snake_case in Python and camelCase on the wire. Input is
    accepted by wire name only. Every field is required, including the
    nullable ones, and no extra fields are accepted.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        alias_generator=to_camel,
        json_schema_extra={
            "example": {
                "productName": "HydraBoost",
                "company": "Acme Beverages",
                "keyNumbers": ["3x", "24 hours"],
                "measurableFacts": ["Hydrates 3x faster than water"],
                "category": "health claim",
                "briefContext": "Sports drink billboard",
                "truthScore": 22,
                "report": "No peer-reviewed evidence supports a 3x hydration rate.",
                "sources": [{"title": "NIH hydration review", "url": "https://www.nih.gov/"}],
            }
        },
    )

    product_name: Optional[StrictStr]
    company: Optional[StrictStr]
    key_numbers: List[StrictStr]
    measurable_facts: List[StrictStr]
    category: Optional[StrictStr]
    brief_context: Optional[StrictStr]
    truth_score: Optional[Annotated[StrictInt, Field(ge=0, le=100)]]
    report: StrictStr
    sources: List[Source]

    @field_validator("truth_score", mode="before")
    @classmethod
    def integral_truth_score(cls, value: Any) -> Any:
        """Accept integral floats such as 73.0 as integers."""
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class AnalyzedFactCheck(FactCheckResult):
    """A validated fact-check annotated with response metadata."""

    analyzed_at: datetime = Field(..., description="When the server produced the result")
    model: StrictStr = Field(..., description="Identifier of the model used")
    processing_time: StrictInt = Field(..., description="Pipeline duration in milliseconds")

    @classmethod
    def from_result(
        cls,
        result: FactCheckResult,
        *,
        analyzed_at: datetime,
        model: str,
        processing_time: int,
    ) -> "AnalyzedFactCheck":
        """Attach metadata to a validated result."""
        return cls(
            **result.model_dump(by_alias=True),
            analyzedAt=analyzed_at,
            model=model,
            processingTime=processing_time,
        )
