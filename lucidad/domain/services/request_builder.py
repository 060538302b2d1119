"""Construction of the outbound vision-model request.

The instruction text and JSON schema are the contract with the model
provider's strict structured-output mode and must stay in sync with
``FactCheckResult``.
"""

from typing import Any, Dict

from ..models.analysis_request import AnalysisPrompt, AnalysisRequest

TEMPERATURE = 0.2
MAX_OUTPUT_TOKENS = 900

FACT_CHECK_SCHEMA_NAME = "fact_check_schema"

INSTRUCTIONS = """You are LucidAd, an advertising claim fact-checker. Analyze the advertisement image and return concise, source-linked JSON per the schema. 

Steps:
1) Identify ad name/company
2) Virtually enhance (brightness/contrast/sharpness), denoise, deskew and run OCR
3) Focus on relevant ad area
4) Extract text, isolate factual claims
5) Briefly infer context
6) Rephrase main claim(s) as fact-checkable statements
7) Extract product, company, key numbers, measurable facts
8) Categorize claim type
9) Optionally map to date/region/model
10) Verify claim(s)
11) Assign 0–100 truth probability
12) ~2 sentence summary
13) Provide 2–5 credible source links

Be thorough but concise. Focus on verifiable claims and provide authoritative sources."""

FACT_CHECK_JSON_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "productName": {"type": ["string", "null"]},
        "company": {"type": ["string", "null"]},
        "keyNumbers": {"type": "array", "items": {"type": "string"}},
        "measurableFacts": {"type": "array", "items": {"type": "string"}},
        "category": {"type": ["string", "null"]},
        "briefContext": {"type": ["string", "null"]},
        "truthScore": {"type": ["integer", "null"], "minimum": 0, "maximum": 100},
        "report": {"type": "string"},
        "sources": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "title": {"type": ["string", "null"]},
                    "url": {"type": "string"},
                },
                "required": ["url"],
            },
        },
    },
    "required": [
        "productName",
        "company",
        "keyNumbers",
        "measurableFacts",
        "category",
        "briefContext",
        "truthScore",
        "report",
        "sources",
    ],
}


def build_analysis_prompt(request: AnalysisRequest) -> AnalysisPrompt:
    """Compose the fixed instructions and schema with the submitted image."""
    return AnalysisPrompt(
        instructions=INSTRUCTIONS,
        image_url=request.image,
        schema_name=FACT_CHECK_SCHEMA_NAME,
        json_schema=FACT_CHECK_JSON_SCHEMA,
        temperature=TEMPERATURE,
        max_output_tokens=MAX_OUTPUT_TOKENS,
    )
