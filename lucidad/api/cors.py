"""Cross-origin policy shared by every entry point."""

from typing import Dict

ALLOW_ORIGINS = ["*"]
ALLOW_METHODS = ["POST", "OPTIONS"]
ALLOW_HEADERS = ["Content-Type"]

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": ", ".join(ALLOW_ORIGINS),
    "Access-Control-Allow-Headers": ", ".join(ALLOW_HEADERS),
    "Access-Control-Allow-Methods": ", ".join(ALLOW_METHODS),
}
