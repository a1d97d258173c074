# =============================================================================
# Models Package
# =============================================================================
"""
Pydantic models and API schemas for the JobPilot extraction service.

This package contains Pydantic models used for:
- API request/response validation
- Data serialization
- OpenAPI documentation generation

Usage:
    from jobpilot.models import ExtractFromLinkRequest, ExtractionResponse
"""

from jobpilot.models.extraction import (
    DescriptionFromLinkResponse,
    ErrorResponse,
    ExtractFromLinkRequest,
    ExtractionResponse,
    LocationSuggestionResponse,
)


__all__ = [
    "DescriptionFromLinkResponse",
    "ErrorResponse",
    "ExtractFromLinkRequest",
    "ExtractionResponse",
    "LocationSuggestionResponse",
]
