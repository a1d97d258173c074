# =============================================================================
# Job Extraction Routes
# =============================================================================
"""
API endpoints for turning job links into job details.

Provides endpoints for:
- Extracting role, company, location, description and skills from a link
- Fetching just the description of a link for resume analysis
- Suggesting locations for the job form

Usage:
    from jobpilot.api.routes import extraction
    app.include_router(extraction.router, prefix="/api")
"""

import logging
from typing import AsyncGenerator, Optional, Union

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from jobpilot.config import Settings, get_settings
from jobpilot.models.extraction import (
    DescriptionFromLinkResponse,
    ErrorResponse,
    ExtractFromLinkRequest,
    ExtractionResponse,
    LocationSuggestionResponse,
)
from jobpilot.services.extraction import (
    ExtractionError,
    JobExtractionService,
    fetch_job_description,
)
from jobpilot.services.extraction.skills import extract_analysis_skills
from jobpilot.services.extraction.text import suggest_locations


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
EXTRACTION_FAILED_MESSAGE = "Unable to extract details from this link."
DESCRIPTION_FAILED_MESSAGE = "Unable to read a job description from this link."
MIN_DESCRIPTION_LENGTH = 80


# -----------------------------------------------------------------------------
# Router Setup
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/jobs", tags=["Jobs"])


# -----------------------------------------------------------------------------
# Dependency Injection
# -----------------------------------------------------------------------------
async def get_extraction_service(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[JobExtractionService, None]:
    """Provide an extraction service that is closed after the request."""
    async with JobExtractionService(settings=settings) as service:
        yield service


def _failure(message: str, error: Exception) -> JSONResponse:
    """Build the 500 payload for a failed extraction."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message=message, error=str(error)).model_dump(),
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.post(
    "/extract-from-link",
    response_model=ExtractionResponse,
    summary="Extract job details from a link",
    description="Fetch a job listing and extract its fields with a confidence score.",
    responses={
        200: {"description": "Job details extracted"},
        400: {"description": "Invalid job link"},
        500: {"model": ErrorResponse, "description": "Listing could not be fetched or parsed"},
    },
)
async def extract_from_link(
    request: ExtractFromLinkRequest,
    service: JobExtractionService = Depends(get_extraction_service),
) -> Union[ExtractionResponse, JSONResponse]:
    """
    Extract job details from a listing link.

    Low-confidence results are returned normally with needsReview set;
    only fetch and parse failures produce an error response.

    Args:
        request: Request containing the job link.
        service: JobExtractionService from dependency injection.

    Returns:
        Extracted fields, or a 500 error payload.

    Example:
        POST /api/jobs/extract-from-link
        {"jobLink": "https://boards.greenhouse.io/acme/jobs/4012345"}

        Response:
        {
            "role": "Backend Engineer",
            "companyName": "Acme",
            "location": "Austin, TX",
            "source": "greenhouse:direct",
            "confidence": 100,
            "needsReview": false,
            ...
        }
    """
    url = str(request.job_link)

    try:
        result = await service.extract(url)
    except ExtractionError as e:
        logger.error(f"Extraction failed for {url}: {e}")
        return _failure(EXTRACTION_FAILED_MESSAGE, e)

    return ExtractionResponse.from_result(result)


@router.post(
    "/description-from-link",
    response_model=DescriptionFromLinkResponse,
    summary="Fetch a job description from a link",
    description="Fetch only the description of a job listing for resume analysis.",
    responses={
        200: {"description": "Description fetched"},
        400: {"model": ErrorResponse, "description": "No usable description found"},
        500: {"model": ErrorResponse, "description": "Listing could not be fetched"},
    },
)
async def description_from_link(
    request: ExtractFromLinkRequest,
    service: JobExtractionService = Depends(get_extraction_service),
    settings: Settings = Depends(get_settings),
) -> Union[DescriptionFromLinkResponse, JSONResponse]:
    """
    Fetch the description of a job listing.

    Args:
        request: Request containing the job link.
        service: JobExtractionService whose fetcher is reused.
        settings: Application settings.

    Returns:
        Description with analysis skills, or an error payload.
    """
    url = str(request.job_link)

    try:
        description = await fetch_job_description(service.fetcher, url, settings)
    except ExtractionError as e:
        logger.error(f"Description fetch failed for {url}: {e}")
        return _failure(EXTRACTION_FAILED_MESSAGE, e)

    if len(description) < MIN_DESCRIPTION_LENGTH:
        logger.info(f"Description from {url} too short ({len(description)} characters)")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": DESCRIPTION_FAILED_MESSAGE},
        )

    return DescriptionFromLinkResponse(
        description=description,
        skills=extract_analysis_skills(description),
        extracted_from_link=True,
    )


@router.get(
    "/locations/suggest",
    response_model=LocationSuggestionResponse,
    summary="Suggest locations",
    description="Suggest US states (and Remote) matching a partial location.",
)
async def suggest_location_names(
    q: Optional[str] = Query(default=None, max_length=100, description="Partial location"),
) -> LocationSuggestionResponse:
    """
    Suggest locations for a partial query.

    Args:
        q: Partial location typed by the user.

    Returns:
        Up to 8 matching location names.
    """
    return LocationSuggestionResponse(data=suggest_locations(q))
