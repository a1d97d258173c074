# =============================================================================
# Health Check Routes
# =============================================================================
"""
Health check endpoints for monitoring and container orchestration.

The extraction engine is stateless and talks to no backing services, so
the detailed check reports how fetching and scoring are configured
instead of probing remote job sites.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from jobpilot import __version__
from jobpilot.config import Settings, get_settings
from jobpilot.services.extraction.parsers import get_parsers


# -----------------------------------------------------------------------------
# Router Setup
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/health", tags=["Health"])


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------
class ServiceStatus(BaseModel):
    """
    Liveness response model.

    Attributes:
        status: Always "healthy" while the process serves requests.
        timestamp: Time of the check (UTC).
        version: Package version.
        environment: Deployment environment.
    """

    status: str = Field(default="healthy", description="Service status")
    timestamp: datetime = Field(description="Time of the check")
    version: str = Field(description="Package version")
    environment: str = Field(description="Deployment environment")


class FetcherConfig(BaseModel):
    """Limits applied to outbound page requests."""

    direct_timeout_s: float
    proxy_timeout_s: float
    description_timeout_s: float
    max_response_bytes: int
    min_direct_html_length: int
    readability_proxy_url: str


class ExtractionConfig(BaseModel):
    """Parsers and thresholds used to grade extractions."""

    sources: list[str]
    structured_description_min_length: int
    review_threshold: int


class DetailedServiceStatus(ServiceStatus):
    """Liveness plus the fetcher and extraction configuration."""

    fetcher: FetcherConfig
    extraction: ExtractionConfig


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------
def _fetcher_config(settings: Settings) -> FetcherConfig:
    return FetcherConfig(
        direct_timeout_s=settings.direct_fetch_timeout,
        proxy_timeout_s=settings.proxy_fetch_timeout,
        description_timeout_s=settings.description_fetch_timeout,
        max_response_bytes=settings.max_response_bytes,
        min_direct_html_length=settings.min_direct_html_length,
        readability_proxy_url=settings.readability_proxy_url,
    )


def _extraction_config(settings: Settings) -> ExtractionConfig:
    return ExtractionConfig(
        sources=[source.value for source in get_parsers()],
        structured_description_min_length=settings.structured_description_min_length,
        review_threshold=settings.review_threshold,
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.get(
    "",
    response_model=ServiceStatus,
    summary="Liveness Check",
    description="Confirms the extraction service is up."
)
async def health_check() -> ServiceStatus:
    """Report that the service is running."""
    settings = get_settings()

    return ServiceStatus(
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.app_env,
    )


@router.get(
    "/detailed",
    response_model=DetailedServiceStatus,
    summary="Configuration Check",
    description="Liveness plus fetch limits, parser sources and review thresholds."
)
async def detailed_health_check() -> DetailedServiceStatus:
    """
    Report liveness together with the active extraction configuration.

    Returns:
        DetailedServiceStatus: Fetch limits, registered parser sources
            and scoring thresholds.
    """
    settings = get_settings()

    return DetailedServiceStatus(
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.app_env,
        fetcher=_fetcher_config(settings),
        extraction=_extraction_config(settings),
    )
