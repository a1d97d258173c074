# =============================================================================
# Job Extraction Service
# =============================================================================
"""
Service for extracting structured job details from a listing link.

Provides a single entry point that fetches the listing, detects the
hosting platform, runs the matching parser over the page and its JSON-LD
data, and grades the result with a confidence score.

Usage:
    from jobpilot.services.extraction import JobExtractionService

    async with JobExtractionService() as extractor:
        result = await extractor.extract("https://jobs.lever.co/acme/123")
        print(result.role, result.confidence, result.needs_review)
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup

from jobpilot.config.settings import Settings, get_settings
from jobpilot.services.extraction.descriptions import compact_description
from jobpilot.services.extraction.fetcher import ExtractionError, PageFetcher
from jobpilot.services.extraction.labeled import parse_labeled_fields
from jobpilot.services.extraction.parsers import (
    BaseJobParser,
    ExtractedJobFields,
    JobPage,
    get_parsers,
    role_from_url_path,
)
from jobpilot.services.extraction.scoring import needs_review, score_confidence
from jobpilot.services.extraction.skills import extract_skills, merge_skills
from jobpilot.services.extraction.sources import JobSource, detect_source
from jobpilot.services.extraction.structured_data import parse_json_ld
from jobpilot.services.extraction.text import normalize_company


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------
class ParseError(ExtractionError):
    """A parser failed unexpectedly on a fetched page."""

    pass


# -----------------------------------------------------------------------------
# Result
# -----------------------------------------------------------------------------
@dataclass
class ExtractionResult:
    """
    Extracted job fields with provenance and confidence.

    Attributes:
        role: Job title.
        company_name: Hiring company.
        location: Job location or work mode.
        description: Job description.
        skills: Skill tags.
        source: "<platform>:<fetch method>", e.g. "greenhouse:direct".
        confidence: Completeness score from 0 to 100.
        needs_review: Whether a person should check the fields before saving.
    """

    role: str = ""
    company_name: str = ""
    location: str = ""
    description: str = ""
    skills: list[str] = field(default_factory=list)
    source: str = ""
    confidence: int = 0
    needs_review: bool = True


# -----------------------------------------------------------------------------
# Job Extraction Service Class
# -----------------------------------------------------------------------------
class JobExtractionService:
    """
    Extracts job details from listing links.

    Attributes:
        fetcher: Page fetcher used for every request.
        parsers: Parser per detectable source.
        structured_description_min_length: Labeled descriptions longer than
            this replace the generic parser's description.
        review_threshold: Confidence below which results need review.
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Initialize the extraction service.

        Args:
            fetcher: Optional pre-configured page fetcher.
            settings: Application settings; defaults to the cached settings.
        """
        settings = settings or get_settings()
        self._owned_fetcher = fetcher is None
        self.fetcher = fetcher or PageFetcher(
            user_agent=settings.fetch_user_agent,
            direct_timeout=settings.direct_fetch_timeout,
            proxy_timeout=settings.proxy_fetch_timeout,
            max_response_bytes=settings.max_response_bytes,
            min_direct_length=settings.min_direct_html_length,
            proxy_url=settings.readability_proxy_url,
        )
        self.parsers: dict[JobSource, BaseJobParser] = get_parsers()
        self.structured_description_min_length = settings.structured_description_min_length
        self.review_threshold = settings.review_threshold

    async def close(self) -> None:
        """Close the fetcher if owned by this service."""
        if self._owned_fetcher:
            await self.fetcher.close()

    async def __aenter__(self) -> "JobExtractionService":
        """Support async context manager protocol."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up on context exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------
    async def extract(self, url: str) -> ExtractionResult:
        """
        Extract job details from a listing URL.

        Missing fields are not errors: they come back empty and lower the
        confidence score instead.

        Args:
            url: Job listing URL.

        Returns:
            Extracted fields with source, confidence and review flag.

        Raises:
            FetchError: If neither the direct nor the proxy fetch succeeds.
            ParseError: If the selected parser fails unexpectedly.
        """
        logger.info(f"Extracting job details from {url}")

        # ---------------------------------------------------------------------
        # Fetch
        # ---------------------------------------------------------------------
        fetched = await self.fetcher.fetch(url)
        logger.debug(f"Fetched {len(fetched.html)} characters via {fetched.source}")

        # ---------------------------------------------------------------------
        # Parse
        # ---------------------------------------------------------------------
        source = detect_source(url)
        parser = self.parsers[source]
        logger.info(f"Using parser: {parser.source_name.value} for source {source.value}")

        try:
            fields = self.parse_page(url, fetched.html, source)
        except Exception as e:
            logger.error(f"Parser error for {url}: {e}", exc_info=True)
            raise ParseError(f"Failed to parse job listing: {e}") from e

        # ---------------------------------------------------------------------
        # Score
        # ---------------------------------------------------------------------
        confidence = score_confidence(
            fields.role,
            fields.company_name,
            fields.location,
            fields.description,
            fields.skills,
        )
        logger.info(f"Extracted {url} from {source.value}:{fetched.source} "
                    f"with confidence {confidence}")

        return ExtractionResult(
            role=fields.role,
            company_name=fields.company_name,
            location=fields.location,
            description=fields.description,
            skills=fields.skills,
            source=f"{source.value}:{fetched.source}",
            confidence=confidence,
            needs_review=needs_review(confidence, self.review_threshold),
        )

    def parse_page(
        self,
        url: str,
        html: str,
        source: Optional[JobSource] = None,
    ) -> ExtractedJobFields:
        """
        Run the source parser over fetched markup and apply last resorts.

        Args:
            url: Listing URL the markup came from.
            html: Page markup or proxy text.
            source: Detected platform; detected from the URL when omitted.

        Returns:
            Final extracted fields.
        """
        source = source or detect_source(url)
        soup = BeautifulSoup(html, "lxml")
        page = JobPage(url=url, soup=soup, json_ld=parse_json_ld(soup))
        page.labeled = parse_labeled_fields(page.body_text)

        fields = self.parsers[source].parse(page)

        # Job blasts spell the description out in labeled sections
        labeled_description = page.labeled.description
        if (
            source == JobSource.GENERIC
            and len(labeled_description) > self.structured_description_min_length
        ):
            logger.debug("Using labeled description for generic listing")
            fields.description = compact_description(labeled_description)
            fields.skills = merge_skills(fields.skills, extract_skills(labeled_description))

        if not fields.role:
            fields.role = role_from_url_path(url)
        if not fields.company_name:
            fields.company_name = normalize_company("", link=url)

        fields.skills = merge_skills(fields.skills, extract_skills(fields.description))
        return fields
