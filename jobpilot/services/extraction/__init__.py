# =============================================================================
# Job Extraction Service Package
# =============================================================================
"""
Job extraction engine for turning a listing link into structured fields.

Provides extraction for listings hosted on:
- Greenhouse (ATS)
- Lever (ATS)
- Workday (ATS)
- LinkedIn and any other site (generic heuristics)

Usage:
    from jobpilot.services.extraction import JobExtractionService

    async with JobExtractionService() as extractor:
        result = await extractor.extract("https://boards.greenhouse.io/acme/jobs/1")
"""

from jobpilot.services.extraction.analysis import fetch_job_description
from jobpilot.services.extraction.fetcher import (
    ExtractionError,
    FetchError,
    PageFetcher,
    ResponseTooLargeError,
)
from jobpilot.services.extraction.service import (
    ExtractionResult,
    JobExtractionService,
    ParseError,
)

__all__ = [
    "ExtractionError",
    "ExtractionResult",
    "FetchError",
    "JobExtractionService",
    "PageFetcher",
    "ParseError",
    "ResponseTooLargeError",
    "fetch_job_description",
]
