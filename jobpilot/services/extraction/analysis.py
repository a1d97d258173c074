# =============================================================================
# Job Description Fetch
# =============================================================================
"""
Fetch just the description text of a job listing.

Used when a resume is analyzed against a job link: only the description
matters, so this path takes a shorter timeout and a smaller size cap than
full extraction, accepts thinner direct pages, and never scores fields.
"""

import logging

from bs4 import BeautifulSoup

from jobpilot.config.settings import Settings
from jobpilot.services.extraction.descriptions import (
    ANALYSIS_KEYWORD_WEIGHT,
    pick_best_description,
)
from jobpilot.services.extraction.fetcher import FetchError, PageFetcher
from jobpilot.services.extraction.parsers import greenhouse_opening_text
from jobpilot.services.extraction.sources import JobSource, detect_source
from jobpilot.services.extraction.structured_data import parse_json_ld
from jobpilot.services.extraction.text import (
    clean_text,
    cut_at_apply_markers,
    truncate,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
ANALYSIS_DESCRIPTION_MAX_LENGTH = 8000
MIN_GREENHOUSE_TEXT_LENGTH = 120
MIN_DIRECT_DESCRIPTION_LENGTH = 500

_DESCRIPTION_REGIONS = (
    '[class*="description"]',
    '[id*="description"]',
    '[class*="requirements"]',
    '[id*="requirements"]',
    "main",
    "article",
)


def _region_candidates(soup: BeautifulSoup) -> list[str]:
    """JSON-LD description followed by description-like page regions."""
    candidates = [parse_json_ld(soup).description]
    for selector in _DESCRIPTION_REGIONS:
        candidates.extend(node.get_text("\n") for node in soup.select(selector))
    return candidates


def _narrow_greenhouse_text(text: str) -> str:
    """Drop navigation and the application form from Greenhouse proxy text."""
    narrowed = cut_at_apply_markers(text)
    return clean_text(narrowed.replace("Back to jobs", " "))


async def fetch_job_description(
    fetcher: PageFetcher,
    url: str,
    settings: Settings,
) -> str:
    """
    Fetch the description of a job listing.

    Tries the listing directly first, accepting the Greenhouse opening
    text or the best scoring description region when either is long
    enough, then falls back to the readability proxy.

    Args:
        fetcher: Page fetcher to use.
        url: Job listing URL.
        settings: Application settings with the description fetch limits.

    Returns:
        Description text bounded to 8000 characters, possibly empty.

    Raises:
        FetchError: If the proxy fetch fails after the direct path
            produced nothing usable.
    """
    is_greenhouse = detect_source(url) == JobSource.GREENHOUSE

    try:
        html = await fetcher.fetch_direct(
            url,
            timeout=settings.description_fetch_timeout,
            max_bytes=settings.description_max_response_bytes,
        )
        soup = BeautifulSoup(html, "lxml")

        if is_greenhouse:
            opening = clean_text(cut_at_apply_markers(greenhouse_opening_text(soup)))
            if len(opening) > MIN_GREENHOUSE_TEXT_LENGTH:
                return truncate(opening, ANALYSIS_DESCRIPTION_MAX_LENGTH)

        best = pick_best_description(
            _region_candidates(soup), keyword_weight=ANALYSIS_KEYWORD_WEIGHT
        )
        if len(best) > MIN_DIRECT_DESCRIPTION_LENGTH:
            return truncate(best, ANALYSIS_DESCRIPTION_MAX_LENGTH)

        logger.info(f"Direct description of {url} too short, retrying through proxy")
    except FetchError as e:
        logger.warning(f"Direct description fetch of {url} failed: {e}")

    text = await fetcher.fetch_via_proxy(
        url,
        timeout=settings.proxy_fetch_timeout,
        max_bytes=settings.description_max_response_bytes,
    )

    if is_greenhouse:
        narrowed = _narrow_greenhouse_text(text)
        if len(narrowed) > MIN_GREENHOUSE_TEXT_LENGTH:
            return truncate(narrowed, ANALYSIS_DESCRIPTION_MAX_LENGTH)

    return truncate(
        pick_best_description([text], keyword_weight=ANALYSIS_KEYWORD_WEIGHT),
        ANALYSIS_DESCRIPTION_MAX_LENGTH,
    )
