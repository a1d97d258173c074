# =============================================================================
# Job Listing Parsers
# =============================================================================
"""
Site-specific parsers for extracting job listing fields from a page.

Each parser handles one hosting platform and resolves every field from an
ordered list of candidates: platform markup first, then JSON-LD, then
generic fallbacks. Candidates are evaluated lazily and the first one that
survives normalization wins.

Note: ATS markup changes frequently. Parsers should degrade gracefully
when selectors stop matching; an empty field only lowers the confidence.
"""

import copy
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable, Optional
from urllib.parse import parse_qs, unquote, urlparse

from bs4 import BeautifulSoup, Tag

from jobpilot.services.extraction.descriptions import (
    DESCRIPTION_MAX_LENGTH,
    bounded_description,
    compact_description,
    pick_best_description,
)
from jobpilot.services.extraction.labeled import LabeledFields
from jobpilot.services.extraction.skills import extract_skills, merge_skills
from jobpilot.services.extraction.sources import JobSource
from jobpilot.services.extraction.structured_data import StructuredJobData
from jobpilot.services.extraction.text import (
    clean_text,
    company_from_host,
    cut_at_apply_markers,
    extract_location_from_body,
    is_likely_location,
    is_non_company_host,
    normalize_company,
    normalize_location,
    normalize_role,
    smart_trim,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
ATS_DESCRIPTION_MAX_LENGTH = 8000

GREENHOUSE_APPLICATION_CONTROLS = (
    "script,style,noscript,form,button,input,select,textarea,"
    '[class*="application"],[id*="application"],[data-qa*="application"]'
)

_JD_LABEL_RE = re.compile(r"Job Description\s*[:\-]?\s*([\s\S]+)", re.IGNORECASE)
_JD_TAIL_RE = re.compile(
    r"\b(?:How to Apply|About Us|If you are keen|Apply Link|Submit application)\b",
    re.IGNORECASE,
)
# "New Grad" and "New York" are title text, not badges
_HEADING_BADGE_RE = re.compile(
    r"^(?:(?:New|Featured|Hot)\s+(?!(?:Grad|York|Jersey|Zealand)\b)(?=\S))+"
)
_URL_ROLE_NOISE_RE = re.compile(r"\b(job|jobs|opening|careers?)\b", re.IGNORECASE)
_RAW_LOCATION_RE = re.compile(r"location\s*[:\-]\s*([^\n|]{2,80})", re.IGNORECASE)

Candidate = Callable[[], Optional[str]]


# -----------------------------------------------------------------------------
# Data Structures
# -----------------------------------------------------------------------------
@dataclass
class ExtractedJobFields:
    """
    Best-effort job fields extracted from a listing.

    Every field is normalized plain text; an empty string means the field
    could not be found.

    Attributes:
        role: Job title.
        company_name: Hiring company.
        location: Job location or work mode.
        description: Job description.
        skills: Skill tags.
    """

    role: str = ""
    company_name: str = ""
    location: str = ""
    description: str = ""
    skills: list[str] = field(default_factory=list)


@dataclass
class JobPage:
    """
    Everything a parser may read about one fetched listing.

    Attributes:
        url: Listing URL as requested.
        soup: Parsed page.
        json_ld: JobPosting data found in the page.
        labeled: "Label: value" fields found in the page text.
    """

    url: str
    soup: BeautifulSoup
    json_ld: StructuredJobData = field(default_factory=StructuredJobData)
    labeled: LabeledFields = field(default_factory=LabeledFields)

    @cached_property
    def body_text(self) -> str:
        """Visible page text with one line per text node."""
        root = self.soup.body or self.soup
        body = copy.copy(root)
        for tag in body.find_all(["script", "style", "noscript", "template"]):
            tag.extract()
        return body.get_text("\n")


# -----------------------------------------------------------------------------
# Shared Helpers
# -----------------------------------------------------------------------------
def node_text(node: Optional[Tag]) -> str:
    """Text of a node with one line per text node."""
    return node.get_text("\n") if node is not None else ""


def role_from_url_path(url: str) -> str:
    """
    Derive a job title from the last meaningful URL path segment.

    "https://acme.com/careers/senior-backend-engineer-r1234" gives
    "senior backend engineer". Tokens carrying digits (requisition IDs)
    are dropped.

    Args:
        url: Listing URL.

    Returns:
        Normalized role, or an empty string.
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return ""

    for segment in reversed([s for s in path.split("/") if s]):
        words = re.sub(r"[-_+]", " ", unquote(segment)).split()
        words = [w for w in words if not re.search(r"\d", w)]
        cleaned = _URL_ROLE_NOISE_RE.sub("", " ".join(words))
        role = normalize_role(cleaned)
        if role:
            return role
    return ""


def greenhouse_opening_text(soup: BeautifulSoup) -> str:
    """
    Text of a Greenhouse opening without the application form.

    Args:
        soup: Parsed Greenhouse page.

    Returns:
        Region text with newlines preserved, or an empty string.
    """
    content = soup.select_one('[data-board-role="opening-content"]')
    if content is not None:
        scoped = copy.copy(content)
        for control in scoped.select(GREENHOUSE_APPLICATION_CONTROLS):
            control.extract()
        text = node_text(scoped)
        if text.strip():
            return text
        text = node_text(content)
        if text.strip():
            return text

    for selector in ("#content .opening", "main"):
        text = node_text(soup.select_one(selector))
        if text.strip():
            return text
    return ""


# -----------------------------------------------------------------------------
# Base Parser Abstract Class
# -----------------------------------------------------------------------------
class BaseJobParser(ABC):
    """
    Abstract base class for job listing parsers.

    Subclasses implement platform-specific field resolution while
    inheriting the candidate resolution and selector helpers.
    """

    @property
    @abstractmethod
    def source_name(self) -> JobSource:
        """Return the platform this parser handles."""
        pass

    @abstractmethod
    def parse(self, page: JobPage) -> ExtractedJobFields:
        """
        Extract job fields from a page.

        Args:
            page: The fetched listing.

        Returns:
            Extracted fields, empty where nothing was found.
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------
    def _resolve(self, normalize: Callable[[str], str], *candidates: Candidate) -> str:
        """
        Return the first candidate that survives normalization.

        Args:
            normalize: Field normalizer applied to each raw candidate.
            candidates: Zero-argument callables producing raw values,
                evaluated in order until one yields a non-empty result.

        Returns:
            Normalized value, or an empty string.
        """
        for candidate in candidates:
            value = normalize(candidate() or "")
            if value:
                return value
        return ""

    def _text(self, soup: BeautifulSoup, selector: str) -> str:
        """Text of the first element matching a CSS selector."""
        return node_text(soup.select_one(selector))

    def _all_text(self, soup: BeautifulSoup, selector: str) -> str:
        """Joined text of every element matching a CSS selector."""
        return "\n".join(node_text(node) for node in soup.select(selector))

    def _attr(self, soup: BeautifulSoup, selector: str, attr: str) -> str:
        """Attribute value of the first element matching a CSS selector."""
        element = soup.select_one(selector)
        if element is None:
            return ""
        value = element.get(attr)
        if isinstance(value, list):
            value = " ".join(value)
        return value or ""

    def _meta(self, soup: BeautifulSoup, **attrs: str) -> str:
        """Content of the first <meta> tag with the given attributes."""
        tag = soup.find("meta", attrs=attrs)
        content = tag.get("content") if tag is not None else None
        return content if isinstance(content, str) else ""

    def _trimmed(self, max_length: int) -> Callable[[str], str]:
        """Build a normalizer that cleans and bounds long text."""
        return lambda value: smart_trim(value, max_length)


# -----------------------------------------------------------------------------
# Greenhouse ATS Parser
# -----------------------------------------------------------------------------
class GreenhouseParser(BaseJobParser):
    """
    Parser for Greenhouse ATS job listings.

    Handles job URLs like:
    - https://boards.greenhouse.io/company/jobs/123456
    - https://job-boards.greenhouse.io/company/jobs/123456
    - https://company.greenhouse.io/jobs/123456
    """

    @property
    def source_name(self) -> JobSource:
        return JobSource.GREENHOUSE

    def parse(self, page: JobPage) -> ExtractedJobFields:
        """Parse Greenhouse ATS job listing markup."""
        soup = page.soup
        heading = clean_text(
            self._text(soup, '[data-board-role="opening-title"]')
            or self._text(soup, ".opening h1")
            or self._text(soup, "h1")
        )

        role = self._resolve(
            normalize_role,
            lambda: self._heading_role(heading),
            lambda: page.json_ld.role,
        )

        # Boards are per company, so the board path names the company
        company_name = self._resolve(
            normalize_company,
            lambda: self._company_from_board_path(page),
            lambda: self._company_from_subdomain(page.url),
            lambda: self._text(soup, ".company-name"),
            lambda: page.json_ld.company_name,
        )

        location = self._resolve(
            normalize_location,
            lambda: self._text(soup, '[data-board-role="opening-location"]'),
            lambda: self._text(soup, ".location"),
            lambda: self._text(soup, '[data-qa="location"]'),
            lambda: self._heading_location(heading),
            lambda: page.json_ld.location,
            lambda: extract_location_from_body(page.body_text),
        )

        description = self._description(page)

        return ExtractedJobFields(
            role=role,
            company_name=company_name,
            location=location,
            description=description,
            skills=extract_skills(description),
        )

    def _heading_role(self, heading: str) -> str:
        """Strip navigation, badges and trailing locations from a heading."""
        text = re.sub(r"^Back to jobs\s*", "", heading, flags=re.IGNORECASE)
        text = _HEADING_BADGE_RE.sub("", text)
        text = re.split(r"Apply\s*$", text, flags=re.IGNORECASE)[0]
        text = re.split(
            r"\b(?:India|United States|Bengaluru|Bangalore)\b", text, flags=re.IGNORECASE
        )[0]
        return text.strip()

    def _heading_location(self, heading: str) -> str:
        """Return the last part of a "Title - Location" heading if it reads as a place."""
        parts = [p.strip() for p in heading.split(" - ") if p.strip()]
        candidate = parts[-1] if len(parts) >= 2 else ""
        return candidate if is_likely_location(candidate) else ""

    def _company_from_board_path(self, page: JobPage) -> str:
        """Read the company slug from the canonical (or requested) board URL."""
        canonical = page.soup.find("link", rel="canonical")
        href = canonical.get("href") if canonical is not None else None
        source_url = href if isinstance(href, str) and href else page.url

        try:
            parsed = urlparse(source_url)
        except ValueError:
            return ""

        segments = [s for s in parsed.path.split("/") if s]
        if not segments:
            return ""
        if segments[0] == "embed":
            return parse_qs(parsed.query).get("for", [""])[0].replace("-", " ")
        return re.sub(r"[-_]", " ", segments[0])

    def _company_from_subdomain(self, url: str) -> str:
        """Read the company from a company.greenhouse.io style host."""
        try:
            host = (urlparse(url).hostname or "").lower()
        except ValueError:
            return ""
        label = host.split(".")[0] if host.endswith("greenhouse.io") else ""
        if label in ("", "boards", "job-boards", "www", "api", "greenhouse"):
            return ""
        return label.replace("-", " ")

    def _description(self, page: JobPage) -> str:
        """Scope the description to the opening and cut the application form."""
        opening = cut_at_apply_markers(greenhouse_opening_text(page.soup))
        base = bounded_description(opening or page.json_ld.description)

        labeled = _JD_LABEL_RE.search(base)
        focused = labeled.group(1) if labeled else base
        head = _JD_TAIL_RE.split(focused, maxsplit=1)[0].strip()

        return smart_trim(head or focused, DESCRIPTION_MAX_LENGTH)


# -----------------------------------------------------------------------------
# Lever ATS Parser
# -----------------------------------------------------------------------------
class LeverParser(BaseJobParser):
    """
    Parser for Lever ATS job listings.

    Handles job URLs like:
    - https://jobs.lever.co/company/abc123
    """

    @property
    def source_name(self) -> JobSource:
        return JobSource.LEVER

    def parse(self, page: JobPage) -> ExtractedJobFields:
        """Parse Lever ATS job listing markup."""
        soup = page.soup

        role = self._resolve(
            normalize_role,
            lambda: self._text(soup, '[data-qa="posting-name"]'),
            lambda: self._text(soup, ".posting-headline h2"),
            lambda: self._text(soup, "h1"),
            lambda: page.json_ld.role,
        )

        company_name = self._resolve(
            normalize_company,
            lambda: self._attr(soup, ".main-header-logo img", "alt"),
            lambda: self._meta(soup, property="og:site_name"),
            lambda: page.json_ld.company_name,
            lambda: self._company_from_path(page.url),
        )

        location = self._resolve(
            normalize_location,
            lambda: self._text(soup, ".posting-categories .location"),
            lambda: self._text(soup, '[data-qa="location"]'),
            lambda: page.json_ld.location,
        )

        description = self._resolve(
            self._trimmed(ATS_DESCRIPTION_MAX_LENGTH),
            lambda: self._all_text(
                soup,
                '[data-qa="job-description"], .posting-requirements, '
                '[data-qa="closing-description"]',
            ),
            lambda: page.json_ld.description,
            lambda: self._all_text(soup, ".section-wrapper"),
            lambda: self._all_text(soup, "main"),
        )

        return ExtractedJobFields(
            role=role,
            company_name=company_name,
            location=location,
            description=description,
            skills=extract_skills(description),
        )

    def _company_from_path(self, url: str) -> str:
        """Read the company slug from jobs.lever.co/<company>/<id>."""
        try:
            parts = urlparse(url).path.strip("/").split("/")
        except ValueError:
            return ""
        return parts[0].replace("-", " ") if parts and parts[0] else ""


# -----------------------------------------------------------------------------
# Workday Parser
# -----------------------------------------------------------------------------
class WorkdayParser(BaseJobParser):
    """
    Parser for Workday job listings.

    Handles job URLs like:
    - https://company.wd1.myworkdayjobs.com/en-US/External/job/City/Title_R123
    """

    @property
    def source_name(self) -> JobSource:
        return JobSource.WORKDAY

    def parse(self, page: JobPage) -> ExtractedJobFields:
        """Parse Workday job listing markup."""
        soup = page.soup

        role = self._resolve(
            normalize_role,
            lambda: self._text(soup, '[data-automation-id="jobPostingHeader"]'),
            lambda: self._text(soup, "h1"),
            lambda: page.json_ld.role,
        )

        company_name = self._resolve(
            normalize_company,
            lambda: self._meta(soup, property="og:site_name"),
            lambda: page.json_ld.company_name,
        )

        location = self._resolve(
            normalize_location,
            lambda: self._all_text(soup, '[data-automation-id="locations"]'),
            lambda: page.json_ld.location,
            lambda: extract_location_from_body(page.body_text),
        )

        description = self._resolve(
            self._trimmed(ATS_DESCRIPTION_MAX_LENGTH),
            lambda: self._all_text(soup, '[data-automation-id="jobPostingDescription"]'),
            lambda: page.json_ld.description,
            lambda: self._all_text(soup, "main"),
            lambda: page.body_text,
        )

        return ExtractedJobFields(
            role=role,
            company_name=company_name,
            location=location,
            description=description,
            skills=extract_skills(description),
        )


# -----------------------------------------------------------------------------
# Generic Parser (Fallback)
# -----------------------------------------------------------------------------
class GenericParser(BaseJobParser):
    """
    Generic fallback parser for unknown job sites.

    Uses labeled page text, JSON-LD, headings and meta tags, then URL and
    hostname fallbacks. Also used for LinkedIn, whose public markup is
    too unstable for dedicated selectors.
    """

    @property
    def source_name(self) -> JobSource:
        return JobSource.GENERIC

    def parse(self, page: JobPage) -> ExtractedJobFields:
        """Parse a job listing using generic heuristics."""
        soup = page.soup
        labeled = page.labeled
        json_ld = page.json_ld

        role = self._resolve(
            normalize_role,
            lambda: labeled.role,
            lambda: json_ld.role,
            lambda: self._text(soup, "h1"),
            lambda: self._meta_title(soup),
            lambda: role_from_url_path(page.url),
        )

        company_name = self._resolve(
            normalize_company,
            lambda: labeled.company_name,
            lambda: json_ld.company_name,
            lambda: self._site_name(soup, page.url),
            lambda: company_from_host(page.url),
        )

        location = self._resolve(
            normalize_location,
            lambda: labeled.location,
            lambda: json_ld.location,
            lambda: self._text(soup, '[class*="location"]'),
            lambda: self._text(soup, '[data-test*="location"]'),
            lambda: self._text(soup, 'li:-soup-contains("Location")'),
            lambda: self._raw_location(page.body_text),
            lambda: extract_location_from_body(page.body_text),
        )

        description = compact_description(
            pick_best_description(self._description_candidates(page))
        )

        return ExtractedJobFields(
            role=role,
            company_name=company_name,
            location=location,
            description=description,
            skills=merge_skills(json_ld.skills, extract_skills(description)),
        )

    def _meta_title(self, soup: BeautifulSoup) -> str:
        """Title from Open Graph, Twitter or <title> tags."""
        title_tag = soup.find("title")
        return (
            self._meta(soup, property="og:title")
            or self._meta(soup, name="title")
            or self._meta(soup, name="twitter:title")
            or node_text(title_tag)
        )

    def _site_name(self, soup: BeautifulSoup, url: str) -> str:
        """Site name meta, ignored on blogs that post for other companies."""
        if is_non_company_host(url):
            return ""
        return self._meta(soup, property="og:site_name") or self._meta(soup, name="author")

    def _raw_location(self, body_text: str) -> str:
        """Value of a "Location: ..." line in raw page text."""
        match = _RAW_LOCATION_RE.search(body_text)
        return match.group(1) if match else ""

    def _description_candidates(self, page: JobPage) -> list[str]:
        """Regions that may hold the description, newlines preserved."""
        soup = page.soup
        return [
            self._meta(soup, name="description") or self._meta(soup, property="og:description"),
            page.json_ld.description,
            self._all_text(soup, "main"),
            self._all_text(soup, "article"),
            self._all_text(soup, '[class*="description"]'),
            self._all_text(soup, '[id*="description"]'),
            self._all_text(soup, '[class*="job-description"]'),
            self._all_text(soup, '[class*="requirements"]'),
            self._all_text(soup, '[id*="requirements"]'),
            page.body_text,
        ]


# -----------------------------------------------------------------------------
# Parser Registry
# -----------------------------------------------------------------------------
def get_parsers() -> dict[JobSource, BaseJobParser]:
    """
    Get the parser for every detectable source.

    Returns:
        Mapping of source to parser; LinkedIn shares the generic parser.
    """
    generic = GenericParser()
    return {
        JobSource.GREENHOUSE: GreenhouseParser(),
        JobSource.LEVER: LeverParser(),
        JobSource.WORKDAY: WorkdayParser(),
        JobSource.LINKEDIN: generic,
        JobSource.GENERIC: generic,
    }
