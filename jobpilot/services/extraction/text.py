# =============================================================================
# Text Normalization
# =============================================================================
"""
Text cleaning helpers for job listing extraction.

Every value the extraction engine returns passes through these helpers:
markup is stripped, entities decoded, whitespace collapsed, boilerplate
lines dropped and lengths bounded. Field-specific normalizers layer the
role, company and location rules on top of the generic cleaner.

Usage:
    from jobpilot.services.extraction.text import clean_text, normalize_role

    clean_text("<p>Senior&nbsp;Engineer</p>")   # "Senior Engineer"
    normalize_role("Backend Engineer | Acme Careers")   # "Backend Engineer"
"""

import re
from typing import Optional
from urllib.parse import urlparse

from jobpilot.services.extraction.vocabulary import (
    APPLY_MARKERS,
    GENERIC_HOST_LABELS,
    KNOWN_PLACES,
    LOCATION_SUGGESTIONS,
    NOISE_PHRASES,
    NON_COMPANY_HOSTS,
    US_STATE_NAMES,
    WORK_MODES,
)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
ELLIPSIS = "…"

ROLE_MAX_LENGTH = 80
COMPANY_MAX_LENGTH = 60
LOCATION_MAX_LENGTH = 60

_BLOCK_RE = re.compile(r"<(script|style|noscript)\b[\s\S]*?</\1\s*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_BLOCK_END_RE = re.compile(r"<br\s*/?>|</(p|li|div|h[1-6]|ul|ol|tr)\s*>", re.IGNORECASE)
_STRAY_BRACKET_RE = re.compile(r"[<>]")
_WHITESPACE_RE = re.compile(r"\s+")

_ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&#39;": "'",
    "&#x27;": "'",
    "&apos;": "'",
    "&quot;": '"',
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES), re.IGNORECASE)

_NOISE_RE = re.compile("|".join(re.escape(p) for p in NOISE_PHRASES), re.IGNORECASE)
_APPLY_MARKER_RE = re.compile(
    "|".join(re.escape(m) for m in APPLY_MARKERS), re.IGNORECASE
)

_ROLE_CHROME_RE = re.compile(
    r"\b(apply now|job openings?|careers?|jobs?)\b", re.IGNORECASE
)
_ROLE_SEPARATOR_RE = re.compile(r"\s+[|@-]\s+")

_COMPANY_CHROME_RE = re.compile(
    r"\b(job openings?|careers?|jobs?|hiring)\b", re.IGNORECASE
)
_NON_COMPANY_HOST_RE = re.compile(
    "|".join(re.escape(h) for h in NON_COMPANY_HOSTS), re.IGNORECASE
)

_WORK_MODE_RE = re.compile(
    r"\b(" + "|".join(re.escape(m) for m in WORK_MODES) + r")\b", re.IGNORECASE
)
_KNOWN_PLACE_RE = re.compile(
    r"\b(" + "|".join(re.escape(p) for p in KNOWN_PLACES) + r")\b", re.IGNORECASE
)
_LOCATION_LABEL_RE = re.compile(r"^(?:job\s+)?locations?\b\s*[:\-]?\s*", re.IGNORECASE)
_LOCATION_TRAILER_RE = re.compile(
    r"\(adsbygoogle[\s\S]*$"
    r"|\b(experience|salary|ctc|job description|qualifications"
    r"|roles and responsibilities|how to apply)\b[\s\S]*$"
    r"|\b(adsbygoogle|click here|apply now|submit application)\b[\s\S]*$",
    re.IGNORECASE,
)
_LOCATION_PIPE_TAIL_RE = re.compile(r"\s+\|\s+.*")
_LOCATION_COUNTRY_TAIL_RE = re.compile(
    r"\s*[-|]\s*(india|united states|us|uk)\s*$", re.IGNORECASE
)
_LOCATION_SPLIT_RE = re.compile(r"\s{2,}| • | \| ")
_ROLE_WORD_RE = re.compile(
    r"\b(support|engineer|developer|associate|analyst|manager|intern|apprentice)\b",
    re.IGNORECASE,
)

_LABELED_LOCATION_RE = re.compile(
    r"\b(?:job\s+|work\s+)?location\s*[:\-]\s*([A-Za-z][A-Za-z\s,./()-]{2,100})\b",
    re.IGNORECASE,
)
_CITY_STATE_RE = re.compile(
    r"\b([A-Z][a-z]+(?:\s[A-Z][a-z]+)*,\s(?:[A-Z]{2}|"
    + "|".join(name.replace(" ", r"\s") for name in US_STATE_NAMES)
    + r"))\b"
)
_CITY_COUNTRY_RE = re.compile(
    r"\b([A-Z][a-z]+(?:\s[A-Z][a-z]+)*,\s*[A-Z][a-z]+(?:\s[A-Z][a-z]+)*)\b"
)


# -----------------------------------------------------------------------------
# Generic Cleaning
# -----------------------------------------------------------------------------
def clean_text(value: Optional[str]) -> str:
    """
    Convert HTML or text to a single line of plain text.

    Removes script/style/noscript blocks and tags, decodes the common
    entities and collapses whitespace runs to single spaces.

    Args:
        value: Raw HTML or text. None is treated as empty.

    Returns:
        Cleaned text, possibly empty.
    """
    if not value:
        return ""

    text = _BLOCK_RE.sub(" ", str(value))
    text = _TAG_RE.sub(" ", text)
    text = _STRAY_BRACKET_RE.sub(" ", text)
    text = _ENTITY_RE.sub(lambda m: _ENTITIES[m.group().lower()], text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_lines(value: Optional[str]) -> str:
    """
    Convert HTML or text to plain text, keeping one line per block.

    Line breaks, paragraphs, list items, headings and divs end a line so
    the boilerplate filter can later drop lines individually.
    """
    if not value:
        return ""

    text = _BLOCK_RE.sub(" ", str(value))
    text = _BLOCK_END_RE.sub("\n", text)
    lines = (clean_text(line) for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def truncate(text: str, max_length: int) -> str:
    """
    Cap text at max_length characters.

    Text within the bound is returned unchanged. Longer text is cut and
    ends with an ellipsis, the whole result staying within the bound.

    Args:
        text: Text to bound.
        max_length: Maximum length of the result.

    Returns:
        The bounded text.
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - 1].rstrip() + ELLIPSIS


def smart_trim(value: Optional[str], max_length: int = 120) -> str:
    """Clean a value and bound it to max_length characters."""
    return truncate(clean_text(value), max_length)


def strip_noise(text: Optional[str]) -> str:
    """
    Drop boilerplate lines and clean what remains.

    The text is split on newlines and any line mentioning a boilerplate
    phrase (privacy, cookies, sign in, social sharing...) is discarded.

    Args:
        text: Multi-line text, usually taken from a page region.

    Returns:
        Cleaned single-line text without the boilerplate lines.
    """
    if not text:
        return ""

    lines = (line.strip() for line in re.split(r"\n+", str(text)))
    kept = [line for line in lines if line and not _NOISE_RE.search(line)]
    return clean_text("\n".join(kept))


def cut_at_apply_markers(text: str) -> str:
    """Return the text that precedes the first apply-form marker."""
    return _APPLY_MARKER_RE.split(text, maxsplit=1)[0].strip()


# -----------------------------------------------------------------------------
# Role
# -----------------------------------------------------------------------------
def normalize_role(value: Optional[str]) -> str:
    """
    Normalize a job title candidate.

    Strips careers-page chrome ("apply now", "careers", "jobs") and keeps
    the first segment of a "Title | Company" or "Title - Team" heading.

    Args:
        value: Raw title text.

    Returns:
        Title bounded to 80 characters, or an empty string.
    """
    raw = clean_text(value)
    if not raw:
        return ""

    stripped = _WHITESPACE_RE.sub(" ", _ROLE_CHROME_RE.sub("", raw)).strip()
    parts = [p.strip() for p in _ROLE_SEPARATOR_RE.split(stripped) if p.strip()]
    candidate = (parts[0] if parts else stripped).strip(" |@-")
    return smart_trim(candidate, ROLE_MAX_LENGTH)


# -----------------------------------------------------------------------------
# Company
# -----------------------------------------------------------------------------
def is_non_company_host(link: str) -> bool:
    """Check whether a link points at a blog or listing aggregator."""
    try:
        host = (urlparse(link).hostname or "").lower()
    except ValueError:
        return False
    return bool(_NON_COMPANY_HOST_RE.search(host))


def company_from_host(link: str) -> str:
    """
    Derive a company name candidate from a link's hostname.

    "https://www.acme-labs.com/jobs/1" gives "acme labs". Leading labels
    such as "www" or "careers" are skipped while at least two labels
    remain. Blog and aggregator hosts never yield a name.

    Args:
        link: URL of the listing.

    Returns:
        Raw company candidate, or an empty string.
    """
    if not link or is_non_company_host(link):
        return ""

    try:
        host = (urlparse(link).hostname or "").lower()
    except ValueError:
        return ""

    labels = [label for label in host.split(".") if label]
    while len(labels) > 2 and labels[0] in GENERIC_HOST_LABELS:
        labels = labels[1:]
    if not labels:
        return ""

    return re.sub(r"[-_]", " ", labels[0])


def normalize_company(value: Optional[str], link: str = "") -> str:
    """
    Normalize a company name candidate.

    Falls back to the link's hostname when no text candidate is given,
    strips "careers"/"jobs"/"hiring" words and title-cases names that
    arrive entirely in lower case.

    Args:
        value: Raw company text.
        link: Listing URL used for the hostname fallback.

    Returns:
        Company name bounded to 60 characters, or an empty string.
    """
    candidate = clean_text(value)
    if not candidate and link:
        candidate = company_from_host(link)

    candidate = _WHITESPACE_RE.sub(" ", _COMPANY_CHROME_RE.sub("", candidate)).strip()

    if candidate and candidate == candidate.lower():
        candidate = re.sub(r"\b\w", lambda m: m.group().upper(), candidate)

    return smart_trim(candidate, COMPANY_MAX_LENGTH)


# -----------------------------------------------------------------------------
# Location
# -----------------------------------------------------------------------------
def normalize_location(value: Optional[str]) -> str:
    """
    Normalize a location candidate.

    Removes "Location:" labels and anything trailing from salary,
    qualification or apply boilerplate, keeps the first bullet or pipe
    separated segment and discards text that is really a job title.

    Args:
        value: Raw location text.

    Returns:
        Location bounded to 60 characters, or an empty string.
    """
    text = clean_text(value)
    if not text:
        return ""

    text = _LOCATION_LABEL_RE.sub("", text)
    text = _LOCATION_TRAILER_RE.sub("", text)
    text = _LOCATION_PIPE_TAIL_RE.sub("", text)
    text = _LOCATION_COUNTRY_TAIL_RE.sub(lambda m: f", {m.group(1)}", text).strip()

    concise = _LOCATION_SPLIT_RE.split(text)[0].strip().strip(",").strip()

    looks_like_role = (
        bool(_ROLE_WORD_RE.search(concise))
        and not _WORK_MODE_RE.search(concise)
        and "," not in concise
    )
    if looks_like_role:
        return ""

    return smart_trim(concise, LOCATION_MAX_LENGTH)


def is_likely_location(value: Optional[str]) -> bool:
    """
    Check whether text reads as a location.

    Text qualifies when, after normalization, it names a work mode, has a
    comma or mentions a known city or region.
    """
    text = normalize_location(value)
    if not text:
        return False
    return bool(
        _WORK_MODE_RE.search(text) or "," in text or _KNOWN_PLACE_RE.search(text)
    )


def extract_location_from_body(body_text: Optional[str]) -> str:
    """
    Find a location in free page text.

    Tries, in order: an explicit "Location: ..." label, a bare work-mode
    keyword, a "City, State" pair using the US state list or a two-letter
    code, and a "City, Country" pair of capitalized words.

    Args:
        body_text: Page text.

    Returns:
        Normalized location, or an empty string.
    """
    text = clean_text(body_text)
    if not text:
        return ""

    labeled = _LABELED_LOCATION_RE.search(text)
    if labeled:
        location = normalize_location(labeled.group(1))
        if location:
            return location

    work_mode = _WORK_MODE_RE.search(text)
    if work_mode:
        return work_mode.group(1)

    city_state = _CITY_STATE_RE.search(text)
    if city_state:
        return smart_trim(city_state.group(1), LOCATION_MAX_LENGTH)

    city_country = _CITY_COUNTRY_RE.search(text)
    if city_country:
        return normalize_location(city_country.group(1))

    return ""


def suggest_locations(query: Optional[str], limit: int = 8) -> list[str]:
    """
    Suggest location names matching a partial query.

    Args:
        query: Partial location typed by the user.
        limit: Maximum number of suggestions.

    Returns:
        Matching US states (and "Remote"), in list order.
    """
    needle = clean_text(query).lower()
    if not needle:
        return []
    return [name for name in LOCATION_SUGGESTIONS if needle in name.lower()][:limit]
