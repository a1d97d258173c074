# =============================================================================
# Description Selection
# =============================================================================
"""
Choose and tidy a job description among several page regions.

A listing page offers many candidate regions (meta description, JSON-LD,
<main>, <article>, description-like blocks, the whole body). Each is
noise-filtered and scored by length plus a bonus for every description
keyword it contains; the best scoring region wins.
"""

import re
from typing import Iterable, Optional

from jobpilot.services.extraction.text import (
    cut_at_apply_markers,
    smart_trim,
    strip_noise,
)
from jobpilot.services.extraction.vocabulary import DESCRIPTION_SIGNALS


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
LINK_KEYWORD_WEIGHT = 220
ANALYSIS_KEYWORD_WEIGHT = 200
DESCRIPTION_MAX_LENGTH = 2200

_SIGNAL_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(s) for s in DESCRIPTION_SIGNALS) + r")",
    re.IGNORECASE,
)
_CHROME_RE = re.compile(
    r"\b(back to jobs|apply now|apply here|click here|share this)\b", re.IGNORECASE
)
_SECTION_START_RE = re.compile(
    r"\b(Job Description|Responsibilities|What you will do|What you['’]ll do"
    r"|Required Skills|Qualifications)\b[\s\S]*",
    re.IGNORECASE,
)


# -----------------------------------------------------------------------------
# Scoring
# -----------------------------------------------------------------------------
def score_description(text: str, keyword_weight: int = LINK_KEYWORD_WEIGHT) -> int:
    """Score cleaned text by length plus a bonus per description keyword."""
    return len(text) + keyword_weight * len(_SIGNAL_RE.findall(text))


def pick_best_description(
    candidates: Iterable[Optional[str]],
    keyword_weight: int = LINK_KEYWORD_WEIGHT,
) -> str:
    """
    Pick the most description-like candidate.

    Args:
        candidates: Raw region texts; empty or None entries are ignored.
        keyword_weight: Bonus added per description keyword hit.

    Returns:
        The best candidate after noise filtering, or an empty string.
    """
    best, best_score = "", -1
    for candidate in candidates:
        text = strip_noise(candidate)
        if not text:
            continue
        score = score_description(text, keyword_weight)
        if score > best_score:
            best, best_score = text, score
    return best


# -----------------------------------------------------------------------------
# Tidying
# -----------------------------------------------------------------------------
def compact_description(text: Optional[str], max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    """
    Remove boilerplate and page chrome, then bound the description.

    Args:
        text: Description text.
        max_length: Maximum length of the result.

    Returns:
        Compacted description.
    """
    cleaned = _CHROME_RE.sub("", strip_noise(text))
    return smart_trim(cleaned, max_length)


def bounded_description(text: Optional[str]) -> str:
    """
    Keep the job description proper out of a larger region.

    Starts at the first section heading such as "Responsibilities" or
    "Job Description" when present and stops before the application form.

    Args:
        text: Region text, newlines preserved.

    Returns:
        Bounded, noise-filtered description.
    """
    cleaned = strip_noise(text)
    if not cleaned:
        return ""

    start = _SECTION_START_RE.search(cleaned)
    return cut_at_apply_markers(start.group() if start else cleaned)
