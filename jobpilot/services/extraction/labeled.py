# =============================================================================
# Labeled Free-Text Fields
# =============================================================================
"""
Recover fields from plain-text job blasts.

Newsletter-style listings and job blogs rarely carry useful markup; they
spell the fields out instead ("Company: Acme Role: Backend Engineer
Degree: ... Location: Pune Job Description: ..."). These patterns run over
the whole page text and are tried before markup heuristics by the generic
extractor.
"""

import re
from dataclasses import dataclass
from typing import Optional

from jobpilot.services.extraction.text import (
    clean_text,
    normalize_company,
    normalize_location,
    normalize_role,
    smart_trim,
    strip_noise,
)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
LABELED_DESCRIPTION_MAX_LENGTH = 5000

_COMPANY_PATTERNS = (
    re.compile(
        r"Company\s*:\s*([A-Za-z0-9&.,\-\s]{2,80}?)"
        r"(?:\s+Role\s*:|\s+Degree\s*:|\s+Batches\s*:|\s+Experience\s*:)",
        re.IGNORECASE,
    ),
    re.compile(r"\b([A-Za-z][A-Za-z0-9&.\-\s]{1,60})\s+Recruitment\s+For\b", re.IGNORECASE),
    re.compile(r"\b([A-Za-z][A-Za-z0-9&.\-\s]{1,60})\s+is hiring\b", re.IGNORECASE),
)
_ROLE_PATTERNS = (
    re.compile(r"Role\s*:\s*(.+?)\s+Degree\s*:", re.IGNORECASE),
    re.compile(r"Hiring\s+For\s+(.+?)\s+\d{1,2}/\d{1,2}/\d{4}", re.IGNORECASE),
)
_LOCATION_PATTERN = re.compile(
    r"Location\s*:\s*([A-Za-z0-9,\-\s]{2,80}?)"
    r"(?:\s+Job Description|\s+Qualifications|\s+Roles and Responsibilities"
    r"|\s+How To Apply|\s+Salary|\s+Experience)",
    re.IGNORECASE,
)
_QUALIFICATIONS_PATTERN = re.compile(
    r"Qualifications(?:\s*&\s*Skills)?\s*:\s*(.+?)\s+Roles and Responsibilities\s*:",
    re.IGNORECASE,
)
_RESPONSIBILITIES_PATTERN = re.compile(
    r"Roles and Responsibilities\s*:\s*(.+?)\s+How To Apply", re.IGNORECASE
)
_DESCRIPTION_PATTERN = re.compile(
    r"Job Description\s*:\s*(.+?)\s+Qualifications(?:\s*&\s*Skills)?\s*:",
    re.IGNORECASE,
)


@dataclass
class LabeledFields:
    """Fields recovered from "Label: value" page text."""

    role: str = ""
    company_name: str = ""
    location: str = ""
    description: str = ""


def _first_group(patterns: tuple[re.Pattern, ...], text: str) -> str:
    """Return the first capture of the first matching pattern."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return ""


def parse_labeled_fields(body_text: Optional[str]) -> LabeledFields:
    """
    Parse "Label: value" fields out of page text.

    The description combines the job description, qualifications and
    responsibilities sections when present.

    Args:
        body_text: Full page text.

    Returns:
        LabeledFields with empty strings for labels not found.
    """
    text = clean_text(body_text)
    if not text:
        return LabeledFields()

    parts = (
        _first_group((_DESCRIPTION_PATTERN,), text),
        _first_group((_QUALIFICATIONS_PATTERN,), text),
        _first_group((_RESPONSIBILITIES_PATTERN,), text),
    )
    combined = "\n".join(p for p in (strip_noise(part) for part in parts) if p)

    return LabeledFields(
        role=normalize_role(_first_group(_ROLE_PATTERNS, text)),
        company_name=normalize_company(_first_group(_COMPANY_PATTERNS, text)),
        location=normalize_location(_first_group((_LOCATION_PATTERN,), text)),
        description=smart_trim(combined, LABELED_DESCRIPTION_MAX_LENGTH),
    )
