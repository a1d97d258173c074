# =============================================================================
# JSON-LD Structured Data
# =============================================================================
"""
Extract schema.org JobPosting data embedded in a page.

Pages often ship one or more <script type="application/ld+json"> blocks.
Each block is parsed independently; a malformed or absurdly deep block is
skipped rather than failing the extraction. Skill entries longer than a
short tag are dropped. The parsed value tree is walked recursively
and every object whose @type mentions "JobPosting" contributes fields,
the first non-empty value per field winning.
"""

import html
import json
import logging
from dataclasses import dataclass, field
from typing import Any

from bs4 import BeautifulSoup

from jobpilot.services.extraction.text import clean_lines, clean_text
from jobpilot.services.extraction.vocabulary import STRUCTURED_SKILL_LIMIT


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
SKILL_MAX_LENGTH = 60  # longer entries are prose, not skill tags


# -----------------------------------------------------------------------------
# Structured Job Data
# -----------------------------------------------------------------------------
@dataclass
class StructuredJobData:
    """
    Job fields recovered from JSON-LD.

    Attributes:
        role: JobPosting title.
        company_name: Hiring organization name.
        location: "Locality, Region, Country" or the job location type.
        description: Description as plain text, one line per block.
        skills: Deduplicated skills and qualifications.
    """

    role: str = ""
    company_name: str = ""
    location: str = ""
    description: str = ""
    skills: list[str] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Value Helpers
# -----------------------------------------------------------------------------
def _name_of(value: Any) -> str:
    """Read a name from a string or an object with a "name" key."""
    if isinstance(value, dict):
        value = value.get("name")
    return clean_text(value) if isinstance(value, str) else ""


def _address_of(job_location: Any) -> dict[str, Any]:
    """Find the first postal address in a jobLocation value."""
    locations = job_location if isinstance(job_location, list) else [job_location]
    for location in locations:
        if isinstance(location, dict) and isinstance(location.get("address"), dict):
            return location["address"]
    return {}


def _location_of(node: dict[str, Any]) -> str:
    """Build a location string from a JobPosting node."""
    address = _address_of(node.get("jobLocation"))
    parts = [
        _name_of(address.get("addressLocality")),
        _name_of(address.get("addressRegion")),
        _name_of(address.get("addressCountry")),
    ]
    location = ", ".join(p for p in parts if p)
    if location:
        return location

    location_type = node.get("jobLocationType")
    if isinstance(location_type, list):
        location_type = " ".join(str(t) for t in location_type)
    return clean_text(location_type) if isinstance(location_type, str) else ""


def _flatten(value: Any) -> list[str]:
    """Flatten nested skill values to cleaned, tag-sized strings."""
    if isinstance(value, list):
        return [item for child in value for item in _flatten(child)]
    if isinstance(value, dict):
        return _flatten(value.get("name"))
    if isinstance(value, str):
        cleaned = clean_text(value)
        return [cleaned] if cleaned and len(cleaned) <= SKILL_MAX_LENGTH else []
    return []


def _is_job_posting(node: dict[str, Any]) -> bool:
    """Check whether an object's @type mentions JobPosting."""
    node_type = node.get("@type", "")
    if isinstance(node_type, list):
        node_type = " ".join(str(t) for t in node_type)
    return "jobposting" in str(node_type).lower()


# -----------------------------------------------------------------------------
# Parser
# -----------------------------------------------------------------------------
def _visit(node: Any, data: StructuredJobData, skills: list[str]) -> None:
    """Walk a JSON-LD value tree, filling empty fields from JobPostings."""
    if isinstance(node, list):
        for child in node:
            _visit(child, data, skills)
        return
    if not isinstance(node, dict):
        return

    if _is_job_posting(node):
        title = node.get("title")
        data.role = data.role or (clean_text(title) if isinstance(title, str) else "")
        data.company_name = data.company_name or _name_of(
            node.get("hiringOrganization")
        ) or _name_of(node.get("organization"))
        data.location = data.location or _location_of(node)
        description = node.get("description")
        if not data.description and isinstance(description, str):
            data.description = clean_lines(html.unescape(description))
        skills.extend(_flatten(node.get("skills")))
        skills.extend(_flatten(node.get("qualifications")))

    for child in node.values():
        _visit(child, data, skills)


def parse_json_ld(soup: BeautifulSoup) -> StructuredJobData:
    """
    Extract JobPosting fields from every JSON-LD block in a page.

    Args:
        soup: Parsed page.

    Returns:
        StructuredJobData with empty strings for fields not found.
    """
    data = StructuredJobData()
    skills: list[str] = []

    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.string or ""
        if not raw.strip():
            continue
        try:
            # strict=False tolerates raw newlines inside description strings
            payload = json.loads(raw, strict=False)
            _visit(payload, data, skills)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Skipping malformed JSON-LD block: {e}")

    seen: set[str] = set()
    for skill in skills:
        if skill not in seen:
            seen.add(skill)
            data.skills.append(skill)
    data.skills = data.skills[:STRUCTURED_SKILL_LIMIT]

    return data
