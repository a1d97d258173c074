# =============================================================================
# Skill Matching
# =============================================================================
"""
Match the fixed skill vocabularies against free text.

Matching is case-insensitive and respects word boundaries, so "react"
matches React but "Reactivity" does not. Symbol-bearing terms such as
"C++" and "CI/CD" are bounded by lookarounds instead of \\b.
"""

import re
from typing import Iterable

from jobpilot.services.extraction.vocabulary import (
    ANALYSIS_SKILL_LIMIT,
    ANALYSIS_SKILLS,
    JOB_SKILL_LIMIT,
    JOB_SKILLS,
)


def _term_pattern(term: str) -> str:
    """Build a word-bounded pattern for a vocabulary term."""
    return rf"(?<!\w){re.escape(term)}(?!\w)"


_JOB_SKILL_RE = re.compile(
    "|".join(f"({_term_pattern(term)})" for term in JOB_SKILLS), re.IGNORECASE
)
_CANONICAL_JOB_SKILLS = {term.lower(): term for term in JOB_SKILLS}

_ANALYSIS_SKILL_RES = tuple(
    (term, re.compile(_term_pattern(term), re.IGNORECASE)) for term in ANALYSIS_SKILLS
)


def merge_skills(*groups: Iterable[str], limit: int = JOB_SKILL_LIMIT) -> list[str]:
    """
    Merge skill lists, dropping case-insensitive duplicates.

    Args:
        groups: Skill lists in priority order.
        limit: Maximum number of skills to keep.

    Returns:
        Merged list keeping the first spelling seen for each skill.
    """
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for skill in group:
            key = skill.strip().lower()
            if key and key not in seen:
                seen.add(key)
                merged.append(skill.strip())
    return merged[:limit]


def extract_skills(text: str, limit: int = JOB_SKILL_LIMIT) -> list[str]:
    """
    Find job vocabulary skills in text.

    Args:
        text: Description or other free text.
        limit: Maximum number of skills to return.

    Returns:
        Canonically spelled skills in order of first appearance.
    """
    if not text:
        return []

    found = (
        _CANONICAL_JOB_SKILLS[match.group().lower()]
        for match in _JOB_SKILL_RE.finditer(text)
    )
    return merge_skills(found, limit=limit)


def extract_analysis_skills(text: str, limit: int = ANALYSIS_SKILL_LIMIT) -> list[str]:
    """
    Find analysis vocabulary skills in text.

    Args:
        text: Resume or job description text.
        limit: Maximum number of skills to return.

    Returns:
        Lower-case skills in vocabulary order.
    """
    if not text:
        return []
    return [term for term, pattern in _ANALYSIS_SKILL_RES if pattern.search(text)][:limit]
