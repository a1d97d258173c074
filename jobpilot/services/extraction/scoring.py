# =============================================================================
# Extraction Confidence
# =============================================================================
"""
Additive confidence heuristic for extracted job fields.

The score measures how complete an extraction is, not whether it is
correct: each populated field adds a fixed weight and the total is capped
at 100. Results below the review threshold should be checked by a person
before they are stored.
"""

from typing import Sequence

ROLE_WEIGHT = 25
COMPANY_WEIGHT = 20
LOCATION_WEIGHT = 15
DESCRIPTION_WEIGHT = 25
SKILLS_WEIGHT = 15

MIN_DESCRIPTION_LENGTH = 400  # description must be longer than this
MIN_SKILL_COUNT = 3
REVIEW_THRESHOLD = 70


def score_confidence(
    role: str,
    company_name: str,
    location: str,
    description: str,
    skills: Sequence[str],
) -> int:
    """
    Score the completeness of an extraction from 0 to 100.

    Args:
        role: Extracted job title.
        company_name: Extracted company name.
        location: Extracted location.
        description: Extracted description.
        skills: Extracted skills.

    Returns:
        Confidence score.
    """
    score = 0
    if role:
        score += ROLE_WEIGHT
    if company_name:
        score += COMPANY_WEIGHT
    if location:
        score += LOCATION_WEIGHT
    if description and len(description) > MIN_DESCRIPTION_LENGTH:
        score += DESCRIPTION_WEIGHT
    if len(skills) >= MIN_SKILL_COUNT:
        score += SKILLS_WEIGHT
    return min(score, 100)


def needs_review(confidence: int, threshold: int = REVIEW_THRESHOLD) -> bool:
    """Check whether a confidence score is too low to trust unreviewed."""
    return confidence < threshold
