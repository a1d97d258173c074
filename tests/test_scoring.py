# =============================================================================
# Confidence Scoring Tests
# =============================================================================
"""
Unit tests for the confidence heuristic and review flag.
"""

import pytest

from jobpilot.services.extraction.scoring import needs_review, score_confidence


LONG_DESCRIPTION = "Build reliable services for our customers. " * 12
SKILLS = ["Python", "Docker", "AWS"]


class TestScoreConfidence:
    """Tests for score_confidence."""

    def test_all_signals(self) -> None:
        """Test that every signal present scores exactly 100."""
        assert score_confidence("Engineer", "Acme", "Austin, TX", LONG_DESCRIPTION, SKILLS) == 100

    def test_role_only(self) -> None:
        """Test that a role alone scores 25."""
        assert score_confidence("Engineer", "", "", "", []) == 25

    def test_role_and_company(self) -> None:
        """Test that role and company score 45."""
        assert score_confidence("Engineer", "Acme", "", "", []) == 45

    def test_short_description_not_counted(self) -> None:
        """Test that a description of 400 characters or fewer adds nothing."""
        assert score_confidence("", "", "", "x" * 400, []) == 0
        assert score_confidence("", "", "", "x" * 401, []) == 25

    def test_two_skills_not_counted(self) -> None:
        """Test that fewer than three skills add nothing."""
        assert score_confidence("", "", "", "", ["Python", "AWS"]) == 0


class TestNeedsReview:
    """Tests for needs_review."""

    @pytest.mark.parametrize(
        "confidence, expected",
        [(0, True), (69, True), (70, False), (100, False)],
    )
    def test_threshold(self, confidence: int, expected: bool) -> None:
        """Test that review is needed strictly below 70."""
        assert needs_review(confidence) is expected

    def test_custom_threshold(self) -> None:
        """Test a configured threshold."""
        assert needs_review(75, threshold=80) is True
