# =============================================================================
# Labeled Free-Text Field Tests
# =============================================================================
"""
Unit tests for "Label: value" field recovery from job blast text.
"""

from jobpilot.services.extraction.labeled import parse_labeled_fields


JOB_BLAST = (
    "Company: Acme Corp Role: Software Engineer Degree: B.E / B.Tech "
    "Batches: 2024 Location: Pune Job Description: Build and maintain REST "
    "services for the billing platform. Qualifications: Solid Java and SQL "
    "fundamentals. Roles and Responsibilities: Write clean code and review "
    "pull requests with the team. How To Apply: use the form below."
)


class TestParseLabeledFields:
    """Tests for parse_labeled_fields."""

    def test_fields(self) -> None:
        """Test that each labeled field is recovered."""
        fields = parse_labeled_fields(JOB_BLAST)

        assert fields.company_name == "Acme Corp"
        assert fields.role == "Software Engineer"
        assert fields.location == "Pune"

    def test_description_combines_sections(self) -> None:
        """Test that description, qualifications and responsibilities are joined."""
        description = parse_labeled_fields(JOB_BLAST).description

        assert description == (
            "Build and maintain REST services for the billing platform. "
            "Solid Java and SQL fundamentals. "
            "Write clean code and review pull requests with the team."
        )

    def test_is_hiring_company(self) -> None:
        """Test the "X is hiring" company pattern."""
        fields = parse_labeled_fields("Globex is hiring for a data role")

        assert fields.company_name == "Globex"

    def test_hiring_for_role(self) -> None:
        """Test the "Hiring For <role> <date>" pattern."""
        fields = parse_labeled_fields("Hiring For Cloud Support Associate 12/05/2024 apply soon")

        assert fields.role == "Cloud Support Associate"

    def test_plain_text_has_no_fields(self) -> None:
        """Test that unlabeled text yields empty fields."""
        fields = parse_labeled_fields("We build tools for clinics.")

        assert fields.company_name == ""
        assert fields.role == ""
        assert fields.location == ""
        assert fields.description == ""

    def test_empty(self) -> None:
        """Test that missing text yields empty fields."""
        assert parse_labeled_fields(None).description == ""
