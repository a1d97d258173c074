# =============================================================================
# Extraction Models
# =============================================================================
"""
Pydantic models for job extraction requests and responses.

Field names are snake_case in Python and camelCase on the wire
("jobLink", "companyName", "needsReview") to match the web client.

Usage:
    from jobpilot.models.extraction import ExtractFromLinkRequest, ExtractionResponse

    request = ExtractFromLinkRequest(jobLink="https://jobs.lever.co/acme/123")
    response = ExtractionResponse.from_result(result)
"""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from pydantic.alias_generators import to_camel

from jobpilot.services.extraction.service import ExtractionResult


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases while accepting snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Requests
# =============================================================================


class ExtractFromLinkRequest(CamelModel):
    """
    Request payload for link extraction.

    Attributes:
        job_link: URL of the job listing.

    Example:
        ExtractFromLinkRequest(jobLink="https://boards.greenhouse.io/acme/jobs/1")
    """

    job_link: HttpUrl = Field(
        description="URL of the job listing to extract"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"jobLink": "https://boards.greenhouse.io/acme/jobs/4012345"}
            ]
        }
    )


# =============================================================================
# Responses
# =============================================================================


class ExtractionResponse(CamelModel):
    """
    Extracted job fields returned to the client.

    Attributes:
        role: Job title.
        company_name: Hiring company.
        location: Job location or work mode.
        description: Job description.
        skills: Skill tags.
        required_skills: Same tags, under the name the job form uses.
        source: "<platform>:<fetch method>".
        confidence: Completeness score from 0 to 100.
        needs_review: Whether the fields should be checked before saving.
    """

    role: str = Field(default="", description="Job title")
    company_name: str = Field(default="", description="Hiring company")
    location: str = Field(default="", description="Job location or work mode")
    description: str = Field(default="", description="Job description")
    skills: list[str] = Field(default_factory=list, description="Skill tags")
    required_skills: list[str] = Field(
        default_factory=list,
        description="Skill tags for the job form"
    )
    source: str = Field(description="Platform and fetch method")
    confidence: int = Field(ge=0, le=100, description="Extraction confidence")
    needs_review: bool = Field(description="Whether a person should review the fields")

    @classmethod
    def from_result(cls, result: ExtractionResult) -> "ExtractionResponse":
        """Build a response from an extraction result."""
        return cls(
            role=result.role,
            company_name=result.company_name,
            location=result.location,
            description=result.description,
            skills=result.skills,
            required_skills=list(result.skills),
            source=result.source,
            confidence=result.confidence,
            needs_review=result.needs_review,
        )


class DescriptionFromLinkResponse(CamelModel):
    """
    Description fetched from a job link for resume analysis.

    Attributes:
        description: Description text.
        skills: Analysis skills found in the description.
        extracted_from_link: Always true; lets the client tell fetched
            text from pasted text.
    """

    description: str = Field(description="Job description text")
    skills: list[str] = Field(default_factory=list, description="Analysis skills")
    extracted_from_link: bool = Field(
        default=True,
        description="Whether the description was fetched from the link"
    )


class LocationSuggestionResponse(BaseModel):
    """
    Location suggestions for a partial query.

    Attributes:
        data: Matching location names.
    """

    data: list[str] = Field(default_factory=list, description="Suggested locations")


class ErrorResponse(BaseModel):
    """
    Error payload returned when extraction fails.

    Attributes:
        message: Human-readable message.
        error: Underlying error text for diagnostics.
    """

    message: str = Field(description="Human-readable error message")
    error: str = Field(default="", description="Underlying error text")
