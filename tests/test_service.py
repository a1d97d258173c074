# =============================================================================
# Job Extraction Service Tests
# =============================================================================
"""
End-to-end tests for JobExtractionService over a mocked network.

These tests verify that the service correctly:
- Combines fetching, source detection, parsing and scoring
- Labels results with platform and fetch method
- Applies the labeled description override for generic pages
- Surfaces fetch and parse failures as extraction errors
"""

import json

import httpx
import pytest

from jobpilot.config import Settings
from jobpilot.services.extraction import (
    FetchError,
    JobExtractionService,
    ParseError,
)
from jobpilot.services.extraction.sources import JobSource
from tests.conftest import html_response, padding_style, text_response


def _service(make_fetcher, settings: Settings, handler) -> JobExtractionService:
    """Build a service on a mocked fetcher."""
    return JobExtractionService(fetcher=make_fetcher(handler), settings=settings)


class TestExtract:
    """Tests for JobExtractionService.extract."""

    @pytest.mark.asyncio
    async def test_json_ld_page(self, make_fetcher, settings, json_ld_html) -> None:
        """Test a generic page with a JobPosting block."""
        service = _service(make_fetcher, settings, lambda r: html_response(json_ld_html))

        result = await service.extract("https://careers.acme.com/jobs/backend-engineer")

        assert result.role == "Backend Engineer"
        assert result.company_name == "Acme"
        assert result.location == "Austin, TX"
        assert result.confidence >= 85
        assert result.needs_review is False
        assert result.source == "generic:direct"

    @pytest.mark.asyncio
    async def test_greenhouse_page(self, make_fetcher, settings, greenhouse_html) -> None:
        """Test a Greenhouse board page."""
        service = _service(make_fetcher, settings, lambda r: html_response(greenhouse_html))

        result = await service.extract("https://boards.greenhouse.io/acme/jobs/4012345")

        assert result.source == "greenhouse:direct"
        assert result.role == "Backend Engineer"
        assert result.company_name == "Acme"
        assert result.location == "Austin, TX"
        # Short description and two skills
        assert result.confidence == 60
        assert result.needs_review is True

    @pytest.mark.asyncio
    async def test_proxy_text_page(self, make_fetcher, settings) -> None:
        """Test extraction from readability proxy text."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "r.jina.ai":
                return text_response("Title: Site Reliability Engineer\n\nRemote role.")
            return html_response("<html></html>")

        service = _service(make_fetcher, settings, handler)

        result = await service.extract("https://jobs.lever.co/initech/abc-123")

        assert result.source == "lever:proxy-fallback"
        assert result.company_name == "Initech"
        assert result.needs_review is True

    @pytest.mark.asyncio
    async def test_last_resort_role_and_company(self, make_fetcher, settings) -> None:
        """Test the URL and hostname fallbacks."""
        html = f"<html><head>{padding_style()}</head><body><p>Apply today.</p></body></html>"
        service = _service(make_fetcher, settings, lambda r: html_response(html))

        result = await service.extract("https://www.globex.com/openings/ml-engineer-42")

        assert result.role == "ml engineer"
        assert result.company_name == "Globex"
        assert result.confidence == 45

    @pytest.mark.asyncio
    async def test_labeled_description_override(self, make_fetcher, settings) -> None:
        """Test that a long labeled description replaces the generic one."""
        blast = (
            "Company: Acme Corp Role: Software Engineer Degree: B.Tech "
            "Location: Pune Job Description: Build and maintain Python services "
            "that process payments for thousands of merchants every day. "
            "Qualifications: Solid SQL and Docker fundamentals with a habit of "
            "writing tests. Roles and Responsibilities: Review pull requests, "
            "pair with teammates and keep the AWS deployment healthy. "
            "How To Apply: use the link below."
        )
        html = (
            f"<html><head>{padding_style()}</head><body>"
            f"<div class='post'><p>{blast}</p></div></body></html>"
        )
        service = _service(make_fetcher, settings, lambda r: html_response(html))

        result = await service.extract("https://offcampusjobs.example.com/acme-hiring")

        assert result.company_name == "Acme Corp"
        assert result.role == "Software Engineer"
        assert result.location == "Pune"
        assert result.description.startswith("Build and maintain Python services")
        assert "How To Apply" not in result.description
        assert result.skills == ["Python", "SQL", "Docker", "AWS"]

    @pytest.mark.asyncio
    async def test_overly_deep_json_ld_skipped(self, make_fetcher, settings) -> None:
        """Test that an unparseable structured-data block does not fail extraction."""
        deep = "[" * 5000 + "]" * 5000
        html = (
            f'<html><head><script type="application/ld+json">{deep}</script></head>'
            "<body><h1>Backend Engineer</h1></body></html>"
        )
        service = _service(make_fetcher, settings, lambda r: html_response(html))

        result = await service.extract("https://careers.acme.com/jobs/1")

        assert result.role == "Backend Engineer"
        assert result.source == "generic:direct"

    @pytest.mark.asyncio
    async def test_prose_qualifications_not_skills(self, make_fetcher, settings) -> None:
        """Test that every extracted skill is a short tag."""
        posting = {
            "@type": "JobPosting",
            "title": "Backend Engineer",
            "skills": ["Python"],
            "qualifications": "Bachelor's degree and " + "deep experience " * 200,
        }
        html = (
            f"<html><head>{padding_style()}"
            f'<script type="application/ld+json">{json.dumps(posting)}</script>'
            "</head><body><p>Python and Docker.</p></body></html>"
        )
        service = _service(make_fetcher, settings, lambda r: html_response(html))

        result = await service.extract("https://careers.acme.com/jobs/1")

        assert "Python" in result.skills
        assert all(len(skill) <= 60 for skill in result.skills)

    @pytest.mark.asyncio
    async def test_fetch_failure(self, make_fetcher, settings) -> None:
        """Test that a failed fetch raises instead of returning fields."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        service = _service(make_fetcher, settings, handler)

        with pytest.raises(FetchError):
            await service.extract("https://acme.com/jobs/1")

    @pytest.mark.asyncio
    async def test_parser_failure(self, make_fetcher, settings, json_ld_html) -> None:
        """Test that an unexpected parser error becomes a ParseError."""

        class BrokenParser:
            source_name = JobSource.GENERIC

            def parse(self, page):
                raise RuntimeError("selector exploded")

        service = _service(make_fetcher, settings, lambda r: html_response(json_ld_html))
        service.parsers[JobSource.GENERIC] = BrokenParser()

        with pytest.raises(ParseError, match="selector exploded"):
            await service.extract("https://acme.com/jobs/1")


class TestServiceSettings:
    """Tests for settings wiring."""

    def test_thresholds_from_settings(self, make_fetcher) -> None:
        """Test that thresholds are read from settings."""
        settings = Settings(
            _env_file=None, structured_description_min_length=300, review_threshold=80
        )

        service = _service(make_fetcher, settings, lambda r: html_response(""))

        assert service.structured_description_min_length == 300
        assert service.review_threshold == 80

    @pytest.mark.asyncio
    async def test_owned_fetcher_closed(self, settings) -> None:
        """Test that a service-built fetcher is closed on exit."""
        async with JobExtractionService(settings=settings) as service:
            client = service.fetcher.http_client

        assert client.is_closed
