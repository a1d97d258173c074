# =============================================================================
# Shared Test Fixtures
# =============================================================================
"""
Fixtures shared by the extraction engine and API tests.

HTTP is never hit for real: fetchers are built on httpx.MockTransport with
a handler that maps request URLs to canned responses.
"""

import json
from typing import Callable

import httpx
import pytest
from bs4 import BeautifulSoup

from jobpilot.config import Settings
from jobpilot.services.extraction.fetcher import PageFetcher
from jobpilot.services.extraction.labeled import parse_labeled_fields
from jobpilot.services.extraction.parsers import JobPage
from jobpilot.services.extraction.structured_data import parse_json_ld


Handler = Callable[[httpx.Request], httpx.Response]


# -----------------------------------------------------------------------------
# Page Content
# -----------------------------------------------------------------------------
# Long enough for the confidence threshold; avoids boilerplate phrases
BACKEND_DESCRIPTION = (
    "Acme is growing its platform group and needs a backend engineer to own "
    "the services behind our scheduling product. You will design and build "
    "Python services that handle millions of bookings each day, run them in "
    "Docker containers on AWS, and work closely with product and design to "
    "ship improvements every week. You should enjoy reading code, writing "
    "clear pull requests and mentoring newer engineers on the team. We value "
    "calm ownership of production systems, thoughtful review of changes and "
    "steady delivery over heroics. The team is small, senior and supportive."
)

GREENHOUSE_PARAGRAPHS = (
    "Acme builds tools that help clinics schedule their day.",
    "You will build backend services in Python and PostgreSQL.",
    "You will pair with product managers to plan each release.",
)


def html_response(body: str, status_code: int = 200) -> httpx.Response:
    """Build an HTML response."""
    return httpx.Response(
        status_code,
        content=body.encode("utf-8"),
        headers={"content-type": "text/html; charset=utf-8"},
    )


def text_response(body: str, status_code: int = 200) -> httpx.Response:
    """Build a plain text response, as served by the readability proxy."""
    return httpx.Response(
        status_code,
        content=body.encode("utf-8"),
        headers={"content-type": "text/plain; charset=utf-8"},
    )


def padding_style(repeat: int = 80) -> str:
    """A head stylesheet that pads a page past the direct fetch threshold."""
    return "<style>" + ".card{margin:0 auto;color:#333}" * repeat + "</style>"


def make_page(url: str, html: str) -> JobPage:
    """Build a JobPage the way the extraction service does."""
    soup = BeautifulSoup(html, "lxml")
    page = JobPage(url=url, soup=soup, json_ld=parse_json_ld(soup))
    page.labeled = parse_labeled_fields(page.body_text)
    return page


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    """
    Create settings with the production defaults.

    Returns:
        Settings instance independent of the environment's .env file.
    """
    return Settings(_env_file=None)


@pytest.fixture
def make_fetcher() -> Callable[..., PageFetcher]:
    """
    Build fetchers backed by a mock transport.

    Returns:
        Factory taking a request handler and optional fetcher overrides.
    """

    def factory(handler: Handler, **kwargs) -> PageFetcher:
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            follow_redirects=True,
        )
        return PageFetcher(http_client=client, **kwargs)

    return factory


@pytest.fixture
def greenhouse_html() -> str:
    """
    A minimal Greenhouse board page with an application form.

    Returns:
        Page markup.
    """
    paragraphs = "".join(f"<p>{p}</p>" for p in GREENHOUSE_PARAGRAPHS)
    return (
        "<html><head>"
        '<link rel="canonical" href="https://boards.greenhouse.io/acme/jobs/4012345">'
        f"{padding_style()}"
        "</head><body>"
        '<div id="content"><div class="opening">'
        '<h1 data-board-role="opening-title">Backend Engineer</h1>'
        '<div data-board-role="opening-location">Austin, TX</div>'
        '<div data-board-role="opening-content">'
        f"{paragraphs}"
        '<form id="application_form"><h2>Apply for this job</h2>'
        '<label>First Name</label><input name="first_name">'
        '<button type="submit">Submit application</button></form>'
        "</div></div></div>"
        "</body></html>"
    )


@pytest.fixture
def json_ld_html() -> str:
    """
    A generic careers page carrying a JobPosting JSON-LD block.

    Returns:
        Page markup.
    """
    posting = {
        "@context": "https://schema.org",
        "@type": "JobPosting",
        "title": "Backend Engineer",
        "hiringOrganization": {"@type": "Organization", "name": "Acme"},
        "jobLocation": {
            "@type": "Place",
            "address": {
                "@type": "PostalAddress",
                "addressLocality": "Austin",
                "addressRegion": "TX",
            },
        },
        "description": BACKEND_DESCRIPTION,
    }
    return (
        "<html><head>"
        f'<script type="application/ld+json">{json.dumps(posting)}</script>'
        f"{padding_style()}"
        "</head><body><div class='hero'><p>Join us in Austin.</p></div></body></html>"
    )
