# =============================================================================
# Source Detection
# =============================================================================
"""
Classify a listing URL by the platform that hosts it.
"""

from enum import Enum
from urllib.parse import urlparse


class JobSource(str, Enum):
    """
    Hosting platforms with dedicated extraction rules.

    Anything unrecognized is generic; LinkedIn is reported separately but
    shares the generic extraction rules.
    """

    GREENHOUSE = "greenhouse"
    LEVER = "lever"
    WORKDAY = "workday"
    LINKEDIN = "linkedin"
    GENERIC = "generic"


def detect_source(url: str) -> JobSource:
    """
    Detect the hosting platform of a job listing from its hostname.

    Args:
        url: Listing URL. Malformed values are classified as generic.

    Returns:
        The detected JobSource.
    """
    try:
        host = (urlparse(url).hostname or "").lower()
    except (TypeError, ValueError):
        return JobSource.GENERIC

    if "greenhouse.io" in host:
        return JobSource.GREENHOUSE
    if "lever.co" in host:
        return JobSource.LEVER
    if "myworkdayjobs.com" in host or "workday" in host:
        return JobSource.WORKDAY
    if "linkedin.com" in host:
        return JobSource.LINKEDIN
    return JobSource.GENERIC
