# =============================================================================
# JobPilot - Extraction Service Package
# =============================================================================
"""
JobPilot Extraction Service

A FastAPI-based service that turns job listing links into structured job
details (role, company, location, description and skills) with a
confidence score for the job application tracker.
"""

__version__ = "0.1.0"
