# =============================================================================
# API Package
# =============================================================================
"""
FastAPI application and HTTP routes.
"""
