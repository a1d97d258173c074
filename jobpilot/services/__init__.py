# =============================================================================
# Services Package
# =============================================================================
"""
Business logic services for the JobPilot backend.
"""
