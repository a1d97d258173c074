# =============================================================================
# Config Package
# =============================================================================
"""
Application configuration and settings.
"""

from jobpilot.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
