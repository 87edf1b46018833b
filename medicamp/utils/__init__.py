"""
Utility helpers.
"""

from .settings_validator import SettingsHealthCheck, validate_settings

__all__ = ["SettingsHealthCheck", "validate_settings"]
