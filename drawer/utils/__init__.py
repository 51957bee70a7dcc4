"""
Shared utility functions for the drawer search core.
"""

from .helpers import load_settings, load_prefix_configuration, is_provider_enabled

__all__ = ["load_settings", "load_prefix_configuration", "is_provider_enabled"]
