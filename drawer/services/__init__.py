"""
Backend services for the drawer search core.

Services handle data persistence that the ranking core stays free of.
"""

from .recents import RecentsService

__all__ = ["RecentsService"]
