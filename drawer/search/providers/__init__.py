"""
Search providers - Alternate search destinations reached through a prefix.

Each provider exposes a ProviderDefinition (stable id, name, default
prefix) and a search() method for the residual query.
"""

from ..registry import ProviderDefinition
from .contacts import Contact, ContactsSearchProvider, CONTACTS_DEFINITION
from .files import FileDocument, FilesSearchProvider, FILES_DEFINITION
from .video import VideoSearchProvider, VIDEO_DEFINITION
from .web import WebSearchProvider, WEB_DEFINITION, DEFAULT_ENGINES


def default_definitions() -> list[ProviderDefinition]:
    """Built-in providers in registration order."""
    return [WEB_DEFINITION, CONTACTS_DEFINITION, VIDEO_DEFINITION, FILES_DEFINITION]


__all__ = [
    "Contact",
    "ContactsSearchProvider",
    "DEFAULT_ENGINES",
    "FileDocument",
    "FilesSearchProvider",
    "VideoSearchProvider",
    "WebSearchProvider",
    "default_definitions",
]
