"""
Prefix Router - Decides whether raw input activates a search provider.

A provider activates only when the input starts with one of its prefixes
followed by a single space:

  "s cats"    -> web provider, query "cats"
  "s"         -> no provider yet (user may still be typing)
  "yt music"  -> "yt" provider, even if "y" is also configured

Prefixes are tried longest first, so a short prefix never shadows a
longer one. Anything else is passed through untouched for app search.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .registry import ProviderDefinition, ProviderRegistry

PREFIX_SEPARATOR = " "


@dataclass
class ResultItem:
    """A single search result from the app list or a provider."""
    title: str
    description: str = ""
    icon: str = "image-missing"
    result_type: str = "app"  # app, web, url, video, contact, file, permission, hint
    url: Optional[str] = None
    item: object = None  # Candidate, Contact or FileDocument behind the result


@dataclass(frozen=True)
class ProviderDisplay:
    """What the UI needs to show an active provider."""
    provider_id: str
    name: str
    description: str
    icon: str
    color: str
    prefix: str  # the prefix the user actually typed


@dataclass(frozen=True)
class ParsedQuery:
    """Routing decision for one line of input."""
    provider: Optional[ProviderDefinition]
    query: str
    config: Optional[ProviderDisplay]
    pending: bool = False  # input is a provider prefix still missing its space


class SearchProvider(ABC):
    """Base class for providers reached through a prefix."""

    @property
    @abstractmethod
    def definition(self) -> ProviderDefinition:
        """Identifier, name and default prefix."""
        ...

    @abstractmethod
    def search(self, query: str) -> list[ResultItem]:
        """Return results for the residual query."""
        ...


def _display_for(definition: ProviderDefinition, prefix: str) -> ProviderDisplay:
    return ProviderDisplay(
        provider_id=definition.provider_id,
        name=definition.name,
        description=definition.description,
        icon=definition.icon,
        color=definition.color,
        prefix=prefix,
    )


def parse_query(raw: str, registry: ProviderRegistry) -> ParsedQuery:
    """
    Route raw input to a provider or to plain item search.

    Args:
        raw: Text field contents, unmodified
        registry: Registry holding the active prefix index

    Returns:
        ParsedQuery with the matched provider and residual query, or
        no provider and the original input.
    """
    if not raw:
        return ParsedQuery(provider=None, query="", config=None)

    routes = registry.routes()

    for prefix, provider in routes:
        trigger = prefix + PREFIX_SEPARATOR
        if raw.startswith(trigger):
            return ParsedQuery(
                provider=provider,
                query=raw[len(trigger):],
                config=_display_for(provider, prefix),
            )

    trimmed = raw.strip()
    if trimmed and any(prefix.startswith(trimmed) for prefix, _ in routes):
        # Exact prefix or a partial one: keep searching items for now
        return ParsedQuery(provider=None, query=raw, config=None, pending=True)

    return ParsedQuery(provider=None, query=raw, config=None)


class PrefixRouter:
    """Binds parse_query to a registry handle shared with the settings flow."""

    def __init__(self, registry: ProviderRegistry):
        self.registry = registry

    def parse(self, raw: str) -> ParsedQuery:
        return parse_query(raw, self.registry)
