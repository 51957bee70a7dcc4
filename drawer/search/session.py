"""
Search Session - Runs one keystroke through routing and ranking.

  raw input -> parse_query -> provider.search(residual)
                           -> rank(query, candidates)   (no provider)
                           -> recent items              (blank query)

The session owns the candidate list and the provider implementations;
the registry is shared with the settings flow, which may swap prefix
configuration at any time.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from loguru import logger

from ..services.recents import RecentsService
from .matching import rank
from .providers import (
    ContactsSearchProvider,
    FilesSearchProvider,
    VideoSearchProvider,
    WebSearchProvider,
)
from .registry import PrefixConfiguration, ProviderRegistry
from .router import ParsedQuery, ResultItem, SearchProvider, parse_query


@dataclass
class SearchOutcome:
    """Results for one input line plus the routing decision behind them."""
    parsed: ParsedQuery
    results: list[ResultItem] = field(default_factory=list)

    @property
    def provider_id(self) -> Optional[str]:
        return self.parsed.provider.provider_id if self.parsed.provider else None


class SearchSession:
    """Coordinates prefix routing, item ranking and provider dispatch."""

    def __init__(self, registry: ProviderRegistry,
                 providers: Iterable[SearchProvider] = (),
                 candidates: Iterable = (),
                 recents=None,
                 max_results: int = 8,
                 show_recents: bool = True,
                 max_recents: int = 5,
                 hidden_ids: Iterable[str] = ()):
        self.registry = registry
        self.providers: Dict[str, SearchProvider] = {}
        for provider in providers:
            self.add_provider(provider)
        self.candidates = list(candidates)
        self.recents = recents
        self.max_results = max_results
        self.show_recents = show_recents
        self.max_recents = max_recents
        self.hidden_ids = frozenset(hidden_ids)

    def add_provider(self, provider: SearchProvider) -> None:
        """Register a provider implementation and make its prefixes routable."""
        definition = provider.definition
        self.providers[definition.provider_id] = provider
        self.registry.register(definition)
        self.registry.rebuild_index()

    def set_candidates(self, candidates: Iterable) -> None:
        self.candidates = list(candidates)

    def apply_prefix_configuration(self, configuration: PrefixConfiguration) -> None:
        self.registry.update_configuration(configuration)

    def search(self, raw: str) -> SearchOutcome:
        """
        Produce results for the current text field contents.

        Args:
            raw: Unmodified input, including any provider prefix

        Returns:
            SearchOutcome; provider failures yield an empty result list
        """
        parsed = parse_query(raw, self.registry)

        if parsed.provider is not None:
            return SearchOutcome(parsed, self._search_provider(parsed))

        if not parsed.query.strip():
            return SearchOutcome(parsed, self._recent_results())

        visible = [c for c in self.candidates if _item_id(c) not in self.hidden_ids]
        ranked = rank(parsed.query, visible)
        return SearchOutcome(parsed, [_candidate_to_result(c) for c in ranked[:self.max_results]])

    def _search_provider(self, parsed: ParsedQuery) -> list[ResultItem]:
        provider_id = parsed.provider.provider_id
        provider = self.providers.get(provider_id)
        if provider is None:
            logger.warning(f"No implementation registered for provider '{provider_id}'")
            return []

        try:
            return provider.search(parsed.query)
        except Exception:
            logger.exception(f"Provider '{provider_id}' failed for query '{parsed.query}'")
            return []

    def _recent_results(self) -> list[ResultItem]:
        if not self.show_recents or self.recents is None:
            return []

        by_id = {_item_id(c): c for c in self.candidates}
        results = []
        # Walk the whole ranking: hidden or uninstalled ids must not use up the limit
        for item_id in self.recents.get_recent_ids(limit=None):
            candidate = by_id.get(item_id)
            if candidate is None or item_id in self.hidden_ids:
                continue
            results.append(_candidate_to_result(candidate))
            if len(results) == self.max_recents:
                break
        return results

    def record_launch(self, candidate) -> None:
        if self.recents is not None:
            self.recents.record_launch(_item_id(candidate))

    @classmethod
    def from_settings(cls, settings: dict,
                      contacts_lookup: Optional[Callable] = None,
                      files_lookup: Optional[Callable] = None,
                      candidates: Iterable = (),
                      recents=None) -> "SearchSession":
        """
        Build a session from loaded settings.

        Contacts and files providers are only added when a lookup
        callable is supplied, since their data lives in the host app.

        When recents are enabled and no service is passed in, a
        RecentsService is opened at [recents] db_path, or at
        ~/.local/share/drawer/recents.db when that is unset. The
        database file and its directory are created if missing.
        """
        from ..utils.helpers import is_provider_enabled, load_prefix_configuration

        search = settings.get("search", {})
        web = settings.get("web_search", {})

        available = [
            WebSearchProvider(
                default_engine=web.get("engine", "google"),
                max_engines=web.get("max_engines", 2),
            ),
            VideoSearchProvider(),
        ]
        if contacts_lookup is not None:
            available.append(ContactsSearchProvider(contacts_lookup))
        if files_lookup is not None:
            available.append(FilesSearchProvider(files_lookup))

        providers = [p for p in available if is_provider_enabled(settings, p.definition.provider_id)]

        if recents is None and search.get("show_recent_apps", True):
            db_path = settings.get("recents", {}).get("db_path") or None
            recents = RecentsService(Path(db_path) if db_path else None)
            logger.info(f"Recent items stored at {recents.db_path}")

        registry = ProviderRegistry(configuration=load_prefix_configuration(settings))

        return cls(
            registry,
            providers=providers,
            candidates=candidates,
            recents=recents,
            max_results=search.get("max_results", 8),
            show_recents=search.get("show_recent_apps", True),
            max_recents=search.get("max_recent_apps", 5),
            hidden_ids=search.get("hidden_apps", []),
        )


def _item_id(candidate) -> str:
    if isinstance(candidate, str):
        return candidate
    return getattr(candidate, "item_id", None) or candidate.name


def _candidate_to_result(candidate) -> ResultItem:
    name = candidate if isinstance(candidate, str) else candidate.name
    return ResultItem(title=name, result_type="app", item=candidate)
