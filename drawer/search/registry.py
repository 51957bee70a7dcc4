"""
Provider Registry - Maps trigger prefixes to search providers.

Providers are registered by a stable identifier. Each provider has a
default prefix; users may override it with one or more prefixes through
a PrefixConfiguration. The registry keeps a reverse index
(prefix -> provider id) that the router consults on every keystroke.

All state lives in one immutable snapshot. Writers build a new snapshot
under a lock and swap the reference, so readers always see either the
old index or the new one, never a partial rebuild.

Collisions: when two providers claim the same prefix, the provider
processed last during the rebuild wins. A warning is logged.
"""

import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from loguru import logger


@dataclass(frozen=True)
class ProviderDefinition:
    """Static description of a search provider."""
    provider_id: str  # persisted by settings, never change once shipped
    name: str
    prefix: str
    description: str = ""
    icon: str = "system-search"
    color: str = "#4285F4"


class PrefixConfiguration:
    """
    User-chosen prefixes per provider id.

    Prefix lists keep their order and drop duplicates. Blank prefixes
    are discarded. A provider missing from the configuration (or left
    with no usable prefixes) falls back to its default prefix.
    """

    def __init__(self, prefixes: Optional[Mapping[str, Iterable[str]]] = None):
        cleaned = {}
        for provider_id, values in (prefixes or {}).items():
            kept = []
            for prefix in values:
                if not prefix or not prefix.strip():
                    logger.warning(f"Ignoring blank prefix for provider '{provider_id}'")
                    continue
                if prefix not in kept:
                    kept.append(prefix)
            cleaned[provider_id] = tuple(kept)
        self._prefixes = MappingProxyType(cleaned)

    def get(self, provider_id: str) -> tuple[str, ...]:
        """Configured prefixes for a provider (empty if unconfigured)."""
        return self._prefixes.get(provider_id, ())

    def primary_prefix(self, provider_id: str) -> Optional[str]:
        prefixes = self.get(provider_id)
        return prefixes[0] if prefixes else None

    def as_dict(self) -> dict[str, list[str]]:
        return {pid: list(values) for pid, values in self._prefixes.items()}

    def __contains__(self, provider_id) -> bool:
        return provider_id in self._prefixes

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrefixConfiguration):
            return NotImplemented
        return dict(self._prefixes) == dict(other._prefixes)

    def __repr__(self) -> str:
        return f"PrefixConfiguration({self.as_dict()!r})"


@dataclass(frozen=True)
class _Snapshot:
    """Immutable registry state swapped in as a whole."""
    providers: Mapping[str, ProviderDefinition] = field(default_factory=dict)
    configuration: PrefixConfiguration = field(default_factory=PrefixConfiguration)
    index: Mapping[str, str] = field(default_factory=dict)
    ordered_prefixes: tuple[str, ...] = ()


def _effective_prefixes(definition: ProviderDefinition,
                        configuration: PrefixConfiguration) -> list[str]:
    configured = configuration.get(definition.provider_id)
    if configured:
        return list(configured)
    return [definition.prefix]


class ProviderRegistry:
    """Owns provider definitions and the prefix -> provider id index."""

    def __init__(self, providers: Iterable[ProviderDefinition] = (),
                 configuration: Optional[PrefixConfiguration] = None):
        self._write_lock = threading.Lock()
        self._snapshot = _Snapshot(configuration=configuration or PrefixConfiguration())
        for definition in providers:
            self.register(definition)
        self.rebuild_index()

    def register(self, definition: ProviderDefinition) -> None:
        """
        Insert or replace a provider under its identifier.

        The prefix index is not rebuilt; call rebuild_index() or
        update_configuration() to make new prefixes routable.
        """
        with self._write_lock:
            current = self._snapshot
            providers = dict(current.providers)
            providers[definition.provider_id] = definition
            self._snapshot = _Snapshot(
                providers=MappingProxyType(providers),
                configuration=current.configuration,
                index=current.index,
                ordered_prefixes=current.ordered_prefixes,
            )
        logger.debug(f"Registered provider '{definition.provider_id}'")

    def update_configuration(self, configuration: PrefixConfiguration) -> None:
        """Replace the prefix configuration and rebuild the index atomically."""
        with self._write_lock:
            self._snapshot = self._build(self._snapshot.providers, configuration)

    def rebuild_index(self) -> None:
        """Recompute the prefix index from the current providers and configuration."""
        with self._write_lock:
            current = self._snapshot
            self._snapshot = self._build(current.providers, current.configuration)

    def _build(self, providers: Mapping[str, ProviderDefinition],
               configuration: PrefixConfiguration) -> _Snapshot:
        index: dict[str, str] = {}
        for provider_id, definition in providers.items():
            for prefix in _effective_prefixes(definition, configuration):
                previous = index.get(prefix)
                if previous is not None and previous != provider_id:
                    logger.warning(
                        f"Prefix '{prefix}' claimed by '{previous}' and '{provider_id}'; "
                        f"using '{provider_id}'"
                    )
                index[prefix] = provider_id

        ordered = tuple(sorted(index, key=lambda p: (-len(p), p)))
        logger.debug(f"Prefix index rebuilt: {len(index)} prefixes for {len(providers)} providers")
        return _Snapshot(
            providers=providers,
            configuration=configuration,
            index=MappingProxyType(index),
            ordered_prefixes=ordered,
        )

    def find_by_prefix(self, prefix: str) -> Optional[ProviderDefinition]:
        snapshot = self._snapshot
        provider_id = snapshot.index.get(prefix)
        if provider_id is None:
            return None
        return snapshot.providers.get(provider_id)

    def find_by_id(self, provider_id: str) -> Optional[ProviderDefinition]:
        return self._snapshot.providers.get(provider_id)

    def all_prefixes(self) -> frozenset[str]:
        return frozenset(self._snapshot.index)

    def prefixes_longest_first(self) -> tuple[str, ...]:
        """Indexed prefixes ordered by length (descending), then text."""
        return self._snapshot.ordered_prefixes

    def routes(self) -> list[tuple[str, ProviderDefinition]]:
        """
        (prefix, provider) pairs, longest prefix first.

        Prefixes and providers come from the same snapshot, so a
        concurrent reconfiguration cannot pair an old prefix with a
        new provider.
        """
        snapshot = self._snapshot
        routes = []
        for prefix in snapshot.ordered_prefixes:
            definition = snapshot.providers.get(snapshot.index[prefix])
            if definition is not None:
                routes.append((prefix, definition))
        return routes

    def prefixes_for(self, provider_id: str) -> list[str]:
        """Effective prefixes of one provider; empty for unknown ids."""
        snapshot = self._snapshot
        definition = snapshot.providers.get(provider_id)
        if definition is None:
            return []
        return _effective_prefixes(definition, snapshot.configuration)

    def all_providers(self) -> list[ProviderDefinition]:
        return list(self._snapshot.providers.values())

    def has_prefix(self, prefix: str) -> bool:
        return prefix in self._snapshot.index

    def has_provider(self, provider_id: str) -> bool:
        return provider_id in self._snapshot.providers

    @property
    def configuration(self) -> PrefixConfiguration:
        return self._snapshot.configuration

    @property
    def total_prefix_count(self) -> int:
        return len(self._snapshot.index)

    def __len__(self) -> int:
        return len(self._snapshot.providers)
