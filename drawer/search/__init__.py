"""
Search package - Candidate ranking and prefix-based query routing.

Raw input is routed by prefix to a provider (web, contacts, files,
video) or ranked against the installed item list by match tier.
"""

from .matching import Candidate, MatchTier, classify, is_subsequence, rank
from .registry import PrefixConfiguration, ProviderDefinition, ProviderRegistry
from .router import ParsedQuery, PrefixRouter, ProviderDisplay, ResultItem, SearchProvider, parse_query
from .session import SearchOutcome, SearchSession

__all__ = [
    "Candidate",
    "MatchTier",
    "ParsedQuery",
    "PrefixConfiguration",
    "PrefixRouter",
    "ProviderDefinition",
    "ProviderDisplay",
    "ProviderRegistry",
    "ResultItem",
    "SearchOutcome",
    "SearchProvider",
    "SearchSession",
    "classify",
    "is_subsequence",
    "parse_query",
    "rank",
]
