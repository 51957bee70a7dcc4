"""
Match Classifier - Tiered ranking of candidates against a query.

Each candidate lands in the first tier whose predicate it satisfies:

  1. EXACT          "maps"  -> "Maps"
  2. PREFIX         "map"   -> "MapMyRun"
  3. WORD_BOUNDARY  "map"   -> "Google Maps"  (query starts a later word)
  4. SUBSTRING      "map"   -> "Bitmap Converter"
  5. SUBSEQUENCE    "cod"   -> "Call of Duty" (characters in order)

Candidates matching no tier are dropped. Within a tier the input order
is kept, so ranking is stable and deterministic.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from functools import cached_property
from typing import Iterable, Optional


class MatchTier(IntEnum):
    """Relevance buckets, most relevant first."""
    EXACT = 0
    PREFIX = 1
    WORD_BOUNDARY = 2
    SUBSTRING = 3
    SUBSEQUENCE = 4


@dataclass(frozen=True)
class Candidate:
    """A searchable item such as an installed application."""
    item_id: str
    name: str
    payload: object = field(default=None, compare=False)

    @cached_property
    def name_lower(self) -> str:
        return self.name.lower()


def is_subsequence(query: str, text: str) -> bool:
    """
    Check whether the characters of query appear in text in order.

    Args:
        query: Characters to look for (already lowercased)
        text: Text to scan (already lowercased)

    Returns:
        True if every query character is found, in order, within text.
        An empty query is a subsequence of anything.
    """
    if len(query) > len(text):
        return False

    query_index = 0
    for char in text:
        if query_index == len(query):
            break
        if char == query[query_index]:
            query_index += 1

    return query_index == len(query)


def classify(query: str, name: str) -> Optional[MatchTier]:
    """
    Return the tier of a lowercased name for a lowercased query.

    Returns None when the name matches no tier. Predicates are checked
    in priority order and evaluation stops at the first hit.
    """
    if name == query:
        return MatchTier.EXACT
    if name.startswith(query):
        return MatchTier.PREFIX
    if " " + query in name:
        return MatchTier.WORD_BOUNDARY
    if query in name:
        return MatchTier.SUBSTRING
    if is_subsequence(query, name):
        return MatchTier.SUBSEQUENCE
    return None


def _lower_name(candidate) -> str:
    """Lowercase display name of a candidate, using its cache if present."""
    if isinstance(candidate, str):
        return candidate.lower()
    cached = getattr(candidate, "name_lower", None)
    if cached is not None:
        return cached
    return candidate.name.lower()


def rank(query: str, candidates: Iterable) -> list:
    """
    Filter and order candidates by match tier.

    Args:
        query: Raw query text; surrounding whitespace is ignored
        candidates: Objects exposing ``name`` (and optionally
            ``name_lower``), or plain strings

    Returns:
        New list: all EXACT matches, then PREFIX, WORD_BOUNDARY,
        SUBSTRING and SUBSEQUENCE matches, each in input order.
    """
    needle = query.strip().lower()
    if not needle:
        # Empty string is a substring of every name
        return list(candidates)

    buckets: list[list] = [[] for _ in MatchTier]
    for candidate in candidates:
        tier = classify(needle, _lower_name(candidate))
        if tier is not None:
            buckets[tier].append(candidate)

    ranked = [None] * sum(len(bucket) for bucket in buckets)
    position = 0
    for bucket in buckets:
        ranked[position:position + len(bucket)] = bucket
        position += len(bucket)

    return ranked
