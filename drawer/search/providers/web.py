"""
Web Search Provider - Builds search-engine URLs for the "s" prefix.

  s cats          -> Search "cats" on Google, then DuckDuckGo
  s example.com   -> Open example.com, then the engine searches

The default engine is configurable via settings.toml [web_search] section.
"""

import re
import urllib.parse

from loguru import logger

from ..registry import ProviderDefinition
from ..router import ResultItem, SearchProvider

DEFAULT_ENGINES = {
    "google": {"name": "Google", "url": "https://www.google.com/search?q={query}"},
    "duckduckgo": {"name": "DuckDuckGo", "url": "https://duckduckgo.com/?q={query}"},
    "bing": {"name": "Bing", "url": "https://www.bing.com/search?q={query}"},
    "brave": {"name": "Brave Search", "url": "https://search.brave.com/search?q={query}"},
    "startpage": {"name": "Startpage", "url": "https://www.startpage.com/sp/search?query={query}"},
}

WEB_DEFINITION = ProviderDefinition(
    provider_id="web",
    name="Web Search",
    prefix="s",
    description="Search the web",
    icon="web-browser",
    color="#4285F4",
)

# host.tld with optional scheme, port and path; no spaces
_URL_PATTERN = re.compile(
    r"^(https?://)?([a-z0-9-]+\.)+[a-z]{2,}(:\d+)?(/\S*)?$",
    re.IGNORECASE,
)


def looks_like_url(text: str) -> bool:
    return bool(_URL_PATTERN.match(text.strip()))


class WebSearchProvider(SearchProvider):
    """Offer web searches for the residual query."""

    def __init__(self, engines: dict = None, default_engine: str = "google",
                 max_engines: int = 2):
        self.engines = engines or DEFAULT_ENGINES
        if default_engine not in self.engines:
            logger.warning(f"Unknown search engine '{default_engine}', using first configured")
            default_engine = next(iter(self.engines))
        self.default_engine = default_engine
        self.max_engines = max_engines

    @property
    def definition(self) -> ProviderDefinition:
        return WEB_DEFINITION

    def search(self, query: str) -> list[ResultItem]:
        term = query.strip()
        if not term:
            return []

        results = []
        if looks_like_url(term):
            url = term if "://" in term else f"https://{term}"
            results.append(ResultItem(
                title=f"Open {term}",
                description=url,
                icon="web-browser",
                result_type="url",
                url=url,
            ))

        encoded = urllib.parse.quote_plus(term)
        for key in self._engine_order()[:self.max_engines]:
            engine = self.engines[key]
            url = engine["url"].format(query=encoded)
            results.append(ResultItem(
                title=f'Search "{term}" on {engine["name"]}',
                description=url.split("/")[2],
                icon=engine.get("icon", "web-browser"),
                result_type="web",
                url=url,
            ))

        return results

    def _engine_order(self) -> list[str]:
        """Default engine first, then the others in configured order."""
        others = [key for key in self.engines if key != self.default_engine]
        if self.default_engine != "duckduckgo" and "duckduckgo" in others:
            # DuckDuckGo is the usual second choice
            others.remove("duckduckgo")
            others.insert(0, "duckduckgo")
        return [self.default_engine] + others
