"""
Video Search Provider - YouTube search via the "y" prefix.
"""

import urllib.parse

from ..registry import ProviderDefinition
from ..router import ResultItem, SearchProvider

YOUTUBE_URL = "https://www.youtube.com/results?search_query={query}"

VIDEO_DEFINITION = ProviderDefinition(
    provider_id="youtube",
    name="YouTube",
    prefix="y",
    description="Search YouTube videos",
    icon="applications-multimedia",
    color="#FF0000",
)


class VideoSearchProvider(SearchProvider):

    @property
    def definition(self) -> ProviderDefinition:
        return VIDEO_DEFINITION

    def search(self, query: str) -> list[ResultItem]:
        term = query.strip()
        if not term:
            return []

        return [ResultItem(
            title=f'Search "{term}" on YouTube',
            description="youtube.com",
            icon=VIDEO_DEFINITION.icon,
            result_type="video",
            url=YOUTUBE_URL.format(query=urllib.parse.quote_plus(term)),
        )]
