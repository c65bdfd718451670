"""
Per-search memo of fetched link sets.
"""
import logging
from typing import Dict, List, Optional

from wiki_mindmap.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class LinkCache:
    """
    Maps article title -> LinkSet for the lifetime of one search.

    Both sides of a bidirectional search read through the same cache, so a
    title reached from either direction is fetched at most once. There is no
    eviction; create a new cache for every search.
    """

    def __init__(self, fetcher, max_links: int = 100):
        """
        Args:
            fetcher: Object with an async fetch_links(title, max_links, cancel_token) method
            max_links: Cap passed to the fetcher for every title
        """
        self.fetcher = fetcher
        self.max_links = max_links
        self._links: Dict[str, List[str]] = {}
        self.hits = 0
        self.misses = 0

    def __contains__(self, title: str) -> bool:
        return title in self._links

    def __len__(self) -> int:
        return len(self._links)

    async def get_links(self, title: str, cancel_token: Optional[CancellationToken] = None) -> List[str]:
        if title in self._links:
            self.hits += 1
            logger.debug(f"Cache hit for '{title}': {len(self._links[title])} links")
            return self._links[title]

        self.misses += 1
        links = await self.fetcher.fetch_links(title, self.max_links, cancel_token)
        # Empty results are cached too; a dead end stays a dead end for this search
        self._links[title] = list(links)
        return self._links[title]

    def get_cache_stats(self) -> Dict[str, int]:
        return {
            "cached_pages": len(self._links),
            "total_links": sum(len(links) for links in self._links.values()),
            "hits": self.hits,
            "misses": self.misses,
        }
