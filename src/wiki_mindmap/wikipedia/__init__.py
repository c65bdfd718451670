"""
Wikipedia module for wiki_mindmap.

Fetching outgoing links from the live MediaWiki API and memoizing them
for the duration of a search.
"""

from .link_cache import LinkCache
from .link_fetcher import WikipediaLinkFetcher

__all__ = [
    'LinkCache',
    'WikipediaLinkFetcher',
]
