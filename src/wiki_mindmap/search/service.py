"""
PathSearchService - runs one path search per request and reports the result.

Shared by the API server and the command line.
"""
import logging
import time
from typing import Callable, Optional

from wiki_mindmap.cancellation import CancellationToken
from wiki_mindmap.config import SearchConfig
from wiki_mindmap.models import SearchMode, SearchRequest, SearchResponse
from wiki_mindmap.search.best_first import BestFirstSearch
from wiki_mindmap.search.bidirectional import BidirectionalSearch
from wiki_mindmap.search.callbacks import PathDiscoveredCallback, ProgressCallback
from wiki_mindmap.wikipedia.link_fetcher import WikipediaLinkFetcher

logger = logging.getLogger(__name__)

# Returns an async context manager yielding an object with fetch_links()
FetcherFactory = Callable[[SearchConfig], object]


class PathSearchService:
    """Opens a link fetcher, runs the requested search engine, times it."""

    def __init__(self, config: Optional[SearchConfig] = None, fetcher_factory: Optional[FetcherFactory] = None):
        self.config = config or SearchConfig()
        self.fetcher_factory = fetcher_factory or WikipediaLinkFetcher

    async def find_path(
        self,
        request: SearchRequest,
        on_progress: Optional[ProgressCallback] = None,
        on_path_discovered: Optional[PathDiscoveredCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> SearchResponse:
        max_depth = self.config.max_depth if request.max_depth is None else request.max_depth
        max_links = self.config.max_links_per_node if request.max_links_per_node is None else request.max_links_per_node
        start_time = time.time()

        async with self.fetcher_factory(self.config) as fetcher:
            if request.mode == SearchMode.BEST_FIRST:
                engine = BestFirstSearch(fetcher, max_links_per_node=max_links)
            else:
                engine = BidirectionalSearch(fetcher, max_links=max_links)

            path = await engine.search(
                request.start_page,
                request.target_page,
                max_depth=max_depth,
                on_progress=on_progress,
                on_path_discovered=on_path_discovered,
                cancel_token=cancel_token,
            )

        computation_time_ms = (time.time() - start_time) * 1000
        stats = engine.last_stats
        logger.info(
            f"{request.mode.value} search {request.start_page} -> {request.target_page}: "
            f"{'found ' + str(len(path) - 1) + ' hops' if path else 'no path'} "
            f"in {computation_time_ms:.1f}ms"
        )

        return SearchResponse(
            start_page=request.start_page,
            target_page=request.target_page,
            path=path,
            found=path is not None,
            path_length=len(path) - 1 if path else -1,
            computation_time_ms=computation_time_ms,
            nodes_visited=stats.nodes_visited,
            mode=request.mode,
            metadata={
                "max_depth": max_depth,
                "max_links_per_node": max_links,
                "nodes_expanded": stats.nodes_expanded,
                "meeting_node": stats.meeting_node,
                "cache": stats.cache,
            },
        )
