"""
Wikipedia path finder using level-synchronous bidirectional BFS.
Core component that drives the link fetcher from both ends of the search.
"""
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional

from wiki_mindmap.cancellation import CancellationToken, check_cancelled
from wiki_mindmap.config import SearchConfig
from wiki_mindmap.models import SearchSide, SearchStats
from wiki_mindmap.search.callbacks import (
    PathDiscoveredCallback,
    ProgressCallback,
    announce_path,
    notify_progress,
)
from wiki_mindmap.search.path import reconstruct_path
from wiki_mindmap.utils.title_helpers import title_key, titles_match, validate_page_title
from wiki_mindmap.wikipedia.link_cache import LinkCache
from wiki_mindmap.wikipedia.link_fetcher import WikipediaLinkFetcher

logger = logging.getLogger(__name__)


@dataclass
class SideState:
    """
    Frontier and parent pointers for one side of the search.

    parents is keyed by title_key() so "Machine learning" and "machine Learning"
    count as the same visited node; the values are titles as fetched.
    """
    side: SearchSide
    queue: Deque[str]
    parents: Dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def seeded(cls, side: SearchSide, title: str) -> "SideState":
        return cls(side=side, queue=deque([title]), parents={title_key(title): None})

    def has_visited(self, title: str) -> bool:
        return title_key(title) in self.parents

    def visit(self, title: str, parent: str):
        self.parents[title_key(title)] = parent


class BidirectionalSearch:
    """
    Finds a hyperlink path between two articles by growing one BFS frontier
    from the start and one from the target until they touch.

    Each depth level expands the whole start-side frontier, then the whole
    end-side frontier. The end side follows *outgoing* links too: the link
    graph is treated as if it were symmetric, so the second half of a path
    is a chain of pages that link towards the meeting node, not away from it.
    """

    def __init__(self, fetcher, max_links: int = 100):
        self.fetcher = fetcher
        self.max_links = max_links
        self.last_stats = SearchStats()

    async def search(
        self,
        start: str,
        target: str,
        max_depth: int = 6,
        on_progress: Optional[ProgressCallback] = None,
        on_path_discovered: Optional[PathDiscoveredCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[List[str]]:
        """
        Find a path between start and target.

        Args:
            start: Starting article title
            target: Target article title
            max_depth: Number of levels each side may expand
            on_progress: Called with (title, depth, side) for every expanded title
            on_path_discovered: Awaited with (title, True) for each node of the final path
            cancel_token: Checked before every link fetch

        Returns:
            List of titles from start to target, or None if the frontiers never met

        Raises:
            InvalidTitleError: If start or target is empty
            SearchCancelledError: If cancel_token is cancelled mid-search
        """
        validate_page_title(start)
        validate_page_title(target)
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        self.last_stats = SearchStats()
        started_at = time.time()
        logger.info(f"Finding path from '{start}' to '{target}' (max depth {max_depth})")

        if titles_match(start, target):
            await announce_path(on_path_discovered, [start])
            return [start]

        # Fresh per call; both sides share it
        cache = LinkCache(self.fetcher, max_links=self.max_links)
        forward = SideState.seeded(SearchSide.START, start)
        backward = SideState.seeded(SearchSide.END, target)

        path: Optional[List[str]] = None
        for depth in range(max_depth):
            meeting_point = await self._expand_level(
                forward, backward, depth, cache, on_progress, cancel_token
            )
            if meeting_point is None:
                meeting_point = await self._expand_level(
                    backward, forward, depth, cache, on_progress, cancel_token
                )

            if meeting_point is not None:
                self.last_stats.meeting_node = meeting_point
                path = reconstruct_path(meeting_point, forward.parents, backward.parents, key=title_key)
                break

            self.last_stats.levels_completed = depth + 1

        self._record_stats(forward, backward, cache)
        elapsed = time.time() - started_at

        if path is None:
            logger.warning(
                f"No path found from '{start}' to '{target}' within depth {max_depth} "
                f"({elapsed:.2f}s, {self.last_stats.nodes_visited} titles visited)"
            )
            return None

        logger.info(
            f"Path found in {elapsed:.2f}s: {len(path) - 1} hops, meeting at "
            f"'{self.last_stats.meeting_node}'"
        )
        logger.debug(f"Cache stats: {self.last_stats.cache}")
        await announce_path(on_path_discovered, path)
        return path

    async def _expand_level(
        self,
        expanding: SideState,
        other: SideState,
        depth: int,
        cache: LinkCache,
        on_progress: Optional[ProgressCallback],
        cancel_token: Optional[CancellationToken],
    ) -> Optional[str]:
        """
        Expand every title in one side's frontier by one level.

        Returns:
            The meeting title, or None. On a meeting the rest of the level is abandoned.
        """
        next_level: Deque[str] = deque()
        logger.debug(f"Expanding {expanding.side.value} level {depth} with {len(expanding.queue)} titles")

        for node in expanding.queue:
            await notify_progress(on_progress, node, depth, expanding.side)
            check_cancelled(cancel_token)

            links = await cache.get_links(node, cancel_token)
            self.last_stats.nodes_expanded += 1
            logger.debug(f"{len(links)} links from '{node}' ({expanding.side.value} side)")

            for link in links:
                if expanding.has_visited(link):
                    continue
                expanding.visit(link, node)

                if other.has_visited(link):
                    logger.info(f"Intersection found at '{link}' from the {expanding.side.value} side")
                    return link

                next_level.append(link)

        expanding.queue = next_level
        return None

    def _record_stats(self, forward: SideState, backward: SideState, cache: LinkCache):
        self.last_stats.visited_from_start = len(forward.parents)
        self.last_stats.visited_from_end = len(backward.parents)
        self.last_stats.cache = cache.get_cache_stats()


async def bidirectional_search(
    start: str,
    target: str,
    max_depth: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_path_discovered: Optional[PathDiscoveredCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
    config: Optional[SearchConfig] = None,
) -> Optional[List[str]]:
    """Run one bidirectional search against the live Wikipedia API."""
    config = config or SearchConfig()
    async with WikipediaLinkFetcher(config) as fetcher:
        engine = BidirectionalSearch(fetcher, max_links=config.max_links_per_node)
        return await engine.search(
            start,
            target,
            max_depth=config.max_depth if max_depth is None else max_depth,
            on_progress=on_progress,
            on_path_discovered=on_path_discovered,
            cancel_token=cancel_token,
        )
