"""
Legacy single-direction best-first search.

Explores from the start only, always expanding the queued title whose name
looks most like the target. Cheaper on requests than the bidirectional search
but gives no shortest-path guarantee.
"""
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from wiki_mindmap.cancellation import CancellationToken, check_cancelled
from wiki_mindmap.models import SearchSide, SearchStats
from wiki_mindmap.search.callbacks import (
    PathDiscoveredCallback,
    ProgressCallback,
    announce_path,
    notify_progress,
)
from wiki_mindmap.search.heuristic import score
from wiki_mindmap.utils.title_helpers import has_digits, title_key, titles_match, validate_page_title
from wiki_mindmap.wikipedia.link_cache import LinkCache

logger = logging.getLogger(__name__)

TOP_LINKS_PER_NODE = 5
EXTRA_LINKS_ON_STAGNATION = 5
MAX_ITERATIONS_WITHOUT_IMPROVEMENT = 3


@dataclass(order=True)
class _Candidate:
    # heapq is a min-heap: negate the score, break ties by insertion order
    sort_key: tuple
    title: str = field(compare=False)
    path: List[str] = field(compare=False)
    depth: int = field(compare=False)
    score: int = field(compare=False)


class BestFirstSearch:
    """Greedy heuristic search ordered by heuristic.score(link, target)."""

    def __init__(self, fetcher, max_links_per_node: int = 50):
        self.fetcher = fetcher
        self.max_links_per_node = max_links_per_node
        self.last_stats = SearchStats()
        self._counter = itertools.count()

    def _candidate(self, title: str, path: List[str], depth: int, title_score: int) -> _Candidate:
        return _Candidate((-title_score, next(self._counter)), title, path, depth, title_score)

    async def search(
        self,
        start: str,
        target: str,
        max_depth: int = 6,
        on_progress: Optional[ProgressCallback] = None,
        on_path_discovered: Optional[PathDiscoveredCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[List[str]]:
        validate_page_title(start)
        validate_page_title(target)
        self.last_stats = SearchStats()

        if has_digits(start) or has_digits(target):
            logger.warning(f"Titles must not contain digits: '{start}' -> '{target}'")
            return None

        if titles_match(start, target):
            await announce_path(on_path_discovered, [start])
            return [start]

        cache = LinkCache(self.fetcher, max_links=self.max_links_per_node)
        visited: Set[str] = set()
        best_score = score(start, target)
        queue = [self._candidate(start, [start], 0, best_score)]
        iterations_without_improvement = 0

        try:
            while queue:
                current = heapq.heappop(queue)
                await notify_progress(on_progress, current.title, current.depth, SearchSide.START)
                if on_path_discovered is not None:
                    await on_path_discovered(current.title, False)

                if title_key(current.title) in visited or current.depth > max_depth:
                    continue
                visited.add(title_key(current.title))

                check_cancelled(cancel_token)
                logger.debug(
                    f"Exploring '{current.title}' (depth {current.depth}, score {current.score})"
                )
                links = await cache.get_links(current.title, cancel_token)
                self.last_stats.nodes_expanded += 1

                scored_links = sorted(
                    ((link, score(link, target)) for link in links if title_key(link) not in visited),
                    key=lambda item: item[1],
                    reverse=True,
                )

                found_better_score = False
                for link, link_score in scored_links[:TOP_LINKS_PER_NODE]:
                    if titles_match(link, target):
                        path = current.path + [link]
                        logger.info(f"Target reached: {' → '.join(path)}")
                        await announce_path(on_path_discovered, path)
                        return path

                    if link_score > best_score:
                        best_score = link_score
                        found_better_score = True
                        iterations_without_improvement = 0
                        logger.debug(f"New best score {best_score} for '{link}'")

                    heapq.heappush(
                        queue,
                        self._candidate(link, current.path + [link], current.depth + 1, link_score),
                    )

                if not found_better_score:
                    iterations_without_improvement += 1
                    if iterations_without_improvement >= MAX_ITERATIONS_WITHOUT_IMPROVEMENT:
                        # Widen the beam a little when the scores stop improving
                        extra = scored_links[TOP_LINKS_PER_NODE:TOP_LINKS_PER_NODE + EXTRA_LINKS_ON_STAGNATION]
                        for link, link_score in extra:
                            heapq.heappush(
                                queue,
                                self._candidate(link, current.path + [link], current.depth + 1, link_score),
                            )
                        iterations_without_improvement = 0
        finally:
            self.last_stats.visited_from_start = len(visited)
            self.last_stats.cache = cache.get_cache_stats()

        logger.warning(f"Best-first search exhausted its queue without reaching '{target}'")
        return None
