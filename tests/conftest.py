"""
Pytest configuration and shared fixtures.
"""

import pytest
import logging
from collections import Counter
from typing import Dict, List, Optional

from wiki_mindmap import EventBus, SearchConfig
from wiki_mindmap.cancellation import CancellationToken, check_cancelled

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


class FakeLinkFetcher:
    """In-memory stand-in for WikipediaLinkFetcher over a fixed adjacency map."""

    def __init__(self, graph: Dict[str, List[str]]):
        self.graph = graph
        self.calls: Counter = Counter()
        self.call_order: List[str] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def fetch_links(
        self,
        title: str,
        max_links: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[str]:
        check_cancelled(cancel_token)
        self.calls[title] += 1
        self.call_order.append(title)
        links = list(self.graph.get(title, []))
        return links if max_links is None else links[:max_links]

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


@pytest.fixture
def fast_config() -> SearchConfig:
    """Deterministic config with no throttling delays."""
    return SearchConfig(
        page_delay_seconds=0,
        rate_limit_backoff_seconds=0,
        max_rate_limit_retries=2,
        shuffle_links=False,
    )

@pytest.fixture
def event_bus() -> EventBus:
    """Create a fresh EventBus for each test."""
    return EventBus()

@pytest.fixture
def make_fetcher():
    """Factory for FakeLinkFetcher instances over a given graph."""
    return FakeLinkFetcher

@pytest.fixture
def diamond_graph() -> Dict[str, List[str]]:
    """A -> B, C; B -> D; C -> D; D -> Target."""
    return {
        "A": ["B", "C"],
        "B": ["D"],
        "C": ["D"],
        "D": ["Target"],
    }

@pytest.fixture
def diamond_fetcher(diamond_graph) -> FakeLinkFetcher:
    return FakeLinkFetcher(diamond_graph)

@pytest.fixture
def disconnected_fetcher() -> FakeLinkFetcher:
    """Two cycles with no edge between them."""
    return FakeLinkFetcher({
        "A": ["B"],
        "B": ["A"],
        "X": ["Y"],
        "Y": ["X"],
    })
