"""
Wiki MindMap - Core Library

Finds hyperlink paths between Wikipedia articles by crawling the live
link graph, reporting every visited node so a visualization can follow along.
"""

from .cancellation import CancellationToken
from .config import SearchConfig
from .events import EventBus, SearchEvent, SearchEventPublisher
from .search import BestFirstSearch, BidirectionalSearch, PathSearchService, bidirectional_search

__all__ = [
    'BestFirstSearch',
    'BidirectionalSearch',
    'CancellationToken',
    'EventBus',
    'PathSearchService',
    'SearchConfig',
    'SearchEvent',
    'SearchEventPublisher',
    'bidirectional_search',
]
