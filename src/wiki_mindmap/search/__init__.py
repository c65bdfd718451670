# Path search engines over the live link graph

from .bidirectional import BidirectionalSearch, bidirectional_search
from .best_first import BestFirstSearch
from .heuristic import score
from .path import reconstruct_path
from .service import PathSearchService

__all__ = [
    "BidirectionalSearch",
    "bidirectional_search",
    "BestFirstSearch",
    "score",
    "reconstruct_path",
    "PathSearchService",
]
