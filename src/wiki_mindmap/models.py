from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, Field

# --- Enums ---

class SearchSide(str, Enum):
    """Which frontier of a bidirectional search a node belongs to."""
    START = "start"
    END = "end"

class SearchMode(str, Enum):
    """Available path search algorithms."""
    BIDIRECTIONAL = "bidirectional"
    BEST_FIRST = "best_first"

# --- Search bookkeeping ---

class SearchStats(BaseModel):
    """Diagnostics collected while a search runs."""
    visited_from_start: int = Field(0, description="Titles discovered by the start side")
    visited_from_end: int = Field(0, description="Titles discovered by the end side")
    nodes_expanded: int = Field(0, description="Titles whose links were requested")
    levels_completed: int = Field(0, description="Depth levels fully expanded")
    meeting_node: Optional[str] = Field(None, description="Where the two frontiers met")
    cache: Dict[str, int] = Field(default_factory=dict, description="Link cache counters")

    @property
    def nodes_visited(self) -> int:
        return self.visited_from_start + self.visited_from_end

# --- Request / response ---

class SearchRequest(BaseModel):
    """Request model for a path search."""
    start_page: Annotated[str, Field(min_length=1)] = Field(..., description="Starting Wikipedia page title")
    target_page: Annotated[str, Field(min_length=1)] = Field(..., description="Target Wikipedia page title")
    max_depth: Optional[int] = Field(None, ge=1, le=10, description="Levels per side; config default when omitted")
    max_links_per_node: Optional[int] = Field(None, ge=1, le=500, description="Links kept per article; config default when omitted")
    mode: SearchMode = Field(SearchMode.BIDIRECTIONAL, description="Search algorithm to run")

class SearchResponse(BaseModel):
    """Response model for a path search."""
    start_page: str
    target_page: str
    path: Optional[List[str]] = Field(None, description="Titles from start to target, or null when no path was found")
    found: bool = Field(..., description="Whether a path was found")
    path_length: int = Field(..., description="Number of hops in the path, -1 when not found")
    computation_time_ms: float = Field(..., description="Time taken to compute the path in milliseconds")
    nodes_visited: int = Field(0, description="Titles discovered during the search")
    mode: SearchMode = SearchMode.BIDIRECTIONAL
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Search diagnostics")
