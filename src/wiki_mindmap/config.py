import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "WikiMindMap/0.1 (https://github.com/wiki-mindmap/wiki-mindmap)"


class SearchConfig(BaseModel):
    """Configuration for link fetching and path search."""

    # Wikipedia API settings
    language: str = Field("en", description="Wikipedia language edition, e.g. 'en' or 'fr'")
    api_url: Optional[str] = Field(None, description="Override for the MediaWiki api.php endpoint")
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout_seconds: float = Field(10.0, gt=0)

    # Search settings
    max_depth: int = Field(6, ge=0, description="Levels expanded per side before giving up")
    max_links_per_node: int = Field(100, ge=1, description="Cap on links kept for one article")

    # Throttling
    page_delay_seconds: float = Field(0.1, ge=0, description="Pause before each API page request")
    rate_limit_backoff_seconds: float = Field(2.0, ge=0, description="Pause after a rate-limited response")
    max_rate_limit_retries: int = Field(5, ge=0, description="Consecutive rate-limit retries before giving up")

    # Link filtering
    shuffle_links: bool = True
    exclude_namespaces: bool = True

    @property
    def base_url(self) -> str:
        return self.api_url or f"https://{self.language}.wikipedia.org/w/api.php"

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Create config from environment variables (a .env file is honoured)."""
        load_dotenv()
        return cls(
            language=os.getenv("WIKI_MINDMAP_LANGUAGE", "en"),
            api_url=os.getenv("WIKI_MINDMAP_API_URL") or None,
            user_agent=os.getenv("WIKI_MINDMAP_USER_AGENT", DEFAULT_USER_AGENT),
            request_timeout_seconds=float(os.getenv("WIKI_MINDMAP_REQUEST_TIMEOUT", "10.0")),
            max_depth=int(os.getenv("WIKI_MINDMAP_MAX_DEPTH", "6")),
            max_links_per_node=int(os.getenv("WIKI_MINDMAP_MAX_LINKS", "100")),
            page_delay_seconds=float(os.getenv("WIKI_MINDMAP_PAGE_DELAY", "0.1")),
            rate_limit_backoff_seconds=float(os.getenv("WIKI_MINDMAP_RATE_LIMIT_BACKOFF", "2.0")),
            max_rate_limit_retries=int(os.getenv("WIKI_MINDMAP_MAX_RATE_LIMIT_RETRIES", "5")),
            shuffle_links=os.getenv("WIKI_MINDMAP_SHUFFLE_LINKS", "true").lower() == "true",
            exclude_namespaces=os.getenv("WIKI_MINDMAP_EXCLUDE_NAMESPACES", "true").lower() == "true",
        )
