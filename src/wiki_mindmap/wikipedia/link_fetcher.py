"""
Outgoing-link fetcher for the live MediaWiki API.
Handles pagination, self-throttling, rate-limit retries and noise filtering.
"""
import asyncio
import logging
import random
from typing import Any, Dict, List, Optional, Tuple

import httpx

from wiki_mindmap.config import SearchConfig
from wiki_mindmap.exceptions import WikiServiceUnavailableException
from wiki_mindmap.cancellation import CancellationToken, check_cancelled
from wiki_mindmap.utils.title_helpers import has_digits, is_excluded_namespace

logger = logging.getLogger(__name__)

# API error codes that mean "slow down" rather than "this request is wrong"
RATE_LIMIT_ERROR_CODES = {"ratelimited", "maxlag"}


class MalformedResponseError(ValueError):
    """The API answered with a body we don't know how to read."""


class WikipediaLinkFetcher:
    """
    Fetches the outgoing links of one article at a time.

    Key constraints:
    - Serial requests (one page in flight), with a small delay before each
    - Follows 'plcontinue' until everything or max_links is collected
    - HTTP 429 / 'ratelimited' responses are retried after a backoff
    - Any other failure truncates the result instead of raising
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or SearchConfig()
        self.base_url = self.config.base_url
        self._session: Optional[httpx.AsyncClient] = client
        self._owns_session = client is None
        self._rng = rng or random.Random()
        self.request_count = 0

    async def __aenter__(self):
        if self._session is None:
            self._session = httpx.AsyncClient(
                headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
                timeout=httpx.Timeout(self.config.request_timeout_seconds),
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP client if this fetcher created it."""
        if self._session is not None and self._owns_session:
            await self._session.aclose()
            self._session = None

    def _client(self) -> httpx.AsyncClient:
        if self._session is None:
            raise WikiServiceUnavailableException(
                "Link fetcher not initialized. Use 'async with' context manager."
            )
        return self._session

    def _base_params(self, title: str) -> Dict[str, Any]:
        params = {
            "action": "query",
            "format": "json",
            "formatversion": "2",
            "prop": "links",
            "titles": title,
            "pllimit": "max",
        }
        if self.config.exclude_namespaces:
            # Main namespace only; the prefix filter in _keep still applies
            params["plnamespace"] = "0"
        return params

    def _keep(self, link: str) -> bool:
        if has_digits(link):
            return False
        if self.config.exclude_namespaces and is_excluded_namespace(link, self.config.language):
            return False
        return True

    @staticmethod
    def _parse_links_page(data: Any) -> Tuple[Optional[List[str]], Optional[str], Optional[str]]:
        """
        Read one API page.

        Returns:
            (link titles or None when the page is missing/has no links,
             plcontinue token or None,
             API error code or None)
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")

        if "error" in data:
            return None, None, data["error"].get("code", "unknown")

        if "query" not in data:
            raise MalformedResponseError("Response has no 'query' section")

        pages = data["query"].get("pages") or []
        # formatversion=1 returns {page_id: page}; accept both shapes
        if isinstance(pages, dict):
            pages = list(pages.values())
        if not pages:
            return None, None, None

        page = pages[0]
        if "missing" in page or "invalid" in page:
            return None, None, None

        raw_links = page.get("links")
        if not raw_links:
            return None, None, None

        titles = [link["title"] for link in raw_links]
        plcontinue = data.get("continue", {}).get("plcontinue")
        return titles, plcontinue, None

    async def fetch_links(
        self,
        title: str,
        max_links: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[str]:
        """
        Get outgoing article links for a title.

        Args:
            title: Article title to expand
            max_links: Cap on returned links (config default when None)
            cancel_token: Checked before every request

        Returns:
            Filtered, optionally shuffled list of at most max_links titles.
            Empty for missing pages, pages without links and malformed responses.
        """
        if max_links is None:
            max_links = self.config.max_links_per_node
        links: List[str] = []
        plcontinue: Optional[str] = None
        rate_limit_retries = 0

        while len(links) < max_links:
            check_cancelled(cancel_token)
            if self.config.page_delay_seconds:
                await asyncio.sleep(self.config.page_delay_seconds)

            params = self._base_params(title)
            if plcontinue:
                params["plcontinue"] = plcontinue

            try:
                response = await self._client().get(self.base_url, params=params)
            except httpx.HTTPError as e:
                logger.warning(f"Request for links of '{title}' failed: {e}; keeping {len(links)} links")
                break
            self.request_count += 1

            rate_limited = response.status_code == 429
            if not rate_limited and response.is_error:
                logger.warning(
                    f"HTTP {response.status_code} fetching links of '{title}'; keeping {len(links)} links"
                )
                break

            batch: Optional[List[str]] = None
            next_continue: Optional[str] = None
            error_code: Optional[str] = None
            if not rate_limited:
                try:
                    batch, next_continue, error_code = self._parse_links_page(response.json())
                except (ValueError, KeyError, TypeError, AttributeError) as e:
                    logger.warning(f"Malformed API response for '{title}': {e}")
                    return []
                rate_limited = error_code in RATE_LIMIT_ERROR_CODES

            if rate_limited:
                if rate_limit_retries >= self.config.max_rate_limit_retries:
                    logger.warning(
                        f"Still rate limited after {rate_limit_retries} retries for '{title}'; "
                        f"keeping {len(links)} links"
                    )
                    break
                rate_limit_retries += 1
                logger.info(
                    f"Rate limited on '{title}', retrying in {self.config.rate_limit_backoff_seconds}s "
                    f"({rate_limit_retries}/{self.config.max_rate_limit_retries})"
                )
                await asyncio.sleep(self.config.rate_limit_backoff_seconds)
                continue

            if error_code:
                logger.warning(f"Wikipedia API error '{error_code}' for '{title}'")
                break

            rate_limit_retries = 0
            if batch is None:
                logger.debug(f"No links for '{title}' (missing page or end of links)")
                break

            links.extend(link for link in batch if self._keep(link))

            plcontinue = next_continue
            if not plcontinue:
                break
            logger.debug(f"Continuing pagination for '{title}' ({len(links)} links so far)")

        if self.config.shuffle_links:
            self._rng.shuffle(links)

        logger.debug(f"Retrieved {min(len(links), max_links)} links for '{title}'")
        return links[:max_links]
