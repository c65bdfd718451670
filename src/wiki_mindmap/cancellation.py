import asyncio
from typing import Optional

from wiki_mindmap.exceptions import SearchCancelledError


class CancellationToken:
    """Cooperative cancellation signal checked before every link fetch."""

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[str] = None

    def cancel(self, reason: str = "Search cancelled by caller"):
        self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise SearchCancelledError(self.reason or "Search cancelled")


def check_cancelled(token: Optional[CancellationToken]):
    """No-op for a missing token."""
    if token is not None:
        token.raise_if_cancelled()
