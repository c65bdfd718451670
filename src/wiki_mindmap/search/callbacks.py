"""
Observer hooks shared by the search engines.

on_progress(node, depth, side) fires for every expanded title and may be a
plain function or a coroutine function. on_path_discovered(node, is_path_node)
is always awaited.
"""
import inspect
from typing import Any, Awaitable, Callable, Iterable, Optional

from wiki_mindmap.models import SearchSide

ProgressCallback = Callable[[str, int, SearchSide], Any]
PathDiscoveredCallback = Callable[[str, bool], Awaitable[None]]


async def notify_progress(
    on_progress: Optional[ProgressCallback], node: str, depth: int, side: SearchSide
):
    if on_progress is None:
        return
    result = on_progress(node, depth, side)
    if inspect.isawaitable(result):
        await result


async def announce_path(on_path_discovered: Optional[PathDiscoveredCallback], path: Iterable[str]):
    """Report each node of a final path, in order."""
    if on_path_discovered is None:
        return
    for node in path:
        await on_path_discovered(node, True)
