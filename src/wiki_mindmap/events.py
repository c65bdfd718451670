import asyncio
import logging
from collections import defaultdict
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from wiki_mindmap.models import SearchSide

NODE_VISITED = "node_visited"
PATH_NODE_DISCOVERED = "path_node_discovered"
SEARCH_COMPLETED = "search_completed"


class SearchEvent(BaseModel):
    """Event emitted while a path search runs."""
    model_config = ConfigDict(use_enum_values=True)

    type: str = Field(..., min_length=1, description="Event type identifier (e.g., 'node_visited')")
    search_id: str = Field(..., min_length=1, description="Identifier of the search that emitted the event")
    data: Dict[str, Any] = Field(..., description="Event payload")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the event was created")


EventHandler = Callable[[SearchEvent], Awaitable[None]]


class EventBus:
    """
    Simple event bus between a running search and its observers.

    Handlers are async; if one handler fails the others still run.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[EventHandler]] = defaultdict(list)
        self.logger = logging.getLogger(__name__)

    def subscribe(self, event_type: str, handler: EventHandler):
        """Subscribe a handler to an event type."""
        self._subscribers[event_type].append(handler)
        self.logger.debug(f"Subscribed handler to {event_type}")

    async def publish(self, event: SearchEvent):
        """Publish an event to all subscribers."""
        handlers = self._subscribers[event.type]
        if not handlers:
            self.logger.debug(f"No subscribers for event type: {event.type}")
            return

        results = await asyncio.gather(
            *[self._safe_handle(handler, event) for handler in handlers],
            return_exceptions=True
        )

        for i, result in enumerate(results):
            if isinstance(result, Exception):
                self.logger.error(f"Event handler {i} failed for {event.type}: {result}")

    async def _safe_handle(self, handler: EventHandler, event: SearchEvent):
        try:
            await handler(event)
        except Exception as e:
            self.logger.error(f"Handler {getattr(handler, '__name__', handler)} failed: {e}", exc_info=True)
            raise  # gather() collects it

    def get_subscriber_count(self, event_type: str) -> int:
        return len(self._subscribers[event_type])


class SearchEventPublisher:
    """Adapts the search callbacks (on_progress / on_path_discovered) to EventBus events."""

    def __init__(self, event_bus: EventBus, search_id: str):
        self.event_bus = event_bus
        self.search_id = search_id

    async def on_progress(self, node: str, depth: int, side: SearchSide):
        await self.event_bus.publish(SearchEvent(
            type=NODE_VISITED,
            search_id=self.search_id,
            data={"node": node, "depth": depth, "side": SearchSide(side).value},
        ))

    async def on_path_discovered(self, node: str, is_path_node: bool):
        await self.event_bus.publish(SearchEvent(
            type=PATH_NODE_DISCOVERED,
            search_id=self.search_id,
            data={"node": node, "is_path_node": is_path_node},
        ))

    async def search_completed(self, path, **metadata):
        await self.event_bus.publish(SearchEvent(
            type=SEARCH_COMPLETED,
            search_id=self.search_id,
            data={"path": path, "found": path is not None, **metadata},
        ))
