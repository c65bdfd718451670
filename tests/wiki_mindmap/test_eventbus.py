"""
EventBus and SearchEventPublisher tests.
"""

import pytest
import logging

from wiki_mindmap import EventBus, SearchEvent, SearchEventPublisher
from wiki_mindmap.events import NODE_VISITED, PATH_NODE_DISCOVERED, SEARCH_COMPLETED
from wiki_mindmap.models import SearchSide
from wiki_mindmap.search import BidirectionalSearch

logger = logging.getLogger(__name__)

@pytest.mark.unit
class TestEventBus:

    @pytest.mark.asyncio
    async def test_basic_event_flow(self, event_bus: EventBus):
        received_events = []

        async def handler(event: SearchEvent):
            received_events.append(event)

        event_bus.subscribe("test_event", handler)
        await event_bus.publish(SearchEvent(type="test_event", search_id="s1", data={"node": "Paris"}))

        assert len(received_events) == 1
        assert received_events[0].search_id == "s1"
        assert received_events[0].data["node"] == "Paris"

    @pytest.mark.asyncio
    async def test_error_isolation(self, event_bus: EventBus):
        calls = []

        async def failing_handler(event: SearchEvent):
            raise RuntimeError("boom")

        async def working_handler(event: SearchEvent):
            calls.append(event.type)

        event_bus.subscribe("isolated", failing_handler)
        event_bus.subscribe("isolated", working_handler)
        await event_bus.publish(SearchEvent(type="isolated", search_id="s1", data={}))

        assert calls == ["isolated"]

    @pytest.mark.asyncio
    async def test_publish_without_subscribers(self, event_bus: EventBus):
        await event_bus.publish(SearchEvent(type="nobody_listens", search_id="s1", data={}))
        assert event_bus.get_subscriber_count("nobody_listens") == 0

    def test_event_validation(self):
        with pytest.raises(ValueError):
            SearchEvent(type="", search_id="s1", data={})


@pytest.mark.unit
class TestSearchEventPublisher:

    @pytest.mark.asyncio
    async def test_search_feeds_event_bus(self, event_bus: EventBus, diamond_fetcher):
        visited = []
        path_nodes = []
        completed = []

        async def on_visited(event: SearchEvent):
            visited.append((event.data["node"], event.data["depth"], event.data["side"]))

        async def on_path_node(event: SearchEvent):
            path_nodes.append(event.data["node"])

        async def on_completed(event: SearchEvent):
            completed.append(event.data)

        event_bus.subscribe(NODE_VISITED, on_visited)
        event_bus.subscribe(PATH_NODE_DISCOVERED, on_path_node)
        event_bus.subscribe(SEARCH_COMPLETED, on_completed)
        publisher = SearchEventPublisher(event_bus, "search-1")

        path = await BidirectionalSearch(diamond_fetcher).search(
            "A", "Target", max_depth=3,
            on_progress=publisher.on_progress,
            on_path_discovered=publisher.on_path_discovered,
        )
        await publisher.search_completed(path)

        assert visited[0] == ("A", 0, SearchSide.START.value)
        assert ("Target", 0, "end") in visited
        assert path_nodes == path
        assert completed == [{"path": path, "found": True}]
