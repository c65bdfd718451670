import json
import logging
from typing import Any, Dict

from fastapi import WebSocket

from wiki_mindmap import CancellationToken, SearchEvent

logger = logging.getLogger(__name__)

class SearchWebSocketHandler:
    """
    Forwards search events to one WebSocket client.

    If the client goes away mid-search the search's cancellation token is
    tripped, so the crawl stops at its next fetch instead of running on.
    """

    def __init__(self, websocket: WebSocket, cancel_token: CancellationToken):
        self.websocket = websocket
        self.cancel_token = cancel_token

    async def handle_node_visited(self, event: SearchEvent):
        """Broadcast each expanded title with its depth and side."""
        await self._send({
            "type": "NODE_VISITED",
            "search_id": event.search_id,
            "node": event.data["node"],
            "depth": event.data["depth"],
            "side": event.data["side"],
        })

    async def handle_path_node_discovered(self, event: SearchEvent):
        """Broadcast nodes as they are confirmed (or, for best-first, tentatively explored)."""
        await self._send({
            "type": "PATH_NODE_DISCOVERED",
            "search_id": event.search_id,
            "node": event.data["node"],
            "is_path_node": event.data["is_path_node"],
        })

    async def handle_search_completed(self, event: SearchEvent):
        """Send the final search response."""
        await self._send({
            "type": "SEARCH_COMPLETED",
            "search_id": event.search_id,
            "result": event.data.get("response"),
        })

    async def _send(self, message: Dict[str, Any]):
        if self.cancel_token.cancelled:
            return
        try:
            await self.websocket.send_text(json.dumps(message))
        except Exception as e:
            # Starlette raises WebSocketDisconnect or RuntimeError depending on close state
            logger.info(f"WebSocket client gone ({type(e).__name__}); cancelling search")
            self.cancel_token.cancel("WebSocket client disconnected")
