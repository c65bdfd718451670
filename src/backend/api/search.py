import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from wiki_mindmap import CancellationToken, EventBus, SearchEventPublisher
from wiki_mindmap.events import NODE_VISITED, PATH_NODE_DISCOVERED, SEARCH_COMPLETED
from wiki_mindmap.exceptions import InvalidTitleError, SearchCancelledError
from wiki_mindmap.models import SearchRequest, SearchResponse
from wiki_mindmap.search import PathSearchService
from backend.dependencies import get_search_service
from backend.handlers import SearchWebSocketHandler

router = APIRouter(prefix="/api/search", tags=["search"])
logger = logging.getLogger(__name__)

SearchServiceDep = Annotated[PathSearchService, Depends(get_search_service)]

@router.post("/path", response_model=SearchResponse)
async def find_path(request: SearchRequest, service: SearchServiceDep) -> SearchResponse:
    """
    Find a path of links between two Wikipedia articles.

    A response with found=false is a normal outcome: the frontiers did not
    meet within max_depth.
    """
    try:
        return await service.find_path(request)
    except InvalidTitleError as e:
        logger.warning(f"Rejected search: {e}")
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Unexpected error in path search: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )

@router.websocket("/ws")
async def search_websocket(websocket: WebSocket):
    """
    Streaming search for the mind map view.

    The client sends one SearchRequest as JSON; the server streams
    NODE_VISITED and PATH_NODE_DISCOVERED messages, then SEARCH_COMPLETED.
    Disconnecting cancels the search.
    """
    await websocket.accept()
    service: PathSearchService = websocket.app.state.search_service

    try:
        request = SearchRequest.model_validate(await websocket.receive_json())
    except WebSocketDisconnect:
        logger.info("WebSocket closed before a search request was sent")
        return
    except ValueError as e:
        await websocket.send_json({"type": "ERROR", "detail": str(e)})
        await websocket.close(code=1003)
        return

    search_id = str(uuid.uuid4())
    cancel_token = CancellationToken()
    handler = SearchWebSocketHandler(websocket, cancel_token)

    event_bus = EventBus()
    event_bus.subscribe(NODE_VISITED, handler.handle_node_visited)
    event_bus.subscribe(PATH_NODE_DISCOVERED, handler.handle_path_node_discovered)
    event_bus.subscribe(SEARCH_COMPLETED, handler.handle_search_completed)
    publisher = SearchEventPublisher(event_bus, search_id)

    logger.info(f"Search {search_id} started: {request.start_page} -> {request.target_page}")
    try:
        response = await service.find_path(
            request,
            on_progress=publisher.on_progress,
            on_path_discovered=publisher.on_path_discovered,
            cancel_token=cancel_token,
        )
        await publisher.search_completed(response.path, response=response.model_dump(mode="json"))
    except SearchCancelledError as e:
        logger.info(f"Search {search_id} cancelled: {e.message}")
        return
    except InvalidTitleError as e:
        await websocket.send_json({"type": "ERROR", "search_id": search_id, "detail": e.message})

    # A failed send trips the token; the socket is already gone
    if cancel_token.cancelled:
        logger.info(f"Search {search_id} finished after its client disconnected")
        return
    await websocket.close()
