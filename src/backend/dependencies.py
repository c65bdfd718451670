from fastapi import Request
from wiki_mindmap.search import PathSearchService

async def get_search_service(request: Request) -> PathSearchService:
    """Dependency provider to get the shared PathSearchService instance."""
    return request.app.state.search_service
