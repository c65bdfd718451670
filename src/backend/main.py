import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import config
from backend.api.search import router as search_router
from wiki_mindmap.config import SearchConfig
from wiki_mindmap.search import PathSearchService

# Configure unified logging to match wiki_mindmap style
from wiki_mindmap.logging_config import setup_logging
setup_logging(level=config.log_level)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info("Starting Wiki MindMap API...")

    # Tests may install their own service before startup
    if getattr(app.state, "search_service", None) is None:
        search_config = SearchConfig.from_env()
        app.state.search_service = PathSearchService(search_config)
        logger.info(f"PathSearchService created for {search_config.base_url}")

    yield

    logger.info("Wiki MindMap API shutdown complete")

# Create FastAPI app
app = FastAPI(
    title="Wiki MindMap API",
    description="Link-path search over the live Wikipedia graph with streamed progress",
    version="0.1.0",
    debug=config.debug,
    lifespan=lifespan
)

# Routers and Middleware
app.include_router(search_router)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Wiki MindMap API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
        "search": "/api/search/path",
        "websocket_example": "ws://localhost:8000/api/search/ws",
    }

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "wiki-mindmap-api",
        "version": "0.1.0",
    }

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred"
        }
    )

if __name__ == "__main__":
    uvicorn.run(
        "backend.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
