import os
from pydantic import BaseModel

class BackendConfig(BaseModel):
    """Configuration for the FastAPI backend."""
    
    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    
    # CORS settings
    cors_origins: list = ["http://localhost:3000", "http://localhost:5173"]  # React dev servers
    
    @classmethod
    def from_env(cls) -> "BackendConfig":
        """Create config from environment variables."""
        return cls(
            host=os.getenv("BACKEND_HOST", "0.0.0.0"),
            port=int(os.getenv("BACKEND_PORT", "8000")),
            debug=os.getenv("BACKEND_DEBUG", "false").lower() == "true",
            log_level=os.getenv("BACKEND_LOG_LEVEL", "INFO"),
            cors_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(","),
        )

# Global config instance
config = BackendConfig.from_env()
