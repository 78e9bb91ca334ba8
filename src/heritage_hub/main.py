"""HeritageBox Automation Server - Main Entry Point."""

import os

from heritage_hub.config.settings import settings
from heritage_hub.server.app import create_app

# Create FastAPI application
app = create_app(settings)


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    reload = os.getenv("RELOAD", "false").lower() == "true"

    uvicorn.run(
        "heritage_hub.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=5,
        access_log=False,  # Structured logging covers requests
    )


if __name__ == "__main__":
    run()
