"""Run the API with ``python -m server``."""

import os

import uvicorn

from project_context.config import PROJECT_CONTEXT_ROOT
from project_context.utils.logging_config import get_logger

logger = get_logger(__name__)

if __name__ == "__main__":
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info(
        "Starting project-context server",
        extra={
            "host": host,
            "port": port,
            "context_root": str(PROJECT_CONTEXT_ROOT),
        },
    )

    uvicorn.run(
        "server.main:app",
        host=host,
        port=port,
        reload=reload,
        log_config=None,  # Package loggers already have handlers
    )
