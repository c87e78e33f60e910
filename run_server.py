import os

import uvicorn

from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=os.getenv("AMBIENT_LOG_LEVEL", "INFO"), job_name="ambient_display")
    port = int(os.getenv("PORT", 8000))
    logger.info("Starting ambient display backend", extra={"port": port})

    uvicorn.run(
        "ambient.main:app",
        host=os.getenv("AMBIENT_HOST", "127.0.0.1"),
        port=port,
        reload=False,
    )
