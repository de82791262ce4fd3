"""
ASGI entry point.

    uvicorn kams_pos.main:app --reload

or

    python -m kams_pos.main
"""

import logging
import os

from .app_factory import create_app
from .logging_config import setup_logging

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)

app = create_app()


def run() -> None:
    """Create missing tables and serve the API with uvicorn."""
    import uvicorn

    from .db import init_db

    init_db()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info("Starting KAMS POS on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
