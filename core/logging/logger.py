import logging
import os
import sys

def setup_logging(level: str | None = None):
    """Configure basic logging for the application."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(funcName)s - %(lineno)d - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # httpx logs every SSE request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
