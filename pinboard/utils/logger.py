"""
Logging configuration

Importing this module configures the root logger once for the whole
application. Modules obtain their own logger with logging.getLogger(__name__).
"""

import logging

from pinboard.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)

# httpx logs every request at INFO, which drowns out pipeline events
logging.getLogger("httpx").setLevel(logging.WARNING)
