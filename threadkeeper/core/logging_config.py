"""Custom logging configuration to reduce noise from health probes."""

import logging
from typing import Optional, Set

from threadkeeper.core.config import settings


class SuppressHealthChecksFilter(logging.Filter):
    """Filter that suppresses successful access logs for liveness probes."""

    def __init__(self, api_prefix: Optional[str] = None):
        super().__init__()
        prefix = settings.API_PREFIX if api_prefix is None else api_prefix
        self.suppressed_patterns: Set[str] = {
            "GET /health",
            f"GET {prefix}/health",
            f"GET {prefix}/healthz",
        }

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress, True to keep."""

        status_code = self._extract_status_code(record)
        message: Optional[str] = None

        if status_code is None:
            # AccessFormatter builds "200 OK" later, so fall back to raw string
            message = record.getMessage()
            if " 200" not in message:
                return True
        elif status_code != 200:
            return True

        if message is None:
            message = record.getMessage()

        for pattern in self.suppressed_patterns:
            if pattern in message:
                return False

        return True

    @staticmethod
    def _extract_status_code(record: logging.LogRecord) -> Optional[int]:
        """Extract numeric status code from uvicorn access log record."""
        args = getattr(record, "args", None)
        if not args:
            return None

        status_candidate = args[-1]

        try:
            return int(status_candidate)
        except (TypeError, ValueError):
            return None


def configure_logging():
    """Configure application logging with health-check suppression."""
    logger = logging.getLogger(__name__)

    access_logger = logging.getLogger("uvicorn.access")
    filter_instance = SuppressHealthChecksFilter()

    for handler in access_logger.handlers:
        handler.addFilter(filter_instance)

    # Suppress external library INFO/DEBUG logs (keep WARNING+)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    # Engine verbosity (DEBUG shows duplicate verdicts and archival transitions)
    logging.getLogger("threadkeeper").setLevel(settings.LOG_LEVEL.upper())

    logger.info(
        f"Logging configured: threadkeeper level {settings.LOG_LEVEL.upper()}, "
        f"{len(filter_instance.suppressed_patterns)} health patterns suppressed"
    )
