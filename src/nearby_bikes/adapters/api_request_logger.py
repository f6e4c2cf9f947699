"""Utility for logging API requests when NEARBY_BIKES_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


def should_log_requests() -> bool:
    """Check if request logging is enabled via NEARBY_BIKES_LOG_REQUESTS environment variable."""
    return os.getenv("NEARBY_BIKES_LOG_REQUESTS", "").lower() == "true"


def _build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with query parameters."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def log_api_request(method: str, url: str, params: dict[str, Any] | None = None) -> None:
    """Log an outgoing request if NEARBY_BIKES_LOG_REQUESTS is enabled."""
    if not should_log_requests():
        return
    logger.info(f"API Request: {method} {_build_url_with_params(url, params)}")


def log_api_response(url: str, status: int, duration_ms: float) -> None:
    """Log a response status and timing if NEARBY_BIKES_LOG_REQUESTS is enabled."""
    if not should_log_requests():
        return
    logger.info(f"API Response: {status} from {url} in {duration_ms:.0f}ms")
