"""
Catalog API — Shared Route Dependencies
=========================================

What:  FastAPI dependencies used by several routes.

require_api_key:
    Guards write endpoints with the X-API-Key header when settings.api_key is
    configured. Missing header → AuthenticationError, wrong key →
    UnauthorizedError; both render as 401 envelopes. Keys are compared with
    hmac.compare_digest (constant time).
"""

import hmac
import logging
from typing import Optional

from fastapi import Header, Query

from app.config import settings
from app.exceptions import AuthenticationError, UnauthorizedError

logger = logging.getLogger(__name__)


async def require_api_key(
    x_api_key: Optional[str] = Header(default=None, alias="X-API-Key"),
) -> None:
    expected = settings.api_key
    if not expected:
        return

    if not x_api_key:
        logger.warning("Missing X-API-Key header on protected endpoint")
        raise AuthenticationError("Missing API key.")

    if not hmac.compare_digest(x_api_key, expected):
        logger.warning("Invalid X-API-Key on protected endpoint")
        raise UnauthorizedError("Invalid API key.")


async def pagination_params(
    page: int = Query(default=1, ge=1, description="1-based page number"),
    per_page: Optional[int] = Query(
        default=None,
        ge=1,
        description="Items per page (capped at MAX_PER_PAGE)",
    ),
) -> dict:
    """page/per_page query parameters with the configured default and cap applied."""
    size = per_page or settings.default_per_page
    return {
        "page": page,
        "per_page": min(size, settings.max_per_page),
        "explicit_per_page": per_page is not None,
    }
