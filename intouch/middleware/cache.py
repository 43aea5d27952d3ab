import hashlib
import time
from typing import Dict, Optional, Tuple

from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from intouch.core.config import settings
from intouch.core.logging import get_logger

logger = get_logger("middleware.cache")


class CacheMiddleware(BaseHTTPMiddleware):
    """
    Short-lived cache for anonymous GET responses (catalog, translations).

    Requests carrying credentials are never cached, and the response
    language is part of the key.
    """

    def __init__(self, app, ttl_seconds: Optional[int] = None):
        super().__init__(app)
        self.ttl_seconds = settings.CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.cache: Dict[str, Tuple[float, Response]] = {}
        logger.info(f"Cache middleware initialized with TTL of {self.ttl_seconds} seconds")

    def _get_cache_key(self, request: Request) -> Optional[str]:
        if self.ttl_seconds <= 0 or request.method != "GET":
            return None
        if "authorization" in request.headers:
            return None
        if request.url.path.startswith(("/docs", "/redoc", "/openapi.json", "/v1/health")):
            return None
        key_parts = [request.url.path, request.headers.get("accept-language", "")]
        key_parts.extend(sorted([f"{k}={v}" for k, v in request.query_params.items()]))
        key_string = ":".join(key_parts)
        return hashlib.md5(key_string.encode()).hexdigest()

    async def dispatch(self, request: Request, call_next):
        cache_key = self._get_cache_key(request)
        if not cache_key:
            return await call_next(request)

        current_time = time.time()
        if cache_key in self.cache:
            expiry, cached_response = self.cache[cache_key]
            if current_time < expiry:
                logger.debug(f"Cache hit for {request.url.path}")
                return cached_response
            logger.debug(f"Cache expired for {request.url.path}")
            del self.cache[cache_key]

        response = await call_next(request)

        if 200 <= response.status_code < 300:
            body = b""
            async for chunk in response.body_iterator:
                body += chunk

            self.cache[cache_key] = (
                current_time + self.ttl_seconds,
                Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                ),
            )

            return Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )

        return response
