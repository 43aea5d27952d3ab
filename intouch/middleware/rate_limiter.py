import time
from typing import Dict, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from fastapi import status

from intouch.core.config import settings
from intouch.core.logging import get_logger
from intouch.core.error_handlers import ErrorHandler, localized_message

logger = get_logger("middleware.rate_limiter")

EXEMPT_PATHS = ("/docs", "/redoc", "/openapi.json", "/v1/health")


class RateLimiter(BaseHTTPMiddleware):
    """Fixed one-minute window per client address"""

    def __init__(self, app, requests_per_minute: int = None):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute or settings.RATE_LIMIT_PER_MINUTE
        self.clients: Dict[str, Tuple[int, float]] = {}
        logger.info(f"Rate limiter initialized with {self.requests_per_minute} requests per minute")

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(EXEMPT_PATHS):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        current_time = time.time()

        count, start_time = self.clients.get(client_ip, (0, current_time))

        if current_time - start_time > 60:
            self.clients[client_ip] = (1, current_time)
        else:
            count += 1
            if count > self.requests_per_minute:
                logger.warning(f"Rate limit exceeded for {client_ip}")
                return ErrorHandler.create_error_response(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    message=localized_message(request, "tooManyRequests", "Rate limit exceeded"),
                    error_code="tooManyRequests",
                )
            self.clients[client_ip] = (count, start_time)

        return await call_next(request)
