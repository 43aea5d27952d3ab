from intouch.middleware.cache import CacheMiddleware
from intouch.middleware.rate_limiter import RateLimiter

__all__ = ["RateLimiter", "CacheMiddleware"]
