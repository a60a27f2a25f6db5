from .limits import SlidingWindowRateLimiter
from .connections import ConnectionManager

__all__ = ["ConnectionManager", "SlidingWindowRateLimiter"]
