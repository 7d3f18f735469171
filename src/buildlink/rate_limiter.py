"""Sliding-window rate limiting for the share endpoints"""

import asyncio
import logging
import time
from functools import wraps
from fastapi import Request
from fastapi.responses import JSONResponse


def client_ip_key(request: Request):
    """Uses the client IP as the key for rate limiting."""
    return request.client.host if request.client else "unknown"


class SlidingWindowLimiter:
    """Tracks request timestamps per client key."""

    def __init__(self, max_requests: int, window_seconds: int = 3600, key_func=client_ip_key):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.key_func = key_func
        self._requests = {}
        self._lock = asyncio.Lock()

    async def check(self, request: Request):
        """Record a request. Returns seconds to wait if the client is over the limit, else None."""
        client_key = self.key_func(request)
        now = time.time()
        async with self._lock:
            recent = [t for t in self._requests.get(client_key, []) if (now - t) < self.window_seconds]
            if len(recent) >= self.max_requests:
                self._requests[client_key] = recent
                return max(1, int(self.window_seconds - (now - min(recent))))
            recent.append(now)
            self._requests[client_key] = recent
        return None

    async def cleanup(self):
        """Drop clients with no requests inside the window."""
        now = time.time()
        async with self._lock:
            for key in list(self._requests):
                recent = [t for t in self._requests[key] if (now - t) < self.window_seconds]
                if recent:
                    self._requests[key] = recent
                else:
                    del self._requests[key]

    async def cleanup_loop(self, interval_seconds: int = 600):
        """Background task to periodically clean up the tracker."""
        try:
            while True:
                await asyncio.sleep(interval_seconds)
                await self.cleanup()
        except asyncio.CancelledError:
            pass  # Shutdown cleanly


def rate_limit(limiter: SlidingWindowLimiter,
               error_message: str = "Rate limit exceeded. Try again later."):
    """
    Rate limit decorator for FastAPI endpoints.

    Args:
        limiter: Limiter holding the request history.
        error_message: Message to return when rate limited.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request: Request = kwargs.get('request')
            if not request:
                for arg in args:
                    if isinstance(arg, Request):
                        request = arg
                        break
            if not request:
                raise RuntimeError("Request object not found for rate limiting.")

            retry_after = await limiter.check(request)
            if retry_after is not None:
                logging.warning("%s Rate limited on %s", limiter.key_func(request), request.url.path)
                return JSONResponse(
                    status_code=429,
                    content={"detail": error_message},
                    headers={"Retry-After": str(retry_after)}
                )

            return await func(*args, **kwargs)

        return wrapper
    return decorator
