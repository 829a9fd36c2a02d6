import hashlib
from collections import defaultdict
from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Iterable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


GITHUB_BACKED_PATHS = ("/dashboard/me",)


class SlidingWindow:
    """Counts hits per key over the last `window_seconds`."""

    def __init__(self, max_hits: int, window_seconds: int) -> None:
        # Zero or negative config values are clamped to 1.
        self.max_hits = max(1, max_hits)
        self.window_seconds = max(1, window_seconds)
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._lock = RLock()

    def hit(self, key: str, now: float) -> int | None:
        """Record a hit and return None, or return seconds to wait when full."""

        with self._lock:
            hits = self._hits[key]
            cutoff = now - self.window_seconds
            while hits and hits[0] <= cutoff:
                hits.popleft()

            if len(hits) >= self.max_hits:
                return max(1, int(self.window_seconds - (now - hits[0])))

            hits.append(now)
            return None


class DashboardRateLimitMiddleware(BaseHTTPMiddleware):
    """Limit requests that reach GitHub on the caller's behalf.

    Requests carrying a bearer token are counted per token, since every one of
    them spends that token's GitHub quota; anonymous requests are counted per
    client IP.
    """

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        paths: Iterable[str] = GITHUB_BACKED_PATHS,
    ) -> None:
        super().__init__(app)
        self.window = SlidingWindow(requests_per_window, window_seconds)
        self.paths = frozenset(paths)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or request.url.path not in self.paths:
            return await call_next(request)

        retry_after = self.window.hit(self.client_key(request), monotonic())
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    @staticmethod
    def client_key(request: Request) -> str:
        scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            digest = hashlib.sha256(credentials.strip().encode("utf-8")).hexdigest()
            return f"token:{digest[:32]}"

        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return f"ip:{forwarded_for.split(',')[0].strip() or 'unknown'}"

        if request.client and request.client.host:
            return f"ip:{request.client.host}"

        return "ip:unknown"
