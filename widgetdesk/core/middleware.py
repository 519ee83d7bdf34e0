"""FastAPI middleware."""

import time

from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.routing import Match

from .config import get_server_settings
from .security import bearer_token

REQUEST_COUNT = Counter(
    "widgetdesk_http_requests_total",
    "HTTP requests by route template and status",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "widgetdesk_http_request_duration_seconds",
    "HTTP request latency in seconds by route template",
    ["method", "endpoint"],
)

# Paths that never carry a session
PUBLIC_PATH_PREFIXES = (
    "/api/auth/token",
    "/api/health",
    "/metrics",
    "/docs",
    "/redoc",
    "/openapi.json",
)


class AuthMiddleware(BaseHTTPMiddleware):
    """Put the caller's token, if any, on ``request.state.token``.

    Requests are never rejected here; routes decide through
    ``get_current_user`` or ``get_optional_user``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not request.url.path.startswith(PUBLIC_PATH_PREFIXES):
            request.state.token = bearer_token(
                request.headers.get("authorization")
            ) or request.cookies.get(get_server_settings().auth_cookie_name)
        return await call_next(request)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Count and time requests per route template."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        endpoint = route_template(request)
        started = time.perf_counter()
        response = await call_next(request)

        REQUEST_COUNT.labels(request.method, endpoint, response.status_code).inc()
        REQUEST_LATENCY.labels(request.method, endpoint).observe(
            time.perf_counter() - started
        )
        return response


def route_template(request: Request) -> str:
    """Path with placeholders (``/api/notes/{note_id}``), so ids share a label."""
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return request.url.path
