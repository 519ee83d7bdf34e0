"""HTTP surface: JSON API under ``/api`` plus the page and scrape routes at the root."""

from fastapi import APIRouter, FastAPI

from . import auth, canvas, dashboard, health, metrics, notes, todos

# (module, prefix under /api)
API_ROUTES = (
    (auth, "/auth"),
    (canvas, "/canvas"),
    (todos, "/todos"),
    (notes, "/notes"),
    (health, "/health"),
)

router = APIRouter()
for module, prefix in API_ROUTES:
    router.include_router(module.router, prefix=prefix, tags=[prefix.strip("/")])


def mount_routes(app: FastAPI) -> None:
    app.include_router(router, prefix="/api")
    app.include_router(dashboard.router, tags=["dashboard"])
    # Prometheus scrapes /metrics without the API prefix
    app.include_router(metrics.router, prefix="/metrics", tags=["metrics"])


__all__ = ["API_ROUTES", "mount_routes", "router"]
