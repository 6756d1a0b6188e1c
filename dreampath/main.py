"""Main FastAPI application for the DreamPath API."""
from fastapi import FastAPI

from dreampath.api.errors import register_exception_handlers
from dreampath.api.routes.analytics import router as analytics_router
from dreampath.api.routes.health import router as health_router
from dreampath.api.routes.plan import router as plan_router
from dreampath.api.routes.week_tasks import router as week_tasks_router
from dreampath.core.config import settings
from dreampath.core.logging import configure_logging
from dreampath.core.middleware import CORSHeadersMiddleware, RequestContextMiddleware
from dreampath.observability.client import init_opik

configure_logging(log_level=settings.log_level)

app = FastAPI(title=settings.app_name, version=settings.app_version)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(CORSHeadersMiddleware)
register_exception_handlers(app)
app.include_router(health_router)
app.include_router(plan_router)
app.include_router(week_tasks_router)
app.include_router(analytics_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()
