"""
FastAPI application for the travel CMS: public catalogue, reviews and forms,
plus the admin back office.
"""
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from travel_cms.api.middleware import register_exception_handlers
from travel_cms.api.routes import (
    admin,
    blog,
    contact,
    destinations,
    enquiries,
    packages,
    reviews,
    search,
    settings as site_settings,
    testimonials,
)
from travel_cms.lib.events import get_event_bus
from travel_cms.lib.logging import get_logger, set_correlation_id
from travel_cms.lib.metrics import get_metrics_collector
from travel_cms.lib.settings import settings
from travel_cms.services.revalidation_service import RevalidationService

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# enquiries precedes packages so /packages/enquiry is never read as a slug
ROUTERS = (
    reviews, search, enquiries, packages, destinations, blog, contact, testimonials,
    site_settings, admin,
)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with a correlation id (taken from X-Correlation-ID or
    generated) and echo it on the response.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        set_correlation_id(correlation_id)
        started = time.perf_counter()

        logger.info(
            "Incoming request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            logger.info(
                "Response sent",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                },
            )
        finally:
            set_correlation_id(None)

        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Subscribe page revalidation to content events while the app runs."""
    bus = get_event_bus()
    revalidator = RevalidationService()
    revalidator.register(bus)
    logger.info(
        f"{settings.app_name} starting up",
        extra={"revalidation": "enabled" if revalidator.url else "disabled"},
    )
    try:
        yield
    finally:
        revalidator.unregister(bus)
        logger.info(f"{settings.app_name} shutting down")


app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Content management and review moderation APIs for the travel site",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

for module in ROUTERS:
    app.include_router(module.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/metrics", include_in_schema=False)
def metrics_endpoint():
    """Counters in Prometheus text exposition format."""
    return PlainTextResponse(
        content=get_metrics_collector().export_prometheus(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
