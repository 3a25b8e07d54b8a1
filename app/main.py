from __future__ import annotations

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.recommendations.router import router as recommendations_router

setup_logging()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Lawn Care Recommendations API",
        description=(
            "Generates lawn-care recommendations from a lawn profile and current weather "
            "conditions using a hosted language model.\n\n"
            "Design principles:\n"
            "- Recommendations are generated per request and never stored.\n"
            "- Only rate-limit errors expose the upstream message; other failures are "
            "reported generically.\n"
            "- Logging and metrics use route templates and metadata only."
        ),
        debug=settings.is_development,
        openapi_tags=[
            {
                "name": "health",
                "description": (
                    "Basic uptime and readiness checks for load balancers and monitoring."
                ),
            },
            {
                "name": "recommendations",
                "description": "Generate care recommendations for a lawn.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint does not call the language model, so it is safe for "
            "frequent uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(recommendations_router)
    return app


app = create_app()
