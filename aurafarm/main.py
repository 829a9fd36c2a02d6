from fastapi import FastAPI

from aurafarm.api.routes.dashboard import router
from aurafarm.core.middleware import DashboardRateLimitMiddleware
from aurafarm.core.observability import configure_logging
from aurafarm.core.observability import init_sentry
from aurafarm.settings import Settings


def create_app() -> FastAPI:
    settings = Settings()
    configure_logging(settings)
    init_sentry(settings)

    application = FastAPI(title="aurafarm")
    application.add_middleware(
        DashboardRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    application.include_router(router)
    return application


app = create_app()
