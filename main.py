from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notifyhub.config import get_settings
from notifyhub.infrastructure.database import engine, initialize_database
from notifyhub.interfaces.api.dependencies import NotificationServices, build_services
from notifyhub.interfaces.api.errors import register_exception_handlers
from notifyhub.interfaces.api.routes import register_routes
from notifyhub.logging_config import configure_logging


def create_app(services: NotificationServices | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    When ``services`` is given it is used as-is and the lifespan leaves the
    database alone; otherwise tables are created and services are wired
    from the environment settings at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        configure_logging(settings.log_level)
        if services is not None:
            yield
            return
        initialize_database()
        app.state.services = build_services(settings)
        yield
        engine.dispose()

    app = FastAPI(title="notifyhub", lifespan=lifespan)
    if services is not None:
        app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
