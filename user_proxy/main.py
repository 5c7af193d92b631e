from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from user_proxy import __version__
from user_proxy.config import Settings
from user_proxy.exceptions import setup_exception_handlers
from user_proxy.http_client import HttpClient
from user_proxy.logging_config import configure_logging, log_structured
from user_proxy.middlewares.cors import setup_cors
from user_proxy.middlewares.request_id import request_id_middleware
from user_proxy.routes import health, user_routes
from user_proxy.services.user_service import UserService


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await app.state.http_client.start()
    log_structured("Proxy started", upstream=app.state.settings.users_url)

    yield

    # Shutdown
    await app.state.http_client.stop()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.environment, settings.log_level)

    app = FastAPI(
        title="User Proxy",
        version=__version__,
        lifespan=lifespan
    )

    http_client = HttpClient(timeout=settings.request_timeout)
    app.state.settings = settings
    app.state.http_client = http_client
    app.state.user_service = UserService(http_client, settings)

    setup_cors(app, settings)
    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(user_routes.router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
