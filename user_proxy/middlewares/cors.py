from fastapi.middleware.cors import CORSMiddleware

from user_proxy.config import Settings


def setup_cors(app, settings: Settings):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
