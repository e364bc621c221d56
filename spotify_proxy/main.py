# spotify_proxy/main.py
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spotify_proxy.api.current_track_api import router as current_track_router
from spotify_proxy.api.exceptions import register_exception_handlers
from spotify_proxy.config.logging_config import configure_logging
from spotify_proxy.config.settings import Settings
from spotify_proxy.services.kv_store import RedisKVStore
from spotify_proxy.services.request_gate import RequestGateMiddleware


def create_app(settings: Settings = None, store=None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Spotify Now-Playing Proxy",
        description=(
            "Edge proxy for a portfolio front-end: "
            "• Shared-secret gate "
            "• Spotify access token cache (Redis) "
            "• Currently playing track"
        ),
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.kv_store = store or RedisKVStore.from_settings(settings)

    register_exception_handlers(app)

    # === Middleware ===
    # Added last == outermost: CORS headers land on every response,
    # including the gate's 401s and 500s.
    app.add_middleware(RequestGateMiddleware, shared_secret=settings.shared_secret)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    # === Currently playing ===
    app.include_router(current_track_router, tags=["Spotify"])

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        create_app(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8787")),
    )
