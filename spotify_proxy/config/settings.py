# spotify_proxy/config/settings.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


def load_env():
    if os.getenv("ENVIRONMENT") == "production":
        return

    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    env_path = os.path.join(base_dir, ".env")

    if os.path.exists(env_path):
        load_dotenv(env_path)


@dataclass(frozen=True)
class Settings:
    # Spotify
    client_id: str
    client_secret: str

    # Inbound auth
    shared_secret: str

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    # CORS
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    # Slightly under Spotify's real 3600s lifetime so the cache evicts first
    access_token_ttl_seconds: int = 3500
    http_timeout_seconds: float = 10.0

    log_level: str = "INFO"

    @property
    def access_token_key(self) -> str:
        return f"access_token:{self.client_id}"

    @property
    def refresh_token_key(self) -> str:
        return f"refresh:{self.client_id}"

    @staticmethod
    def from_env() -> "Settings":
        load_env()

        missing = []
        client_id = os.getenv("SPOTIFY_CLIENT_ID")
        if not client_id:
            missing.append("SPOTIFY_CLIENT_ID")
        client_secret = os.getenv("SPOTIFY_CLIENT_SECRET")
        if not client_secret:
            missing.append("SPOTIFY_CLIENT_SECRET")
        shared_secret = os.getenv("PROXY_SHARED_SECRET")
        if not shared_secret:
            missing.append("PROXY_SHARED_SECRET")
        if missing:
            raise RuntimeError(f"Missing environment variables: {', '.join(missing)}")

        origins = [
            o.strip()
            for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
            if o.strip()
        ]

        return Settings(
            client_id=client_id,
            client_secret=client_secret,
            shared_secret=shared_secret,
            redis_host=os.getenv("REDIS_HOST", "localhost"),
            redis_port=int(os.getenv("REDIS_PORT", "6379")),
            redis_password=os.getenv("REDIS_PASSWORD"),
            redis_db=int(os.getenv("REDIS_DB", "0")),
            cors_allow_origins=origins or ["*"],
            access_token_ttl_seconds=int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "3500")),
            http_timeout_seconds=float(os.getenv("SPOTIFY_HTTP_TIMEOUT_SECONDS", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
