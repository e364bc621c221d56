# spotify_proxy/services/kv_store.py
import logging
from typing import Optional

import redis

from spotify_proxy.config.settings import Settings

logger = logging.getLogger(__name__)


class RedisKVStore:
    """
    Thin get/put wrapper over Redis.
    Only two string keys per client identity ever live here:
    the cached access token and the provisioned refresh token.
    """

    def __init__(self, host="localhost", port=6379, password=None, db=0, client=None):
        self.host = host
        self.port = port
        self.password = password
        self.db = db
        self.redis = client or self.get_redis_client()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisKVStore":
        return cls(
            host=settings.redis_host,
            port=settings.redis_port,
            password=settings.redis_password,
            db=settings.redis_db,
        )

    # --------------------------
    # Redis Client
    # --------------------------
    def get_redis_client(self):
        return redis.Redis(
            host=self.host,
            port=self.port,
            password=self.password,
            db=self.db,
            decode_responses=True,
        )

    # --------------------------
    # Read: backend failure counts as a miss
    # --------------------------
    def get(self, key: str) -> Optional[str]:
        try:
            return self.redis.get(key)
        except redis.RedisError as e:
            logger.warning(f"KV read failed for {key!r}, treating as miss: {e}")
            return None

    # --------------------------
    # Write (optionally with TTL in seconds)
    # --------------------------
    def put(self, key: str, value: str, ttl_sec: Optional[int] = None) -> None:
        self.redis.set(key, value, ex=ttl_sec)
