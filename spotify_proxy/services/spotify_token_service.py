# spotify_proxy/services/spotify_token_service.py
import base64
import logging
from typing import Optional

import redis
import requests

from spotify_proxy.api.exceptions import MissingRefreshTokenError, UpstreamAuthError
from spotify_proxy.config.settings import Settings

logger = logging.getLogger(__name__)

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"


class SpotifyTokenService:
    """
    Access token cache with refresh-on-miss.

    Two requests that both miss the cache will both refresh; each writes
    its own valid token and the last write wins. There is no single-flight
    lock around the refresh.
    """

    def __init__(self, store, settings: Settings):
        self.store = store
        self.settings = settings

    # --------- Cache accessors ---------
    def get_cached_access_token(self) -> Optional[str]:
        return self.store.get(self.settings.access_token_key) or None

    def get_stored_refresh_token(self) -> Optional[str]:
        return self.store.get(self.settings.refresh_token_key) or None

    def store_access_token(self, token: str, ttl_sec: Optional[int] = None) -> None:
        ttl_sec = ttl_sec or self.settings.access_token_ttl_seconds
        self.store.put(self.settings.access_token_key, token, ttl_sec=ttl_sec)

    def store_refresh_token(self, refresh_token: str) -> None:
        # No TTL: refresh tokens are long-lived and provisioned by an operator
        self.store.put(self.settings.refresh_token_key, refresh_token)

    # --------- Refresh ---------
    def _basic_auth_header(self) -> str:
        raw = f"{self.settings.client_id}:{self.settings.client_secret}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("utf-8")

    def refresh(self) -> str:
        refresh_token = self.get_stored_refresh_token()
        if not refresh_token:
            raise MissingRefreshTokenError(
                f"no refresh token for '{self.settings.client_id}'"
            )

        data = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        }
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": self._basic_auth_header(),
        }

        logger.info("Refreshing Spotify access token")
        try:
            r = requests.post(
                SPOTIFY_TOKEN_URL,
                data=data,
                headers=headers,
                timeout=self.settings.http_timeout_seconds,
            )
        except requests.RequestException as e:
            raise UpstreamAuthError(f"token request failed: {e}") from e

        if not r.ok:
            raise UpstreamAuthError(f"token endpoint returned {r.status_code}")

        try:
            token_data = r.json()
        except ValueError as e:
            raise UpstreamAuthError("token endpoint returned a non-JSON body") from e

        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not access_token:
            raise UpstreamAuthError("token response has no access_token")

        try:
            self.store_access_token(access_token)
        except redis.RedisError as e:
            # The token is still good for this request; the next one refreshes again
            logger.warning(f"Failed to cache access token: {e}")

        return access_token

    def get_access_token(self) -> str:
        cached = self.get_cached_access_token()
        if cached:
            logger.debug("Access token cache hit")
            return cached

        logger.info("Access token cache miss")
        return self.refresh()
