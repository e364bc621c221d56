# spotify_proxy/services/spotify_now_playing.py
import logging

import requests

from spotify_proxy.api.exceptions import UpstreamFetchError
from spotify_proxy.models.track_models import TrackSnapshot

logger = logging.getLogger(__name__)

CURRENTLY_PLAYING_URL = "https://api.spotify.com/v1/me/player/currently-playing"


def fetch_now_playing(access_token: str, timeout: float = 10.0) -> TrackSnapshot:
    """
    Call Spotify's Currently Playing API.

    Returns:
    - TrackSnapshot with is_playing/item/progress_ms on 200
    - TrackSnapshot.not_playing() on 204 (nothing playing)

    Any other status, or a body that is not a JSON object, raises UpstreamFetchError.
    """
    headers = {"Authorization": f"Bearer {access_token}"}

    try:
        r = requests.get(CURRENTLY_PLAYING_URL, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        raise UpstreamFetchError(f"currently-playing request failed: {e}") from e

    logger.info(f"Spotify currently-playing status: {r.status_code}")

    # 204 -> No Content
    if r.status_code == 204:
        return TrackSnapshot.not_playing()

    if not 200 <= r.status_code < 300:
        raise UpstreamFetchError(f"currently-playing returned {r.status_code}")

    try:
        data = r.json()
    except ValueError as e:
        raise UpstreamFetchError("currently-playing returned a non-JSON body") from e

    if not isinstance(data, dict):
        raise UpstreamFetchError("currently-playing returned an unexpected payload")

    return TrackSnapshot(
        is_playing=bool(data.get("is_playing")),
        item=data.get("item"),
        progress_ms=data.get("progress_ms"),
    )
