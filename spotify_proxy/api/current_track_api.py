# spotify_proxy/api/current_track_api.py
from fastapi import APIRouter, Depends, Request

from spotify_proxy.models.track_models import CurrentTrackResponse
from spotify_proxy.services.spotify_now_playing import fetch_now_playing
from spotify_proxy.services.spotify_token_service import SpotifyTokenService

router = APIRouter()


def get_token_service(request: Request) -> SpotifyTokenService:
    return SpotifyTokenService(request.app.state.kv_store, request.app.state.settings)


@router.get(
    "/currentTrack",
    summary="Currently playing track",
    description=(
        "Returns what the portfolio owner is listening to on Spotify. "
        "When nothing is playing the body is just {\"isPlaying\": false}."
    ),
    response_model=CurrentTrackResponse,
    response_model_exclude_none=True,
)
def current_track(token_service: SpotifyTokenService = Depends(get_token_service)):
    # 1. 取 token（cache miss 才 refresh）
    access_token = token_service.get_access_token()

    # 2. 抓 currently playing
    snapshot = fetch_now_playing(
        access_token, timeout=token_service.settings.http_timeout_seconds
    )

    # 3. 轉成前端要的格式
    return snapshot.to_response()
