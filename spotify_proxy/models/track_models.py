# spotify_proxy/models/track_models.py
from pydantic import BaseModel
from typing import Any, Dict, Optional


# 對外回傳的格式；沒在播放時只有 isPlaying=false
class CurrentTrackResponse(BaseModel):
    isPlaying: bool
    currentTrack: Optional[Dict[str, Any]] = None
    currentTrackProgress: Optional[int] = None


class TrackSnapshot(BaseModel):
    is_playing: bool
    item: Optional[Dict[str, Any]] = None   # Spotify track object, passed through as-is
    progress_ms: Optional[int] = None

    @classmethod
    def not_playing(cls) -> "TrackSnapshot":
        return cls(is_playing=False)

    def to_response(self) -> CurrentTrackResponse:
        if not self.is_playing and self.item is None:
            return CurrentTrackResponse(isPlaying=False)
        return CurrentTrackResponse(
            isPlaying=self.is_playing,
            currentTrack=self.item,
            currentTrackProgress=self.progress_ms,
        )
