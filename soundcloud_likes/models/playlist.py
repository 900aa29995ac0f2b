from typing import Literal

from soundcloud_likes.models.base import Entity, Payload
from soundcloud_likes.models.track import Track, TrackReference
from soundcloud_likes.models.user import User, UserPayload


class Playlist(Entity):
    id: int
    kind: Literal["playlist"]
    permalink_url: str
    title: str
    track_count: int
    user: User


class EnrichedPlaylist(Playlist):
    tracks: list[Track]


class BasePlaylistPayload(Payload):
    narrowed = Playlist

    id: int
    kind: Literal["playlist"]
    permalink_url: str
    title: str
    track_count: int
    user: UserPayload


class PlaylistPayload(BasePlaylistPayload):
    tracks: list[TrackReference]

    @property
    def track_ids(self) -> list[int]:
        return [track.id for track in self.tracks]
