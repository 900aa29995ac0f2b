from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Tag

from soundcloud_likes.models.base import Entity, Payload
from soundcloud_likes.models.playlist import BasePlaylistPayload, EnrichedPlaylist, Playlist
from soundcloud_likes.models.track import Track, TrackPayload


def get_like_subject(value: Any) -> str | None:
    """Tells whether a like (raw or validated) refers to a track or a playlist."""
    if isinstance(value, dict):
        playlist, track = value.get("playlist"), value.get("track")
    else:
        playlist, track = getattr(value, "playlist", None), getattr(value, "track", None)
    if playlist is not None:
        return "playlist"
    if track is not None:
        return "track"
    return None


LikeSubject = Discriminator(
    get_like_subject,
    custom_error_type="like_subject",
    custom_error_message="Like must reference either a track or a playlist",
)


class BaseLike(Entity):
    created_at: datetime
    kind: Literal["like"]


class TrackLike(BaseLike):
    track: Track


class PlaylistLike(BaseLike):
    playlist: Playlist


class EnrichedPlaylistLike(BaseLike):
    playlist: EnrichedPlaylist


Like = Annotated[
    Annotated[TrackLike, Tag("track")] | Annotated[PlaylistLike, Tag("playlist")],
    LikeSubject,
]
LogEntry = Annotated[
    Annotated[TrackLike, Tag("track")] | Annotated[EnrichedPlaylistLike, Tag("playlist")],
    LikeSubject,
]


class BaseLikePayload(Payload):
    created_at: datetime
    kind: Literal["like"]


class TrackLikePayload(BaseLikePayload):
    narrowed = TrackLike

    track: TrackPayload


class PlaylistLikePayload(BaseLikePayload):
    narrowed = PlaylistLike

    playlist: BasePlaylistPayload


LikePayload = Annotated[
    Annotated[TrackLikePayload, Tag("track")] | Annotated[PlaylistLikePayload, Tag("playlist")],
    LikeSubject,
]


class LikesPage(BaseModel):
    collection: list[LikePayload]
    next_href: str | None = None
    query_urn: str | None = None
