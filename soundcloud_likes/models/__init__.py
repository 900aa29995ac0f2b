from soundcloud_likes.models.like import (
    EnrichedPlaylistLike,
    Like,
    LikePayload,
    LikesPage,
    LogEntry,
    PlaylistLike,
    TrackLike,
)
from soundcloud_likes.models.playlist import EnrichedPlaylist, Playlist, PlaylistPayload
from soundcloud_likes.models.search import UserSearch
from soundcloud_likes.models.track import Track, TrackPayload
from soundcloud_likes.models.user import User, UserPayload

__all__ = [
    "EnrichedPlaylist",
    "EnrichedPlaylistLike",
    "Like",
    "LikePayload",
    "LikesPage",
    "LogEntry",
    "Playlist",
    "PlaylistLike",
    "PlaylistPayload",
    "Track",
    "TrackLike",
    "TrackPayload",
    "User",
    "UserPayload",
    "UserSearch",
]
