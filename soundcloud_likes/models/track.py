from typing import Literal

from soundcloud_likes.models.base import Entity, Payload
from soundcloud_likes.models.user import User, UserPayload

type TrackID = int


class Track(Entity):
    id: int
    kind: Literal["track"]
    permalink_url: str
    title: str
    user: User


class TrackPayload(Payload):
    narrowed = Track

    id: TrackID
    kind: Literal["track"]
    permalink_url: str
    title: str
    user: UserPayload


class TrackReference(Payload):
    """Playlist member as embedded in a playlist, possibly without details."""

    id: TrackID
