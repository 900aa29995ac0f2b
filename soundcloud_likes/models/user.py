from typing import Literal

from soundcloud_likes.models.base import Entity, Payload


class User(Entity):
    id: int
    kind: Literal["user"]
    permalink_url: str
    username: str


class UserPayload(Payload):
    narrowed = User

    id: int
    kind: Literal["user"]
    permalink: str
    permalink_url: str
    username: str
