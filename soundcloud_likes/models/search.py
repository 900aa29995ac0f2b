from pydantic import BaseModel

from soundcloud_likes.models.user import UserPayload


class UserSearch(BaseModel):
    collection: list[UserPayload]
    next_href: str | None = None
    query_urn: str | None = None
    total_results: int | None = None
