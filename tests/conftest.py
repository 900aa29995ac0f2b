import asyncio

import httpx
import pytest

from soundcloud_likes.client import Client
from soundcloud_likes.schemas import SchemaValidator
from soundcloud_likes.settings import Settings

API_URL = "https://api-v2.soundcloud.com"
SITE_URL = "https://soundcloud.com"
FALLBACK_SCRIPT = "https://a-v2.sndcdn.com/assets/fallback.js"
CLIENT_ID = "test-client-id"
USER_ID = "123456"


def make_user(user_id: int = 1) -> dict:
    return {
        "avatar_url": f"https://i1.sndcdn.com/avatars-{user_id}-large.jpg",
        "badges": {"pro": False, "pro_unlimited": True, "verified": False},
        "followers_count": 42,
        "id": user_id,
        "kind": "user",
        "permalink": f"user-{user_id}",
        "permalink_url": f"{SITE_URL}/user-{user_id}",
        "urn": f"soundcloud:users:{user_id}",
        "username": f"User {user_id}",
    }


def make_track(track_id: int, user_id: int = 1) -> dict:
    return {
        "artwork_url": None,
        "duration": 360000,
        "genre": "Techno",
        "id": track_id,
        "kind": "track",
        "media": {"transcodings": []},
        "permalink": f"track-{track_id}",
        "permalink_url": f"{SITE_URL}/user-{user_id}/track-{track_id}",
        "playback_count": 1000,
        "title": f"Track {track_id}",
        "user": make_user(user_id),
    }


def make_playlist(playlist_id: int, track_ids: list[int], user_id: int = 2, with_tracks: bool = True) -> dict:
    playlist = {
        "artwork_url": None,
        "duration": 720000,
        "id": playlist_id,
        "is_album": False,
        "kind": "playlist",
        "permalink": f"playlist-{playlist_id}",
        "permalink_url": f"{SITE_URL}/user-{user_id}/sets/playlist-{playlist_id}",
        "set_type": "",
        "title": f"Playlist {playlist_id}",
        "track_count": len(track_ids),
        "user": make_user(user_id),
    }
    if with_tracks:
        playlist["tracks"] = [{"id": track_id, "kind": "track", "policy": "ALLOW"} for track_id in track_ids]
    return playlist


def make_track_like(track_id: int, created_at: str = "2024-05-01T10:00:00Z") -> dict:
    return {"created_at": created_at, "kind": "like", "track": make_track(track_id)}


def make_playlist_like(playlist_id: int, track_ids: list[int], created_at: str = "2024-05-02T10:00:00Z") -> dict:
    return {
        "created_at": created_at,
        "kind": "like",
        "playlist": make_playlist(playlist_id, track_ids, with_tracks=False),
    }


class FakeSoundCloud:
    """In-memory stand-in for the SoundCloud site and api, used as a mock transport handler."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.pages: dict[str, dict] = {}
        self.playlists: dict[int, dict] = {}
        self.tracks: dict[int, dict] = {}
        self.users: list[dict] = []
        self.texts: dict[str, str] = {}
        self.failures: dict[str, int] = {}
        self.delays: dict[int, float] = {}
        self.text_delays: dict[str, float] = {}

    def add_like_pages(self, *collections: list[dict], user_id: str = USER_ID, limit: int = 100):
        for i, collection in enumerate(collections):
            is_last = i == len(collections) - 1
            next_offset = (i + 1) * limit
            self.pages[str(i * limit)] = {
                "collection": collection,
                "next_href": None
                if is_last
                else f"{API_URL}/users/{user_id}/likes?offset={next_offset}&limit={limit}",
                "query_urn": None,
            }

    def add_playlist(self, playlist_id: int, track_ids: list[int]):
        self.playlists[playlist_id] = make_playlist(playlist_id, track_ids)
        for track_id in track_ids:
            self.tracks[track_id] = make_track(track_id)

    def add_site(self, scripts: dict[str, str], username: str = "someone", user_id: str = USER_ID):
        tags = "".join(f'<script crossorigin src="{src}"></script>' for src in scripts)
        self.texts[f"{SITE_URL}/"] = f"<html><head></head><body>{tags}</body></html>"
        self.texts.update(scripts)
        self.texts[f"{SITE_URL}/{username}"] = (
            f'<html><head><meta property="al:ios:url" content="soundcloud://users:{user_id}"></head></html>'
        )

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = request.url
        key = f"{url.scheme}://{url.host}{url.path}"
        if key in self.failures:
            return httpx.Response(self.failures[key])
        if url.host != "api-v2.soundcloud.com":
            if delay := self.text_delays.get(key):
                await asyncio.sleep(delay)
            if key in self.texts:
                return httpx.Response(200, text=self.texts[key])
            return httpx.Response(404)
        if url.path.endswith("/likes"):
            offset = url.params.get("offset", "0")
            if (status := self.failures.get(f"likes?offset={offset}")) is not None:
                return httpx.Response(status)
            return httpx.Response(200, json=self.pages[offset])
        if url.path.startswith("/playlists/"):
            playlist_id = int(url.path.rsplit("/", 1)[-1])
            if delay := self.delays.get(playlist_id):
                await asyncio.sleep(delay)
            return httpx.Response(200, json=self.playlists[playlist_id])
        if url.path == "/tracks":
            ids = [int(track_id) for track_id in url.params["ids"].split(",")]
            # The api does not keep the order of the requested ids
            return httpx.Response(200, json=[self.tracks[i] for i in reversed(ids) if i in self.tracks])
        if url.path == "/search/users":
            return httpx.Response(200, json={"collection": self.users, "next_href": None, "total_results": 1})
        return httpx.Response(404)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        base_url=API_URL,
        site_url=SITE_URL,
        user_agent="pytest",
        fallback_script_srcs=[FALLBACK_SCRIPT],
    )


@pytest.fixture
def validator() -> SchemaValidator:
    return SchemaValidator()


@pytest.fixture
def fake() -> FakeSoundCloud:
    return FakeSoundCloud()


@pytest.fixture
async def client(settings: Settings, validator: SchemaValidator, fake: FakeSoundCloud):
    async with Client(
        validator=validator, settings=settings, client_id=CLIENT_ID, transport=httpx.MockTransport(fake)
    ) as client:
        yield client
