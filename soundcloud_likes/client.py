import json
import logging
from typing import Any, Callable

import httpx
from pydantic import BaseModel, Field
from starlette.routing import compile_path

from soundcloud_likes.exceptions import RequestFailedError, ResponseDecodeError
from soundcloud_likes.models import LikesPage
from soundcloud_likes.models.track import TrackID
from soundcloud_likes.schemas import SchemaId, SchemaValidator
from soundcloud_likes.settings import Settings, get_settings
from soundcloud_likes.utils import generate_random_user_agent, get_default_kwargs

logger = logging.getLogger(__name__)


class SplitParams(BaseModel):
    client: Any
    path_params: dict = Field(default_factory=dict)
    query_params: dict = Field(default_factory=dict)
    kwargs: dict = Field(default_factory=dict)

    @classmethod
    async def from_route(cls, client: Any, endpoint: Callable, path: str, **kwargs):
        full_kwargs = get_default_kwargs(endpoint) | kwargs
        params = cls(client=client)

        additional_params = await endpoint(client, **kwargs) or {}
        _, _, path_param_names = compile_path(path)
        expected_path_params = set(path_param_names)

        params.kwargs = full_kwargs.pop("kwargs", {})
        # Use kwargs defined in endpoint
        params.kwargs.update(additional_params.pop("kwargs", {}))
        params.path_params = {k: v for k, v in full_kwargs.items() if k in expected_path_params}
        params.query_params = {k: v for k, v in full_kwargs.items() if k not in expected_path_params}
        params.query_params.update(additional_params.get("query", {}))
        # If query params are passed as a dict, move them to the query_params
        params.query_params.update(params.query_params.pop("params", {}))
        return params


def route(method: str, path: str, schema: SchemaId | None = None):
    def wrapper(endpoint_func):
        async def caller(self, **kwargs):
            split_params = await SplitParams.from_route(client=self, endpoint=endpoint_func, path=path, **kwargs)
            url = self.make_url(path, **split_params.path_params)
            logger.info(f"Making request to {url}")
            response = await self.make_request(method, url, params=split_params.query_params, **split_params.kwargs)
            response_data = self.decode(response)
            if not schema:
                return response_data
            return self.validator.validate(response_data, schema)

        return caller

    return wrapper


class Client:
    """Async client for the SoundCloud web site and its ``api-v2`` JSON API.

    API requests carry the ``client_id`` query parameter once it is known,
    plain site requests (html pages, scripts) never do.
    """

    def __init__(
        self,
        validator: SchemaValidator,
        settings: Settings | None = None,
        client_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = settings or get_settings()
        self.validator = validator
        self.client_id = client_id
        self.site_url = settings.site_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={"User-Agent": settings.user_agent or generate_random_user_agent()},
            proxy=settings.proxy,
            transport=transport,
            follow_redirects=True,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self.client.aclose()

    @property
    def params(self) -> dict:
        return {"client_id": self.client_id} if self.client_id else {}

    async def make_request(self, method: str, url: str, **kwargs) -> httpx.Response:
        # Merge into the query of the url, cursors already carry offset and limit
        params = self.params | (kwargs.pop("params", None) or {})
        response = await self.client.request(method, httpx.URL(url).copy_merge_params(params), **kwargs)
        logger.info(f"Response {response.status_code} for {method} {response.url}")
        self.raise_for_status(response)
        return response

    @staticmethod
    def raise_for_status(response: httpx.Response):
        if not response.is_success:
            raise RequestFailedError(response.status_code, response.reason_phrase, str(response.url))

    @staticmethod
    def decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except json.decoder.JSONDecodeError as e:
            logger.error(f"Failed to decode response (status: {response.status_code})\n{response.text}")
            raise ResponseDecodeError(f"Response of {response.url} is not valid JSON") from e

    def make_url(self, path: str, **path_params: Any) -> str:
        return str(self.client.base_url.join(path.format(**path_params)))

    async def fetch_text(self, url: str) -> str:
        """Fetches a site page or script without any API parameters."""
        response = await self.client.get(url)
        logger.info(f"Response {response.status_code} for GET {response.url}")
        self.raise_for_status(response)
        return response.text

    def first_likes_url(self, user_id: str, limit: int = 100) -> str:
        url = httpx.URL(self.make_url("users/{user_id}/likes", user_id=user_id))
        return str(url.copy_merge_params({"limit": limit}))

    async def get_likes_page(self, url: str) -> LikesPage:
        """Fetches one page of a likes collection, ``url`` being a ``next_href`` cursor."""
        response = await self.make_request("GET", url)
        return self.validator.validate(self.decode(response), SchemaId.LIKES)

    @route("GET", "playlists/{playlist_id}", schema=SchemaId.PLAYLIST)
    async def get_playlist(self, playlist_id: int): ...

    @route("GET", "tracks", schema=SchemaId.TRACKS)
    async def get_tracks(self, ids: list[TrackID]):
        return {"query": {"ids": ",".join(str(track_id) for track_id in ids)}}

    @route("GET", "search/users", schema=SchemaId.USER_SEARCH)
    async def search_users(self, q: str, limit: int = 20): ...
