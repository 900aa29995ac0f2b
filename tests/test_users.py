import pytest
from conftest import SITE_URL, USER_ID, FakeSoundCloud, make_user

from soundcloud_likes.client import Client
from soundcloud_likes.exceptions import RequestFailedError, ResolutionError
from soundcloud_likes.users import resolve_user_id, search_user_id


async def test_user_id_from_profile_page(client: Client, fake: FakeSoundCloud):
    fake.add_site({}, username="someone", user_id="98765")

    assert await resolve_user_id(client, "someone") == "98765"
    (request,) = fake.requests
    assert str(request.url) == f"{SITE_URL}/someone"


async def test_profile_without_deep_link(client: Client, fake: FakeSoundCloud):
    fake.texts[f"{SITE_URL}/someone"] = "<html>nothing to see</html>"

    with pytest.raises(ResolutionError, match='could not resolve user id for user name "someone"'):
        await resolve_user_id(client, "someone")


async def test_unknown_profile(client: Client):
    with pytest.raises(RequestFailedError) as exc_info:
        await resolve_user_id(client, "nobody")
    assert exc_info.value.status_code == 404


async def test_user_id_from_search(client: Client, fake: FakeSoundCloud):
    fake.users = [make_user(1), make_user(int(USER_ID))]

    assert await search_user_id(client, f"user-{USER_ID}") == USER_ID
    (request,) = fake.requests_to("/search/users")
    assert request.url.params["q"] == f"user-{USER_ID}"


async def test_search_without_exact_permalink_match(client: Client, fake: FakeSoundCloud):
    fake.users = [make_user(1)]

    with pytest.raises(ResolutionError, match='could not resolve user id for user name "user-2"'):
        await search_user_id(client, "user-2")
