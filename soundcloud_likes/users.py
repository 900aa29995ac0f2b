import logging
import re

from soundcloud_likes.client import Client
from soundcloud_likes.exceptions import ResolutionError

logger = logging.getLogger(__name__)

USER_ID_REGEX = re.compile(r"soundcloud://users:(\d+)")


async def resolve_user_id(client: Client, username: str) -> str:
    """Finds the numeric id of a user in the deep link of their profile page."""
    page = await client.fetch_text(f"{client.site_url}/{username}")
    if not (match := USER_ID_REGEX.search(page)):
        raise ResolutionError(f'could not resolve user id for user name "{username}"')
    user_id = match.group(1)
    logger.info(f"Resolved user {username} to id {user_id}")
    return user_id


async def search_user_id(client: Client, username: str) -> str:
    """Finds the numeric id of a user through the user search API.

    Requires ``client.client_id`` to be set.
    """
    result = await client.search_users(q=username)
    user = next((user for user in result.collection if user.permalink == username), None)
    if user is None:
        raise ResolutionError(f'could not resolve user id for user name "{username}"')
    logger.info(f"Resolved user {username} to id {user.id}")
    return str(user.id)
