import logging
import re

from soundcloud_likes.client import Client
from soundcloud_likes.concurrency import first_success
from soundcloud_likes.exceptions import AllAttemptsFailedError, RequestFailedError, ResolutionError

logger = logging.getLogger(__name__)

SCRIPT_REGEX = re.compile(r'<script crossorigin src="(.+?)">')
CLIENT_ID_REGEX = re.compile(r'client_id:"(.+?)"')


async def get_script_srcs(client: Client, fallback_script_srcs: list[str]) -> list[str]:
    """Collects the script urls referenced by the landing page, in document order."""
    try:
        site = await client.fetch_text(f"{client.site_url}/")
    except RequestFailedError as e:
        logger.warning(f"Could not load landing page ({e}), using fallback scripts")
        return fallback_script_srcs
    script_srcs = SCRIPT_REGEX.findall(site)
    if not script_srcs:
        logger.warning("No scripts found on landing page, using fallback scripts")
        return fallback_script_srcs
    return script_srcs


async def get_client_id_from_script(client: Client, script_src: str) -> str:
    script = await client.fetch_text(script_src)
    if not (match := CLIENT_ID_REGEX.search(script)):
        raise ResolutionError(f"client_id not found in {script_src}")
    return match.group(1)


async def resolve_client_id(client: Client, fallback_script_srcs: list[str]) -> str:
    """Scrapes a public client id from the scripts bundled with the web site."""
    script_srcs = await get_script_srcs(client, fallback_script_srcs)
    logger.info(f"Searching client_id in {len(script_srcs)} scripts")
    try:
        client_id = await first_success(get_client_id_from_script(client, src) for src in script_srcs)
    except AllAttemptsFailedError as e:
        raise ResolutionError(f"Could not find client_id within scripts {script_srcs}") from e
    logger.info("Resolved client_id")
    return client_id
