import asyncio
import logging
from functools import partial
from pathlib import Path

import httpx
from pydantic import TypeAdapter

from soundcloud_likes.client import Client
from soundcloud_likes.concurrency import ordered_map
from soundcloud_likes.credentials import resolve_client_id
from soundcloud_likes.likes import enrich_like, iter_likes
from soundcloud_likes.models import LogEntry
from soundcloud_likes.schemas import SchemaValidator
from soundcloud_likes.settings import Settings, get_settings
from soundcloud_likes.users import resolve_user_id, search_user_id

logger = logging.getLogger(__name__)

LikesLog = TypeAdapter(list[LogEntry])


async def resolve_identity(client: Client, username: str, settings: Settings) -> str:
    """Sets the client id on ``client`` and returns the id of ``username``."""
    fallback_script_srcs = settings.fallback_script_srcs
    if settings.user_id is not None:
        client.client_id = await resolve_client_id(client, fallback_script_srcs)
        return settings.user_id
    if settings.user_resolution == "search":
        client.client_id = await resolve_client_id(client, fallback_script_srcs)
        return await search_user_id(client, username)
    try:
        async with asyncio.TaskGroup() as tg:
            client_id = tg.create_task(resolve_client_id(client, fallback_script_srcs))
            user_id = tg.create_task(resolve_user_id(client, username))
    except ExceptionGroup as group:
        raise group.exceptions[0] from None
    client.client_id = client_id.result()
    return user_id.result()


async def collect_likes(client: Client, user_id: str, settings: Settings) -> list[LogEntry]:
    enrich = partial(enrich_like, client, batch_size=settings.tracks_batch_size)
    likes = iter_likes(client, user_id, limit=settings.page_limit)
    return [like async for like in ordered_map(enrich, likes, limit=settings.concurrency)]


def _write_atomic(path: Path, content: bytes):
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_bytes(content)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


async def write_log(likes: list[LogEntry], output_path: Path):
    content = LikesLog.dump_json(likes, indent=2)
    await asyncio.to_thread(_write_atomic, output_path, content)
    logger.info(f"Wrote {len(likes)} likes to {output_path}")


async def create_likes_log(
    username: str,
    output_path: Path,
    settings: Settings | None = None,
    validator: SchemaValidator | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[LogEntry]:
    """Fetches all likes of ``username``, enriches liked playlists and writes them to ``output_path``."""
    settings = settings or get_settings()
    validator = validator or SchemaValidator()
    logger.info(f"Creating likes log for {username} at {output_path}")
    async with Client(validator=validator, settings=settings, transport=transport) as client:
        user_id = await resolve_identity(client, username, settings)
        likes = await collect_likes(client, user_id, settings)
    await write_log(likes, Path(output_path))
    return likes
