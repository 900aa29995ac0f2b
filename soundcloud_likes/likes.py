import logging
from collections.abc import AsyncIterator

from soundcloud_likes.client import Client
from soundcloud_likes.exceptions import ResolutionError
from soundcloud_likes.models import EnrichedPlaylist, EnrichedPlaylistLike, Like, LikePayload, LogEntry, PlaylistLike
from soundcloud_likes.models.track import Track, TrackID
from soundcloud_likes.utils import chunk_list

logger = logging.getLogger(__name__)


async def iter_like_pages(client: Client, user_id: str, limit: int = 100) -> AsyncIterator[list[LikePayload]]:
    """Walks the likes collection of a user page by page, following ``next_href``."""
    cursor: str | None = client.first_likes_url(user_id, limit=limit)
    n_pages = n_likes = 0
    while cursor is not None:
        page = await client.get_likes_page(cursor)
        n_pages += 1
        n_likes += len(page.collection)
        logger.info(f"Found {len(page.collection)} likes (page = {n_pages}, total = {n_likes})")
        yield page.collection
        cursor = page.next_href


async def iter_likes(client: Client, user_id: str, limit: int = 100) -> AsyncIterator[Like]:
    async for collection in iter_like_pages(client, user_id, limit=limit):
        for like in collection:
            yield like.narrow()


async def load_tracks(client: Client, track_ids: list[TrackID], batch_size: int = 50) -> list[Track]:
    """Loads the tracks with the given ids, in the order of ``track_ids``."""
    if not track_ids:
        return []
    loaded: dict[TrackID, Track] = {}
    for chunk in chunk_list(track_ids, batch_size):
        for track in await client.get_tracks(ids=chunk):
            loaded[track.id] = track.narrow()
    tracks = []
    for track_id in track_ids:
        if track_id not in loaded:
            raise ResolutionError(f"could not load track for track id {track_id}")
        tracks.append(loaded[track_id])
    return tracks


async def enrich_like(client: Client, like: Like, batch_size: int = 50) -> LogEntry:
    """Attaches the tracks of a liked playlist, track likes are returned as is."""
    if not isinstance(like, PlaylistLike):
        return like
    playlist = like.playlist
    loaded_playlist = await client.get_playlist(playlist_id=playlist.id)
    tracks = await load_tracks(client, loaded_playlist.track_ids, batch_size=batch_size)
    if len(tracks) != playlist.track_count:
        logger.warning(f"Playlist {playlist.permalink_url} lists {playlist.track_count} tracks, loaded {len(tracks)}")
    logger.info(f"Loaded {len(tracks)} tracks for playlist {playlist.title!r}")
    return EnrichedPlaylistLike(
        created_at=like.created_at,
        kind=like.kind,
        playlist=EnrichedPlaylist(**playlist.model_dump(), tracks=tracks),
    )
