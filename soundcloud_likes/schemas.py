import json
import logging
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any

import pydantic
from pydantic import TypeAdapter

from soundcloud_likes.exceptions import UnknownSchemaError, ValidationError
from soundcloud_likes.models import LikesPage, PlaylistPayload, TrackPayload, UserSearch

logger = logging.getLogger(__name__)


class SchemaId(StrEnum):
    TRACKS = "tracks.schema.json"
    PLAYLIST = "playlist.schema.json"
    LIKES = "likes.schema.json"
    USER_SEARCH = "usersearch.schema.json"


SCHEMAS: dict[str, Any] = {
    SchemaId.TRACKS: list[TrackPayload],
    SchemaId.PLAYLIST: PlaylistPayload,
    SchemaId.LIKES: LikesPage,
    SchemaId.USER_SEARCH: UserSearch,
}


def format_error(error: dict) -> str:
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


class SchemaValidator:
    """Validates raw API payloads against a fixed set of schemas.

    Every schema is compiled once when the validator is created, so a single
    instance should be shared for the lifetime of a run.
    """

    def __init__(self, schemas: Mapping[str, Any] = SCHEMAS):
        self.adapters: dict[str, TypeAdapter] = {schema_id: TypeAdapter(type_) for schema_id, type_ in schemas.items()}
        logger.debug(f"Compiled schemas {list(self.adapters)}")

    def get_adapter(self, schema_id: str) -> TypeAdapter:
        try:
            return self.adapters[schema_id]
        except KeyError:
            raise UnknownSchemaError(f"No validator found for schema {schema_id}") from None

    def validate(self, data: Any, schema_id: str) -> Any:
        adapter = self.get_adapter(schema_id)
        try:
            return adapter.validate_python(data)
        except pydantic.ValidationError as e:
            raise ValidationError(schema_id, [format_error(error) for error in e.errors()]) from e

    def json_schema(self, schema_id: str) -> dict:
        schema = self.get_adapter(schema_id).json_schema()
        return {"$id": str(schema_id), **schema}

    def write_schemas(self, directory: Path) -> list[Path]:
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for schema_id in self.adapters:
            path = directory / schema_id
            path.write_text(json.dumps(self.json_schema(schema_id), indent=2))
            logger.info(f"Wrote schema {schema_id} to {path}")
            paths.append(path)
        return paths
