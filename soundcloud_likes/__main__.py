import argparse
import asyncio
import logging
import sys
from pathlib import Path

import devtools
import httpx

from soundcloud_likes.exceptions import LikesLogError
from soundcloud_likes.log import create_likes_log
from soundcloud_likes.schemas import SchemaValidator
from soundcloud_likes.settings import get_settings

logger = logging.getLogger(__name__)


def main(username: str, output_path: Path):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    logger.info(f"Using settings {devtools.pformat(settings.model_dump(exclude={'fallback_script_srcs'}))}")
    asyncio.run(create_likes_log(username=username, output_path=output_path, settings=settings, validator=SchemaValidator()))


def main_script():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Write the liked tracks and playlists of a SoundCloud user to a JSON file")
    parser.add_argument("--username", default=settings.username)
    parser.add_argument("--output-path", type=Path, default=settings.output_path)
    parser.add_argument("--write-schemas", type=Path, metavar="DIR", help="Write the JSON schemas to DIR and exit")
    args = parser.parse_args()
    if args.write_schemas:
        logging.basicConfig(level=settings.log_level)
        SchemaValidator().write_schemas(args.write_schemas)
        return
    if not args.username:
        parser.error("--username is required unless LIKES_LOG_USERNAME is set")
    try:
        main(username=args.username, output_path=args.output_path)
    except (LikesLogError, httpx.HTTPError):
        logger.exception("Failed to create likes log")
        sys.exit(1)


if __name__ == "__main__":
    main_script()
