from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# soundcloud.com blocks some CI runner ip addresses, but the CDN scripts stay reachable
FALLBACK_SCRIPT_SRCS = [
    "https://a-v2.sndcdn.com/assets/0-18778ebb.js",
    "https://a-v2.sndcdn.com/assets/3-d97f3637.js",
    "https://a-v2.sndcdn.com/assets/50-d480c257.js",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LIKES_LOG_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    base_url: str = "https://api-v2.soundcloud.com"
    site_url: str = "https://soundcloud.com"

    username: str | None = None
    output_path: Path = Path("likes.json")
    user_id: str | None = None
    user_resolution: Literal["profile", "search"] = "profile"

    page_limit: int = 100
    concurrency: int = 5
    tracks_batch_size: int = 50
    fallback_script_srcs: list[str] = FALLBACK_SCRIPT_SRCS

    proxy: str | None = None
    user_agent: str | None = None
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings():
    return Settings()
