from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LINKSTASH_", env_file=".env", extra="ignore"
    )

    # Storage
    input_path: Path = Path("input.txt")
    links_path: Path = Path("links.json")

    # HTTP fetcher
    http_timeout: float = 10.0
    http_max_retries: int = 0  # 0 keeps every extraction to a single GET
    http_verify_ssl: bool = True
    web_user_agent: str = (
        "Mozilla/5.0 (compatible; LinkStash/1.0; +https://github.com/linkstash)"
    )
    twitter_user_agent: str = "LinkStash/1.0"
    twitter_api_base: str = "https://api.fxtwitter.com"

    # Logging
    log_level: str = "INFO"


settings = Settings()
