from pathlib import Path
from typing import Literal, Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content source
    CONTENT_BACKEND: Literal["filesystem", "couchdb"] = "filesystem"
    CONTENT_DIR: str = "src/content/blog"
    CONTENT_EXTENSIONS: str = ".md,.mdx"
    STRICT_LOAD: bool = True
    STORE_TIMEOUT_SECONDS: float = 10.0

    # Listings
    INCLUDE_DRAFTS: bool = False
    HOME_PREVIEW_COUNT: int = 5
    POSTS_PER_PAGE: int = 10

    # CouchDB
    COUCHDB_HOST: str = "localhost"
    COUCHDB_PORT: int = 5984
    COUCHDB_USERNAME: str = "admin"
    COUCHDB_PASSWORD: str = ""
    COUCHDB_DATABASE: str = "obsidian_db"
    BLOG_PREFIX: str = "blog/"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def couchdb_url(self) -> str:
        return f"http://{self.COUCHDB_USERNAME}:{self.COUCHDB_PASSWORD}@{self.COUCHDB_HOST}:{self.COUCHDB_PORT}"

    @property
    def content_extensions(self) -> Tuple[str, ...]:
        exts = []
        for raw in self.CONTENT_EXTENSIONS.split(","):
            ext = raw.strip().lower()
            if not ext:
                continue
            exts.append(ext if ext.startswith(".") else f".{ext}")
        return tuple(exts)


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
