from pathlib import Path

from pydantic import Field
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

    # Content
    POSTS_DIR: str = "_posts"
    SITE_ROOT: str = ""
    SITE_URL: str = "http://localhost:4000"
    WORDS_PER_MINUTE: int = Field(default=200, gt=0)

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key (empty disables the check)
    API_KEY: str = ""

    @property
    def posts_path(self) -> Path:
        posts = Path(self.POSTS_DIR)
        if posts.is_absolute() or not self.SITE_ROOT:
            return posts
        return Path(self.SITE_ROOT) / posts


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
