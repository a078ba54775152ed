from typing import List, Literal, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./jumble.db"
    DATABASE_ECHO: bool = False
    FEED_VARIANT: Literal["current", "legacy"] = "current"
    FEED_BASE_URL: str = "https://www.uclick.com/puzzles/tmjmf/data"
    FEED_PREFIX: str = "tmjmf"
    FEED_CACHE_BUST_PARAM: str = "_"
    FEED_TIMEOUT: Optional[float] = None
    DEFAULT_TZ: str = "America/New_York"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"

settings = Settings()
