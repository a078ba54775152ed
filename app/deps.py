from typing import Generator

from sqlmodel import Session

from .config import Settings, settings
from .db import get_session


def get_db() -> Generator[Session, None, None]:
    yield from get_session()


def get_settings() -> Settings:
    """Ingestion ayarları; testlerde dependency_overrides ile değiştirilir."""
    return settings
