from typing import Generator

from sqlmodel import SQLModel, Session, create_engine

from .config import settings

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, connect_args=_connect_args)


def init_db() -> None:
    """Tabloları (puzzles, jumble_words) yoksa oluşturur."""
    # models import edilmeden metadata boş kalır
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
