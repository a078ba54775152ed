import datetime
from typing import List, Optional

from sqlmodel import SQLModel, Field, Relationship


class Puzzle(SQLModel, table=True):
    """
    Günlük Jumble bulmacası:
    - date: takvim günü (UNIQUE, aynı gün için ikinci satır eklenemez)
    - solution: köşeli/süslü parantez işaretleri temizlenmiş cevap
    - final_jumble: daire içindeki harflerden türetilen karışık kelime
    """
    __tablename__ = "puzzles"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: datetime.date = Field(index=True, unique=True)
    caption: str
    image_url: str
    solution: str
    final_jumble: str = ""
    final_jumble_answer: str = ""
    created_at: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.timezone.utc))

    words: List["JumbleWord"] = Relationship(
        back_populates="puzzle",
        sa_relationship_kwargs={"order_by": "JumbleWord.id"},
    )


class JumbleWord(SQLModel, table=True):
    """Bulmacaya ait tek bir karışık kelime + cevabı. Ebeveyni olmadan var olmaz."""
    __tablename__ = "jumble_words"

    id: Optional[int] = Field(default=None, primary_key=True)
    puzzle_id: int = Field(foreign_key="puzzles.id", index=True)
    jumbled_word: str
    answer: str

    puzzle: Optional[Puzzle] = Relationship(back_populates="words")
