import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class IngestRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: Optional[datetime.date] = None
    json_url: Optional[str] = Field(default=None, alias="jsonUrl")


class JumbleWordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    jumbled_word: str
    answer: str


class PuzzleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime.date
    caption: str
    image_url: str
    solution: str
    final_jumble: str
    final_jumble_answer: str
    words: List[JumbleWordRead] = []


class IngestResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    puzzle: Optional[PuzzleRead] = None


class AnswerResponse(BaseModel):
    jumbled_word: str
    answer: str
    date: datetime.date
    final_jumble: bool = False
