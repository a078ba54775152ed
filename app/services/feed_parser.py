import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..errors import MalformedPayload

MAX_CLUES = 6

# /**/jsonCallback({...}); gibi zarfları yakalar
_JSONP_RE = re.compile(r"^\s*(?:/\*\*/)?\s*[A-Za-z_$][\w$.]*\s*\((.*)\)\s*;?\s*$", re.DOTALL)
_MARKERS_RE = re.compile(r"[\[\]{}]")
_SPACES_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ClueComplete:
    index: int
    word: str
    answer: str
    positions: str


@dataclass(frozen=True)
class CluePartial:
    index: int
    word: str
    answer: str


@dataclass(frozen=True)
class ClueMissing:
    index: int
    word: str


Clue = Union[ClueComplete, CluePartial, ClueMissing]


@dataclass
class FeedPuzzle:
    caption: str
    image_url: str
    raw_solution: str
    feed_date: Optional[str] = None
    clues: List[Clue] = field(default_factory=list)


def unwrap_jsonp(text: str) -> str:
    """Callback zarfı varsa içini döner, yoksa metni olduğu gibi bırakır. Baştaki BOM atılır."""
    text = text.lstrip("\ufeff")
    m = _JSONP_RE.match(text)
    if m:
        return m.group(1)
    return text.strip()


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _clue_at(clues: Dict[str, Any], i: int) -> Optional[Clue]:
    word = _text(clues.get(f"c{i}"))
    answer = _text(clues.get(f"a{i}"))
    positions = _text(clues.get(f"o{i}"))

    if not (word or answer or positions):
        return None
    if not answer:
        return ClueMissing(index=i, word=word)
    if not positions:
        return CluePartial(index=i, word=word, answer=answer)
    return ClueComplete(index=i, word=word, answer=answer, positions=positions)


def _required(data: Dict[str, Any], key: str, sub: Optional[str] = None) -> str:
    value = data.get(key)
    if sub is not None:
        value = value.get(sub) if isinstance(value, dict) else None
    if value is None:
        name = f"{key}.{sub}" if sub else key
        raise MalformedPayload(f"Puzzle payload is missing '{name}'")
    return str(value)


def parse_feed(text: str) -> FeedPuzzle:
    """
    Sağlayıcının ham yanıtını yapılandırılmış kayda çevirir.
    - Caption.v1, Image, Solution.s1 zorunlu
    - Clues.c1..c6 / a1..a6 / o1..o6 sırasıyla okunur
    """
    if text is None:
        raise MalformedPayload("Empty puzzle payload")

    try:
        data = json.loads(unwrap_jsonp(text))
    except ValueError as e:
        raise MalformedPayload(f"Puzzle payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPayload("Puzzle payload must be a JSON object")

    raw_clues = data.get("Clues") or {}
    if not isinstance(raw_clues, dict):
        raise MalformedPayload("'Clues' must be a JSON object")

    clues: List[Clue] = []
    for i in range(1, MAX_CLUES + 1):
        clue = _clue_at(raw_clues, i)
        if clue is not None:
            clues.append(clue)

    feed_date = data.get("Date")
    return FeedPuzzle(
        caption=_required(data, "Caption", "v1"),
        image_url=_required(data, "Image"),
        raw_solution=_required(data, "Solution", "s1"),
        feed_date=str(feed_date) if feed_date is not None else None,
        clues=clues,
    )


def clean_solution(raw: str) -> str:
    """Daire işaretlerini ([ ] { }) siler, boşlukları tek boşluğa indirir."""
    return _SPACES_RE.sub(" ", _MARKERS_RE.sub("", raw or "")).strip()
