from typing import Iterable, Tuple

from ..errors import InvalidPosition
from .feed_parser import Clue, ClueComplete


def parse_positions(raw: str) -> Tuple[int, ...]:
    """'2, 4' → (2, 4). Konumlar 1 tabanlıdır; 1'den küçük ya da sayı olmayan değer hatadır."""
    out = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            pos = int(token)
        except ValueError:
            raise InvalidPosition(f"Position {token!r} is not an integer")
        if pos < 1:
            raise InvalidPosition(f"Position {pos} must be 1 or greater")
        out.append(pos)
    return tuple(out)


def circled_letters(clue: ClueComplete) -> str:
    """Cevaptan daire içindeki harfleri, konum listesi sırasıyla çıkarır. Büyük/küçük harf korunur."""
    letters = []
    for pos in parse_positions(clue.positions):
        if pos > len(clue.answer):
            raise InvalidPosition(
                f"Position {pos} is out of range for answer {clue.answer!r} (clue {clue.index})"
            )
        letters.append(clue.answer[pos - 1])
    return "".join(letters)


def derive_final_jumble(clues: Iterable[Clue]) -> str:
    """
    Final Jumble:
    - Yalnızca cevabı ve konum listesi olan ipuçları katılır (ClueComplete)
    - Diğerleri sessizce atlanır; hiçbiri yoksa boş string döner
    - İpucu sırası korunur
    """
    return "".join(circled_letters(c) for c in clues if isinstance(c, ClueComplete))
