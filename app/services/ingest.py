import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from ..config import Settings
from ..errors import PersistenceError
from ..models import Puzzle, JumbleWord
from .feed_locator import candidate_urls, fetch_first
from .feed_parser import Clue, ClueMissing, FeedPuzzle, clean_solution, parse_feed
from .final_jumble import derive_final_jumble

log = logging.getLogger(__name__)


@dataclass
class IngestResult:
    created: bool
    message: str
    puzzle: Optional[Puzzle] = None


def today_in(tz_name: str, now: Optional[datetime] = None) -> date:
    """Verilen zaman diliminde "bugün". now verilmezse şu an kullanılır."""
    tz = ZoneInfo(tz_name)
    return now.astimezone(tz).date() if now else datetime.now(tz).date()


def find_puzzle(session: Session, target_date: date) -> Optional[Puzzle]:
    try:
        return session.exec(select(Puzzle).where(Puzzle.date == target_date)).first()
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to look up puzzle for {target_date}: {e}") from e


def build_words(clues: List[Clue]) -> List[JumbleWord]:
    """Karışık kelimesi ve cevabı olan ipuçlarından, sırası korunarak JumbleWord satırları üretir."""
    return [
        JumbleWord(jumbled_word=c.word, answer=c.answer)
        for c in clues
        if not isinstance(c, ClueMissing) and c.word
    ]


def check_feed_date(feed: FeedPuzzle, target_date: date) -> bool:
    """Akıştaki Date alanı (YYYYMMDD) istenen günle uyuşmuyorsa uyarı loglar; kayıt yine yapılır."""
    if not feed.feed_date:
        return True
    if feed.feed_date.strip() in (target_date.strftime("%Y%m%d"), target_date.isoformat()):
        return True
    log.warning("Feed date %s does not match requested date %s", feed.feed_date, target_date.isoformat())
    return False


def build_puzzle(target_date: date, feed: FeedPuzzle) -> Puzzle:
    solution = clean_solution(feed.raw_solution)
    return Puzzle(
        date=target_date,
        caption=feed.caption,
        image_url=feed.image_url,
        solution=solution,
        final_jumble=derive_final_jumble(feed.clues),
        final_jumble_answer=solution,
    )


def store_puzzle(session: Session, puzzle: Puzzle, words: List[JumbleWord]) -> Optional[Puzzle]:
    """
    Bulmaca + kelimeler tek transaction içinde yazılır.
    - Önce puzzle flush edilir (id alınır), sonra kelimeler bağlanır
    - Aynı tarih için UNIQUE ihlali olursa None döner (zaten var)
    - Diğer her hata rollback + PersistenceError
    """
    target_date = puzzle.date
    try:
        session.add(puzzle)
        session.flush()
        for w in words:
            w.puzzle_id = puzzle.id
        session.add_all(words)
        session.commit()
        session.refresh(puzzle)
    except IntegrityError as e:
        session.rollback()
        if find_puzzle(session, target_date) is not None:
            log.info("Puzzle for %s was inserted concurrently", target_date)
            return None
        raise PersistenceError(f"Failed to insert puzzle for {target_date}: {e}") from e
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f"Failed to insert puzzle for {target_date}: {e}") from e

    return puzzle


def ingest_daily_puzzle(
    session: Session,
    settings: Settings,
    target_date: Optional[date] = None,
    json_url: Optional[str] = None,
    http=None,
    now: Optional[datetime] = None,
) -> IngestResult:
    """
    Günlük bulmacayı sağlayıcıdan çekip veritabanına yazar.
    - Aynı tarih için kayıt varsa hiçbir şey çekilmez/yazılmaz
    - Hatalar IngestError alt sınıfları olarak yukarı fırlatılır
    """
    target_date = target_date or today_in(settings.DEFAULT_TZ, now)
    log.info("Fetching puzzle for date: %s", target_date.isoformat())

    if find_puzzle(session, target_date) is not None:
        msg = f"Puzzle for {target_date.isoformat()} already exists"
        log.info(msg)
        return IngestResult(created=False, message=msg)

    urls = candidate_urls(target_date, settings, json_url=json_url, now=now)
    fetched = fetch_first(urls, http=http, timeout=settings.FEED_TIMEOUT)
    feed = parse_feed(fetched.body)
    check_feed_date(feed, target_date)

    puzzle = build_puzzle(target_date, feed)
    words = build_words(feed.clues)

    log.info("Inserting new puzzle for %s (%d words)", target_date.isoformat(), len(words))
    stored = store_puzzle(session, puzzle, words)
    if stored is None:
        msg = f"Puzzle for {target_date.isoformat()} already exists"
        return IngestResult(created=False, message=msg)

    log.info("Successfully added puzzle for %s", target_date.isoformat())
    return IngestResult(created=True, message="Puzzle added successfully", puzzle=stored)
