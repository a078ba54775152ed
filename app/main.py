from datetime import date
import logging
from typing import List, Optional

from fastapi import FastAPI, Body, Depends, HTTPException, Query, Request, Response
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlmodel import Session, select

from .config import Settings, settings
from .db import init_db
from .deps import get_db, get_settings
from .errors import IngestError
from .models import Puzzle, JumbleWord
from .schemas import AnswerResponse, IngestRequest, IngestResponse, PuzzleRead
from .services.ingest import ingest_daily_puzzle

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(
    title="Daily Jumble API",
    version="1.0.0",
    description="Daily Jumble puzzle ingestion and read service"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@app.on_event("startup")
def on_startup():
    """Uygulama ayağa kalkarken DB tablolarını oluştur."""
    init_db()


@app.get("/")
def root():
    return {"status": "ok", "app": "Daily Jumble API"}


# ----------------------------------------------------
# GÜNLÜK BULMACA ALMA (scheduler / admin tetikler)
# ----------------------------------------------------


INGEST_PATH = "/api/v1/fetch-daily-jumble"


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    """Alma endpoint'inde hatalı gövde de { error } + 500 döner; diğer yollar FastAPI'nin 422'sini korur."""
    if request.url.path != INGEST_PATH:
        return await request_validation_exception_handler(request, exc)

    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = f"{where}: {first.get('msg', 'invalid')}" if where else first.get("msg", "invalid")
    log.warning("Rejected ingest request body: %s", errors)
    return JSONResponse(status_code=500, content={"error": f"Invalid request body ({detail})"}, headers=CORS_HEADERS)


@app.options(INGEST_PATH)
def fetch_daily_jumble_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post(INGEST_PATH, response_model=IngestResponse)
def fetch_daily_jumble(
    payload: Optional[IngestRequest] = Body(default=None),
    db: Session = Depends(get_db),
    cfg: Settings = Depends(get_settings),
):
    """
    Gövde yoksa bugünün bulmacası çekilir.
    Gövde { date, jsonUrl } ise o tarih / o URL kullanılır.
    Her hata { error } + 500 olarak döner, tekrar denenmez.
    """
    target_date = payload.date if payload else None
    json_url = payload.json_url if payload else None

    try:
        result = ingest_daily_puzzle(db, cfg, target_date=target_date, json_url=json_url)
    except IngestError as e:
        log.exception("Error ingesting daily puzzle")
        return JSONResponse(status_code=500, content={"error": str(e)}, headers=CORS_HEADERS)
    except Exception as e:
        log.exception("Unexpected error ingesting daily puzzle")
        return JSONResponse(status_code=500, content={"error": str(e)}, headers=CORS_HEADERS)

    puzzle = PuzzleRead.model_validate(result.puzzle) if result.puzzle else None
    return IngestResponse(success=True, message=result.message, puzzle=puzzle)


# ----------------------------------------------------
# OKUMA ENDPOINT'LERİ (ön yüz için)
# ----------------------------------------------------


@app.get("/api/v1/puzzles", response_model=List[PuzzleRead])
def list_puzzles(
    limit: int = Query(default=7, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """En yeni bulmacalar, tarihe göre azalan sırada, kelimeleriyle birlikte."""
    rows = db.exec(select(Puzzle).order_by(Puzzle.date.desc()).limit(limit)).all()
    return [PuzzleRead.model_validate(p) for p in rows]


@app.get("/api/v1/puzzles/{puzzle_date}", response_model=PuzzleRead)
def get_puzzle(puzzle_date: date, db: Session = Depends(get_db)):
    puzzle = db.exec(select(Puzzle).where(Puzzle.date == puzzle_date)).first()
    if not puzzle:
        raise HTTPException(status_code=404, detail="Puzzle not found")
    return PuzzleRead.model_validate(puzzle)


@app.get("/api/v1/jumble/{word}", response_model=AnswerResponse)
def jumble_answer(word: str, db: Session = Depends(get_db)):
    """
    Karışık kelimenin cevabı:
    - Önce jumble_words içinde (büyük/küçük harf duyarsız) aranır
    - Bulunamazsa günün Final Jumble'ı ile karşılaştırılır
    """
    key = word.strip().upper()

    row = db.exec(
        select(JumbleWord, Puzzle)
        .join(Puzzle, JumbleWord.puzzle_id == Puzzle.id)
        .where(func.upper(JumbleWord.jumbled_word) == key)
        .order_by(Puzzle.date.desc())
    ).first()
    if row:
        jw, puzzle = row
        return AnswerResponse(jumbled_word=jw.jumbled_word, answer=jw.answer, date=puzzle.date)

    puzzle = db.exec(
        select(Puzzle)
        .where(func.upper(Puzzle.final_jumble) == key)
        .order_by(Puzzle.date.desc())
    ).first()
    if puzzle:
        return AnswerResponse(
            jumbled_word=puzzle.final_jumble,
            answer=puzzle.final_jumble_answer,
            date=puzzle.date,
            final_jumble=True,
        )

    raise HTTPException(status_code=404, detail="Jumble not found")
