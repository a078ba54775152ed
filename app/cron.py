"""
Zamanlanmış tetikleyici: günde bir kez bugünün bulmacasını çeker.

    python -m app.cron
    python -m app.cron --date 2024-03-01
    python -m app.cron --json-url https://example.com/tmjmf20240301-data.json

Örnek crontab:
    15 6 * * * cd /srv/jumble && .venv/bin/python -m app.cron
"""
import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from sqlmodel import Session

from .config import settings
from .db import engine, init_db
from .errors import IngestError
from .services.ingest import ingest_daily_puzzle

log = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch and store the daily Jumble puzzle.")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD (default: today)")
    parser.add_argument("--json-url", default=None, help="explicit feed URL to fetch")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init_db()

    with Session(engine) as session:
        try:
            result = ingest_daily_puzzle(session, settings, target_date=args.date, json_url=args.json_url)
        except IngestError:
            log.exception("Daily puzzle ingestion failed")
            return 1

    log.info(result.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
