import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional

import requests

from ..config import Settings
from ..errors import FetchAttempt, FetchExhausted

log = logging.getLogger(__name__)

LEGACY_SUFFIXES = ("-data.json", ".json", "-data.php", ".php")


@dataclass
class FetchResult:
    """Başarılı olan ilk aday: URL + gövde + öncesindeki başarısız denemeler."""
    url: str
    body: str
    attempts: List[FetchAttempt] = field(default_factory=list)


def legacy_candidates(target_date: date, base_url: str, prefix: str) -> List[str]:
    """Eski sağlayıcı düzeni: sabit yol/uzantı kombinasyonlarını sırayla dener."""
    stamp = target_date.strftime("%Y%m%d")
    base = base_url.rstrip("/")
    return [f"{base}/{prefix}{stamp}{suffix}" for suffix in LEGACY_SUFFIXES]


def current_candidates(
    target_date: date,
    base_url: str,
    prefix: str,
    json_url: Optional[str] = None,
    cache_bust_param: str = "_",
    now: Optional[datetime] = None,
) -> List[str]:
    """
    Güncel düzen:
    - Çağıran bir URL verdiyse yalnızca o denenir.
    - Yoksa tarihi gömülü tek bir URL + önbellek kırıcı sorgu parametresi üretilir.
    """
    if json_url:
        return [json_url]

    now = now or datetime.now(timezone.utc)
    stamp = target_date.strftime("%Y%m%d")
    millis = int(now.timestamp() * 1000)
    return [f"{base_url.rstrip('/')}/{prefix}{stamp}-data.json?{cache_bust_param}={millis}"]


def candidate_urls(
    target_date: date,
    settings: Settings,
    json_url: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[str]:
    if settings.FEED_VARIANT == "legacy" and not json_url:
        return legacy_candidates(target_date, settings.FEED_BASE_URL, settings.FEED_PREFIX)
    return current_candidates(
        target_date,
        settings.FEED_BASE_URL,
        settings.FEED_PREFIX,
        json_url=json_url,
        cache_bust_param=settings.FEED_CACHE_BUST_PARAM,
        now=now,
    )


def fetch_first(urls: List[str], http=None, timeout: Optional[float] = None) -> FetchResult:
    """
    Adayları sırayla GET eder, ilk 2xx yanıtta durur.
    Tekrar deneme ve bekleme yoktur. Hepsi başarısızsa FetchExhausted fırlatır.
    """
    http = http or requests
    attempts: List[FetchAttempt] = []

    for url in urls:
        log.info("Trying URL: %s", url)
        try:
            resp = http.get(url, timeout=timeout)
        except requests.RequestException as e:
            log.warning("Error fetching from %s: %s", url, e)
            attempts.append(FetchAttempt(url=url, reason=str(e) or e.__class__.__name__))
            continue

        if 200 <= resp.status_code < 300:
            log.info("Fetched puzzle feed from %s", url)
            return FetchResult(url=url, body=resp.text, attempts=attempts)

        reason = f"HTTP {resp.status_code} {getattr(resp, 'reason', '') or ''}".strip()
        log.warning("Failed to fetch from %s: %s", url, reason)
        attempts.append(FetchAttempt(url=url, reason=reason))

    raise FetchExhausted(attempts)
