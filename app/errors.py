from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FetchAttempt:
    """Tek bir aday URL denemesinin sonucu (başarısızlık nedeni ile)."""
    url: str
    reason: str


class IngestError(Exception):
    """Günlük bulmaca alma akışındaki tüm hataların tabanı."""


class FetchExhausted(IngestError):
    """Hiçbir aday URL başarılı yanıt vermedi."""

    def __init__(self, attempts: Optional[List[FetchAttempt]] = None):
        self.attempts = list(attempts or [])
        if self.attempts:
            last = self.attempts[-1]
            msg = f"Failed to fetch puzzle data from all URLs (last: {last.url}: {last.reason})"
        else:
            msg = "Failed to fetch puzzle data: no candidate URLs"
        super().__init__(msg)

    @property
    def last_reason(self) -> Optional[str]:
        return self.attempts[-1].reason if self.attempts else None


class MalformedPayload(IngestError):
    """Sarmalayıcı soyulduktan sonra gövde geçerli bir bulmaca JSON'u değil."""


class InvalidPosition(IngestError):
    """Daire içindeki harf konumu cevabın dışında ya da sayı değil."""


class PersistenceError(IngestError):
    """Veritabanı okuma/yazma isteğini reddetti."""
