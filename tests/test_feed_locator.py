from datetime import date, datetime, timezone

import pytest
import requests

from app.errors import FetchExhausted
from app.services.feed_locator import (
    candidate_urls,
    current_candidates,
    fetch_first,
    legacy_candidates,
)
from tests.conftest import FakeHttp, FakeResponse

DAY = date(2024, 3, 1)
NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_legacy_candidates_order():
    assert legacy_candidates(DAY, "https://feeds.test/data/", "tmjmf") == [
        "https://feeds.test/data/tmjmf20240301-data.json",
        "https://feeds.test/data/tmjmf20240301.json",
        "https://feeds.test/data/tmjmf20240301-data.php",
        "https://feeds.test/data/tmjmf20240301.php",
    ]


def test_current_candidate_has_date_and_cache_buster():
    urls = current_candidates(DAY, "https://feeds.test/data", "tmjmf", now=NOW)
    millis = int(NOW.timestamp() * 1000)
    assert urls == [f"https://feeds.test/data/tmjmf20240301-data.json?_={millis}"]


def test_caller_url_wins_for_both_variants(test_settings):
    assert candidate_urls(DAY, test_settings, json_url="https://x.test/a.json") == ["https://x.test/a.json"]

    legacy = test_settings.model_copy(update={"FEED_VARIANT": "legacy"})
    assert candidate_urls(DAY, legacy, json_url="https://x.test/a.json") == ["https://x.test/a.json"]
    assert len(candidate_urls(DAY, legacy)) == 4


def test_fetch_first_stops_at_first_success():
    urls = ["https://a.test/1", "https://a.test/2", "https://a.test/3"]
    http = FakeHttp({
        "https://a.test/1": FakeResponse(404, "", "Not Found"),
        "https://a.test/2": FakeResponse(200, "{}"),
        "https://a.test/3": FakeResponse(200, "never"),
    })

    result = fetch_first(urls, http=http)

    assert result.url == "https://a.test/2"
    assert result.body == "{}"
    assert http.calls == urls[:2]
    assert [a.url for a in result.attempts] == ["https://a.test/1"]


def test_fetch_first_survives_network_errors():
    http = FakeHttp({
        "https://a.test/1": requests.ConnectionError("connection refused"),
        "https://a.test/2": FakeResponse(204, ""),
    })
    result = fetch_first(["https://a.test/1", "https://a.test/2"], http=http)
    assert result.url == "https://a.test/2"
    assert result.attempts[0].reason == "connection refused"


def test_fetch_exhausted_carries_every_failure():
    http = FakeHttp({
        "https://a.test/1": requests.Timeout("timed out"),
        "https://a.test/2": FakeResponse(500, "", "Internal Server Error"),
    })

    with pytest.raises(FetchExhausted) as exc:
        fetch_first(["https://a.test/1", "https://a.test/2"], http=http)

    err = exc.value
    assert [a.url for a in err.attempts] == ["https://a.test/1", "https://a.test/2"]
    assert err.last_reason == "HTTP 500 Internal Server Error"
    assert "HTTP 500" in str(err)


def test_fetch_exhausted_on_no_candidates():
    with pytest.raises(FetchExhausted) as exc:
        fetch_first([], http=FakeHttp())
    assert exc.value.attempts == []
