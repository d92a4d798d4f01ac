import time

import pytest

from duet import search as search_module
from duet.errors import SearchError
from duet.search import DuckDuckGoSearch, SearchResult


class _FakeDDGS:
    hits: list[object] = []
    error: Exception | None = None
    delay: float = 0.0
    calls: list[tuple[str, int]] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def text(self, query: str, max_results: int = 5):
        type(self).calls.append((query, max_results))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.hits)


@pytest.fixture
def fake_ddgs(monkeypatch):
    class _Patched(_FakeDDGS):
        hits = []
        error = None
        delay = 0.0
        calls = []

    monkeypatch.setattr(search_module, "DDGS", _Patched)
    return _Patched


@pytest.mark.asyncio
async def test_search_maps_body_to_description(fake_ddgs) -> None:
    fake_ddgs.hits = [
        {"title": "Python", "href": "https://python.org", "body": "Python 3.13 released"},
        "not-a-dict",
        {"title": "Docs", "href": "https://docs.python.org"},
    ]

    results = await DuckDuckGoSearch(max_results=3).search("python release")

    assert fake_ddgs.calls == [("python release", 3)]
    assert results == [
        SearchResult(title="Python", url="https://python.org", description="Python 3.13 released"),
        SearchResult(title="Docs", url="https://docs.python.org", description=""),
    ]


@pytest.mark.asyncio
async def test_search_wraps_provider_failure(fake_ddgs) -> None:
    fake_ddgs.error = RuntimeError("ratelimit")

    with pytest.raises(SearchError, match="ratelimit"):
        await DuckDuckGoSearch().search("anything")


@pytest.mark.asyncio
async def test_search_times_out(fake_ddgs) -> None:
    fake_ddgs.delay = 0.5

    with pytest.raises(SearchError, match="timed out"):
        await DuckDuckGoSearch(timeout=0.05).search("slow")
