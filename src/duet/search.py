"""Web search collaborator."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

from duckduckgo_search import DDGS
from loguru import logger

from .errors import SearchError

DEFAULT_MAX_RESULTS = 5
DEFAULT_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class SearchResult:
    title: str
    url: str
    description: str


class WebSearcher(Protocol):
    async def search(self, query: str) -> list[SearchResult]: ...


class DuckDuckGoSearch:
    """DuckDuckGo text search run off the event loop with a timeout."""

    def __init__(
        self,
        *,
        max_results: int = DEFAULT_MAX_RESULTS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._max_results = max_results
        self._timeout = timeout

    def _search_sync(self, query: str) -> list[dict[str, Any]]:
        with DDGS() as ddgs:
            return list(ddgs.text(query, max_results=self._max_results) or [])

    async def search(self, query: str) -> list[SearchResult]:
        logger.info("search.start query={!r} max_results={}", query, self._max_results)
        try:
            hits = await asyncio.wait_for(asyncio.to_thread(self._search_sync, query), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise SearchError(f"search timed out after {self._timeout:.1f}s") from exc
        except Exception as exc:
            raise SearchError(f"search failed: {exc!s}") from exc

        results = [_to_result(hit) for hit in hits if isinstance(hit, dict)]
        logger.info("search.end query={!r} results={}", query, len(results))
        return results


def _to_result(hit: dict[str, Any]) -> SearchResult:
    return SearchResult(
        title=str(hit.get("title") or ""),
        url=str(hit.get("href") or hit.get("url") or ""),
        description=str(hit.get("body") or hit.get("description") or ""),
    )
