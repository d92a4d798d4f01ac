"""Test doubles for the completion and search collaborators."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from duet.search import SearchResult
from duet.types import Turn


@dataclass
class CompletionCall:
    turns: list[Turn]
    model: str
    temperature: float


@dataclass
class FakeCompletionClient:
    """Returns scripted replies in order and records every request."""

    replies: list[str | BaseException] = field(default_factory=list)
    calls: list[CompletionCall] = field(default_factory=list)

    async def complete(self, turns: Sequence[Turn], *, model: str, temperature: float) -> str:
        self.calls.append(CompletionCall(list(turns), model, temperature))
        if not self.replies:
            raise AssertionError("unexpected completion call")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@dataclass
class FakeSearcher:
    results: list[SearchResult] = field(default_factory=list)
    error: BaseException | None = None
    queries: list[str] = field(default_factory=list)

    async def search(self, query: str) -> list[SearchResult]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results)
