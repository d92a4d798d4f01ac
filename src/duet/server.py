"""HTTP boundary for chat and search."""

from __future__ import annotations

from typing import Callable, Literal, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from .bootstrap import build_completion_client, build_orchestrator, build_searcher
from .config import Settings, get_settings
from .errors import InvalidInputError
from .orchestrator import Orchestrator
from .search import WebSearcher
from .types import TEXT_KIND, Turn

CHAT_FAILED = "Failed to process chat request"
SEARCH_FAILED = "Failed to perform search"
QUERY_REQUIRED = "Query is required"
AGENT_ONLY = "Search can only be performed through the agent system"


class TurnPayload(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str
    kind: str = TEXT_KIND

    def to_turn(self) -> Turn:
        return Turn(role=self.role, content=self.content, kind=self.kind)


class ChatPayload(BaseModel):
    message: str = Field("", description="User message to answer")
    history: list[TurnPayload] = Field(default_factory=list, description="Prior turns of the conversation")


class ChatResponse(BaseModel):
    response: str
    observation: Optional[str] = None
    status: str


class SearchPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    agent_request: bool = Field(False, alias="agentRequest")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    settings: Optional[Settings] = None,
    *,
    orchestrator_factory: Optional[Callable[[], Orchestrator]] = None,
    searcher: Optional[WebSearcher] = None,
) -> FastAPI:
    """Create the HTTP app.

    Each chat request gets its own orchestrator, so transcripts never cross
    requests. Without an explicit factory the provider credential is checked here.
    """
    if orchestrator_factory is None or searcher is None:
        settings = settings or get_settings()
    web_searcher = searcher or build_searcher(settings)
    if orchestrator_factory is None:
        resolved = settings
        client = build_completion_client(resolved)

        def _default_factory() -> Orchestrator:
            return build_orchestrator(resolved, client=client, searcher=web_searcher)

        orchestrator_factory = _default_factory
    make_orchestrator = orchestrator_factory

    app = FastAPI(title="duet", version="0.1.0")

    @app.post("/api/chat", response_model=ChatResponse)
    async def chat(payload: ChatPayload):
        history = [item.to_turn() for item in payload.history]
        try:
            orchestrator = make_orchestrator()
            result = await orchestrator.chat(payload.message, history)
        except InvalidInputError as exc:
            return _error(400, str(exc))
        except Exception:
            logger.exception("server.chat.error")
            return _error(500, CHAT_FAILED)
        return ChatResponse(response=result.response, observation=result.observation, status=result.status.value)

    @app.post("/api/search")
    async def search(payload: SearchPayload):
        if not payload.query:
            return _error(400, QUERY_REQUIRED)
        if not payload.agent_request:
            return _error(403, AGENT_ONLY)
        try:
            results = await web_searcher.search(payload.query)
        except Exception:
            logger.exception("server.search.error")
            return _error(500, SEARCH_FAILED)
        return {"results": "\n".join(result.description for result in results)}

    return app
