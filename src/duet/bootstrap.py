"""Wire a ready-to-use orchestrator from settings."""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from .actions import default_registry
from .agents import PlanningAgent, SpeakingAgent
from .completion import API_KEY_NOT_CONFIGURED_ERROR, CompletionClient, OpenAICompletionClient
from .config import Settings, get_settings
from .errors import ApiKeyNotConfiguredError
from .orchestrator import Orchestrator
from .prompts import render_planner_prompt
from .search import DuckDuckGoSearch, WebSearcher

DEFAULT_CALLER_ID = "demo-user"


def build_searcher(settings: Settings) -> DuckDuckGoSearch:
    return DuckDuckGoSearch(max_results=settings.search_max_results, timeout=settings.search_timeout_seconds)


def build_completion_client(settings: Settings) -> OpenAICompletionClient:
    """Build the provider adapter; a missing credential is a startup failure."""
    if not settings.api_key or not settings.api_key.strip():
        raise ApiKeyNotConfiguredError(API_KEY_NOT_CONFIGURED_ERROR)
    return OpenAICompletionClient(
        settings.api_key,
        api_base=settings.api_base,
        timeout=settings.request_timeout_seconds,
    )


def build_orchestrator(
    settings: Optional[Settings] = None,
    *,
    client: Optional[CompletionClient] = None,
    searcher: Optional[WebSearcher] = None,
    caller_id: str = DEFAULT_CALLER_ID,
    data: Any = None,
) -> Orchestrator:
    """Build an orchestrator with fresh agents and the built-in actions.

    Args:
        settings: Settings to use, loaded from the environment when omitted
        client: Completion client override, built from settings when omitted
        searcher: Web search override, DuckDuckGo when omitted
        caller_id: Opaque identifier passed to action handlers
        data: Opaque data context passed to action handlers

    Returns:
        Orchestrator instance owning one planner and one speaker
    """
    settings = settings or get_settings()
    client = client or build_completion_client(settings)
    registry = default_registry(searcher or build_searcher(settings))

    planner_prompt = render_planner_prompt((item.name, item.description) for item in registry.descriptors())
    planner = PlanningAgent(
        client,
        system=planner_prompt,
        model=settings.planner_model,
        temperature=settings.planner_temperature,
    )
    speaker = SpeakingAgent(
        client,
        model=settings.speaker_model,
        temperature=settings.speaker_temperature,
    )
    logger.debug("bootstrap.orchestrator planner={} speaker={}", settings.planner_model, settings.speaker_model)
    return Orchestrator(
        planner,
        speaker,
        registry,
        max_turns=settings.max_turns,
        caller_id=caller_id,
        data=data,
        step_timeout=settings.step_timeout_seconds,
    )
