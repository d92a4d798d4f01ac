"""Plan, act and respond turn loop."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar, Union

from loguru import logger

from .actions import ActionRegistry
from .agents import AgentInput, PlanningAgent, SpeakingAgent
from .errors import ActionExecutionError, InvalidInputError, UnknownActionError
from .parsing import ActionDirective, parse_action
from .types import ChatResult, ChatStatus, Turn

DEFAULT_MAX_TURNS = 3
DEFAULT_CALLER_ID = "anonymous"
MAX_TURNS_REACHED = "Maximum turns reached"

T = TypeVar("T")
HistoryItem = Union[Turn, Mapping[str, Any]]


@dataclass
class Session:
    """Mutable state of one ``chat`` invocation."""

    message: str
    prompt: AgentInput
    turns: int = 0
    observation: str | None = None


class Orchestrator:
    """Routes one user message through planner, actions and speaker.

    Transcripts live in the two agents, so reusing an instance keeps the
    conversation going. Concurrent ``chat`` calls on one instance run one at a time.
    """

    def __init__(
        self,
        planner: PlanningAgent,
        speaker: SpeakingAgent,
        registry: ActionRegistry,
        *,
        max_turns: int = DEFAULT_MAX_TURNS,
        caller_id: str = DEFAULT_CALLER_ID,
        data: Any = None,
        step_timeout: float | None = None,
    ) -> None:
        if max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        self._planner = planner
        self._speaker = speaker
        self._registry = registry.copy()
        self._max_turns = max_turns
        self._caller_id = caller_id
        self._data = data
        self._step_timeout = step_timeout
        self._lock = asyncio.Lock()
        logger.debug(
            "orchestrator.init max_turns={} actions={} step_timeout={}",
            max_turns,
            ",".join(self._registry.names()),
            step_timeout,
        )

    @property
    def planner(self) -> PlanningAgent:
        return self._planner

    @property
    def speaker(self) -> SpeakingAgent:
        return self._speaker

    @property
    def max_turns(self) -> int:
        return self._max_turns

    @property
    def action_names(self) -> list[str]:
        return self._registry.names()

    def reset(self) -> None:
        """Drop both transcripts and start over from the personas."""
        self._planner.reset()
        self._speaker.reset()

    async def chat(self, message: str, history: Sequence[HistoryItem] = ()) -> ChatResult:
        """Answer ``message`` given the prior ``history`` turns.

        Raises:
            InvalidInputError: If ``message`` is empty or not a string.
        """
        if not isinstance(message, str) or not message:
            raise InvalidInputError("Message is required")

        prompt: AgentInput = [*history, Turn(role="user", content=message)] if history else message
        session = Session(message=message, prompt=prompt)
        async with self._lock:
            result = await self._run(session)
        logger.info("orchestrator.finish status={} turns={}", result.status.value, result.turns)
        return result

    async def _run(self, session: Session) -> ChatResult:
        next_prompt: AgentInput = session.prompt

        while session.turns < self._max_turns:
            session.turns += 1
            logger.info("orchestrator.turn.start turn={}/{}", session.turns, self._max_turns)
            try:
                plan = await self._bounded(self._planner.plan(next_prompt))
                directive = parse_action(plan)
                if not isinstance(directive, ActionDirective):
                    logger.info("orchestrator.respond turn={}", session.turns)
                    reply = await self._speak(session, plan)
                    return ChatResult(reply, session.observation, ChatStatus.OK, session.turns)

                logger.info("orchestrator.action name={} turn={}", directive.name, session.turns)
                handler = self._registry.resolve(directive.name)
                if handler is None:
                    error = UnknownActionError(directive.name, self._registry.names())
                    logger.warning("orchestrator.action.unknown name={}", directive.name)
                    return ChatResult(str(error), None, ChatStatus.UNKNOWN_ACTION, session.turns)

                try:
                    observation = await self._bounded(handler(directive.input, self._caller_id, self._data))
                except Exception as exc:
                    error = ActionExecutionError(directive.name, _describe(exc))
                    logger.warning("orchestrator.action.error name={} error={}", directive.name, error.detail)
                    return ChatResult(str(error), None, ChatStatus.ACTION_ERROR, session.turns)

                session.observation = observation
                next_prompt = f"Observation: {observation}"
            except Exception as exc:
                logger.exception("orchestrator.loop.error turn={}", session.turns)
                return ChatResult(f"Error in agent loop: {_describe(exc)}", None, ChatStatus.AGENT_ERROR, session.turns)

        logger.warning("orchestrator.max_turns max_turns={}", self._max_turns)
        return ChatResult(MAX_TURNS_REACHED, None, ChatStatus.MAX_TURNS, session.turns)

    async def _speak(self, session: Session, plan: str) -> str:
        context = f"General Context: {session.message}\nPlanner Context: {plan}"
        if session.observation:
            context += f"\nAdditional Context: {session.observation}"
        handoff = [*self._planner.transcript, Turn(role="user", content=context)]
        return await self._bounded(self._speaker.call(handoff))

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self._step_timeout is None:
            return await awaitable
        async with asyncio.timeout(self._step_timeout):
            return await awaitable


def _describe(exc: BaseException) -> str:
    if isinstance(exc, TimeoutError) and not str(exc):
        return "timed out"
    return str(exc) or type(exc).__name__
