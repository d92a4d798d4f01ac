"""Stateful planning and speaking agents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Union

from loguru import logger

from .completion import CompletionClient
from .errors import MalformedMessageError
from .prompts import PLANNER_PROMPT, SPEAKER_PROMPT
from .types import Turn

DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 1.0

AgentInput = Union[str, Sequence[Union[Turn, Mapping[str, Any]]]]


class ConversationAgent:
    """Transcript holder around a completion client.

    Every call appends its input and the model reply to the transcript, so a
    single instance accumulates one conversation.
    """

    name: ClassVar[str] = "agent"
    default_system: ClassVar[str] = ""

    def __init__(
        self,
        client: CompletionClient,
        *,
        system: str | Sequence[Turn | Mapping[str, Any]] | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        """Initialize the agent.

        Args:
            client: Completion capability used for every call
            system: Persona text seeded as one system turn, or an explicit transcript
            model: Model identifier sent to the provider
            temperature: Sampling temperature sent to the provider
        """
        self._client = client
        self._model = model
        self._temperature = temperature
        self._system = self.default_system if system is None else system
        self._transcript: list[Turn] = self._seed()

    @property
    def model(self) -> str:
        return self._model

    @property
    def temperature(self) -> float:
        return self._temperature

    @property
    def transcript(self) -> list[Turn]:
        """Return a copy of the accumulated transcript."""
        return list(self._transcript)

    def reset(self) -> None:
        """Start a fresh transcript from the configured persona."""
        self._transcript = self._seed()

    def _seed(self) -> list[Turn]:
        if isinstance(self._system, str):
            if not self._system:
                return []
            return [Turn(role="system", content=self._system)]
        return [Turn.from_mapping(item) for item in self._system]

    def _append_input(self, message: AgentInput) -> None:
        if isinstance(message, str):
            self._transcript.append(Turn(role="user", content=message))
            return
        for item in message:
            try:
                turn = Turn.from_mapping(item)
            except MalformedMessageError:
                logger.error("{}.message.invalid message={!r}", self.name, item)
                raise
            self._transcript.append(turn)

    async def _respond(self, message: AgentInput) -> str:
        self._append_input(message)
        logger.info("{}.request model={} turns={}", self.name, self._model, len(self._transcript))
        result = await self._client.complete(
            list(self._transcript),
            model=self._model,
            temperature=self._temperature,
        )
        self._transcript.append(Turn(role="assistant", content=result))
        logger.debug("{}.response chars={}", self.name, len(result))
        return result


class PlanningAgent(ConversationAgent):
    """Decides whether an action is needed and emits directives."""

    name = "planner"
    default_system = PLANNER_PROMPT

    async def plan(self, message: AgentInput) -> str:
        return await self._respond(message)


class SpeakingAgent(ConversationAgent):
    """Turns accumulated context into the user-facing reply."""

    name = "speaker"
    default_system = SPEAKER_PROMPT

    async def call(self, message: AgentInput) -> str:
        return await self._respond(message)
