"""Conversation data types shared by agents and the orchestrator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from .errors import MalformedMessageError

Role = Literal["system", "user", "assistant"]
ROLES: frozenset[str] = frozenset({"system", "user", "assistant"})
TEXT_KIND = "text"
TURN_FIELDS = ("role", "content", "kind")


@dataclass(frozen=True)
class Turn:
    """One role-tagged text unit of a transcript."""

    role: Role
    content: str
    kind: str = TEXT_KIND

    @classmethod
    def from_mapping(cls, value: Turn | Mapping[str, Any] | Any) -> Turn:
        """Build a turn from a mapping or a turn-like object, validating all fields."""
        if isinstance(value, Turn):
            return value

        fields: dict[str, Any] = {}
        for name in TURN_FIELDS:
            if isinstance(value, Mapping):
                if name not in value:
                    raise MalformedMessageError(_missing_fields_message(value))
                fields[name] = value[name]
            elif hasattr(value, name):
                fields[name] = getattr(value, name)
            else:
                raise MalformedMessageError(_missing_fields_message(value))

        role = fields["role"]
        if role not in ROLES:
            raise MalformedMessageError(f"Unsupported message role: {role!r}")
        if not isinstance(fields["content"], str):
            raise MalformedMessageError("Message content must be a string.")
        return cls(role=role, content=fields["content"], kind=str(fields["kind"]))

    def to_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


def _missing_fields_message(value: object) -> str:
    return f"Each message must contain 'role', 'content', and 'kind'. Got: {value!r}"


class ChatStatus(str, Enum):
    OK = "ok"
    UNKNOWN_ACTION = "unknown_action"
    ACTION_ERROR = "action_error"
    AGENT_ERROR = "agent_error"
    MAX_TURNS = "max_turns"


@dataclass(frozen=True)
class ChatResult:
    """Result of one orchestrated chat turnaround.

    ``response`` is always displayable text; ``status`` tells callers which path
    produced it.
    """

    response: str
    observation: str | None = None
    status: ChatStatus = ChatStatus.OK
    turns: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ChatStatus.OK
