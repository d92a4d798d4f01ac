"""Action directive extraction from planner output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

ACTION_RE = re.compile(r"^Action: (\w+): (.*)\Z", re.ASCII)


@dataclass(frozen=True)
class NoAction:
    """Planner output without any directive line."""


@dataclass(frozen=True)
class ActionDirective:
    name: str
    input: str
    line: int


ParsedOutput = Union[NoAction, ActionDirective]


def parse_action(text: str) -> ParsedOutput:
    """Return the first ``Action: <name>: <input>`` line of ``text``.

    Lines end at newlines only, with one trailing carriage return dropped. Later
    directive lines are ignored. ``input`` is the rest of the line verbatim and may
    contain colons or control characters; ``line`` is the zero-based index of the
    matching line.
    """
    for idx, line in enumerate(text.split("\n")):
        match = ACTION_RE.match(line.removesuffix("\r"))
        if match is not None:
            return ActionDirective(name=match.group(1), input=match.group(2), line=idx)
    return NoAction()
