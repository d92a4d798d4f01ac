"""Action registry and built-in actions."""

from __future__ import annotations

import time
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger

from .prompts import WEB_SEARCH_DESCRIPTION
from .search import WebSearcher

ActionHandler = Callable[[str, str, Any], Awaitable[str]]

WEB_SEARCH = "web_search"
LOG_INPUT_WIDTH = 60


def _shorten_text(text: str, width: int = LOG_INPUT_WIDTH, placeholder: str = "...") -> str:
    if len(text) <= width:
        return text
    available = width - len(placeholder)
    if available <= 0:
        return placeholder
    return text[:available] + placeholder


@dataclass(frozen=True)
class ActionDescriptor:
    """Action metadata and runtime handle."""

    name: str
    description: str
    handler: ActionHandler


class ActionRegistry:
    """Name-keyed table of asynchronous action handlers.

    Handlers take ``(action_input, caller_id, data)`` and return text. Registering
    an existing name replaces the previous handler.
    """

    def __init__(self) -> None:
        self._actions: dict[str, ActionDescriptor] = {}

    def register(self, name: str, handler: ActionHandler, *, description: str = "") -> None:
        if name in self._actions:
            logger.debug("action.register.replace name={}", name)
        self._actions[name] = ActionDescriptor(
            name=name,
            description=description,
            handler=self._wrap_handler(name, handler),
        )

    def resolve(self, name: str) -> Optional[ActionHandler]:
        descriptor = self._actions.get(name)
        return descriptor.handler if descriptor is not None else None

    def names(self) -> list[str]:
        return list(self._actions)

    def descriptors(self) -> list[ActionDescriptor]:
        return list(self._actions.values())

    def copy(self) -> ActionRegistry:
        clone = ActionRegistry()
        clone._actions = dict(self._actions)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def _wrap_handler(self, name: str, handler: ActionHandler) -> ActionHandler:
        async def _handler(action_input: str, caller_id: str, data: Any) -> str:
            logger.info(
                "action.call.start name={} caller={} input={!r}",
                name,
                caller_id,
                _shorten_text(action_input),
            )
            start = time.monotonic()
            try:
                return await handler(action_input, caller_id, data)
            except Exception:
                logger.exception("action.call.error name={}", name)
                raise
            finally:
                duration = time.monotonic() - start
                logger.info("action.call.end name={} duration={:.3f}ms", name, duration * 1000)

        return _handler


def create_web_search_action(searcher: WebSearcher) -> ActionHandler:
    """Create the ``web_search`` handler: query in, newline-joined descriptions out."""

    async def web_search(action_input: str, _caller_id: str, _data: Any) -> str:
        results = await searcher.search(action_input)
        return "\n".join(result.description for result in results)

    return web_search


def default_registry(searcher: WebSearcher) -> ActionRegistry:
    registry = ActionRegistry()
    registry.register(WEB_SEARCH, create_web_search_action(searcher), description=WEB_SEARCH_DESCRIPTION)
    return registry
