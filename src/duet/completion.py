"""Completion provider adapter."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import openai
from loguru import logger
from openai import AsyncOpenAI

from .errors import AuthenticationError, ProviderError
from .types import Turn

API_KEY_NOT_CONFIGURED_ERROR = "API key not configured. Set DUET_API_KEY or OPENAI_API_KEY."


class CompletionClient(Protocol):
    """Submit an ordered list of turns, receive one assistant text back."""

    async def complete(self, turns: Sequence[Turn], *, model: str, temperature: float) -> str: ...


class OpenAICompletionClient:
    """OpenAI chat completions behind the ``CompletionClient`` protocol.

    The SDK client is built on first use and cached on this instance. Each call is
    a single attempt; retries are left to callers.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        api_base: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._api_key = api_key.strip() if api_key else None
        self._api_base = api_base
        self._timeout = timeout
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(API_KEY_NOT_CONFIGURED_ERROR)
            logger.debug("completion.client.create api_base={}", self._api_base or "-")
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._api_base,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    async def complete(self, turns: Sequence[Turn], *, model: str, temperature: float) -> str:
        client = self._get_client()
        messages = [turn.to_message() for turn in turns]
        logger.info("completion.request model={} messages={}", model, len(messages))
        try:
            completion = await client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AuthenticationError(f"Provider rejected credentials: {exc!s}") from exc
        except openai.RateLimitError as exc:
            raise ProviderError(f"Rate limited by provider: {exc!s}") from exc
        except openai.APITimeoutError as exc:
            raise ProviderError(f"Provider request timed out: {exc!s}") from exc
        except openai.APIConnectionError as exc:
            raise ProviderError(f"Could not reach provider: {exc!s}") from exc
        except openai.APIError as exc:
            raise ProviderError(f"Provider error: {exc!s}") from exc

        choices = getattr(completion, "choices", None)
        if not choices:
            raise ProviderError("Provider returned no choices.")
        message = getattr(choices[0], "message", None)
        if message is None:
            raise ProviderError("Provider returned a choice without a message.")
        return getattr(message, "content", None) or ""
