"""Application-level exception types for duet."""

from __future__ import annotations


class DuetError(Exception):
    """Base exception for duet."""


class ConfigurationError(DuetError):
    """Base exception for configuration and startup validation errors."""


class ApiKeyNotConfiguredError(ConfigurationError):
    """Raised when the completion provider credential is missing at startup."""


class InvalidInputError(DuetError):
    """Raised when a chat message is empty or not a string."""


class MalformedMessageError(DuetError):
    """Raised when a turn handed to an agent is missing role, content or kind."""


class ProviderError(DuetError):
    """Raised for any failure of the completion provider."""


class AuthenticationError(ProviderError):
    """Raised when no credential is available or the provider rejects it."""


class SearchError(DuetError):
    """Raised when the web search collaborator fails."""


class UnknownActionError(DuetError):
    """Describes a directive naming an action that is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown action: {name}. Available actions: {', '.join(self.available)}")


class ActionExecutionError(DuetError):
    """Describes a registered action handler that failed."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Error executing {name}: {detail}")
