"""duet - plan, act, then speak."""

from .actions import ActionRegistry
from .agents import PlanningAgent, SpeakingAgent
from .orchestrator import Orchestrator
from .types import ChatResult, ChatStatus, Turn

__version__ = "0.1.0"

__all__ = [
    "ActionRegistry",
    "ChatResult",
    "ChatStatus",
    "Orchestrator",
    "PlanningAgent",
    "SpeakingAgent",
    "Turn",
]
